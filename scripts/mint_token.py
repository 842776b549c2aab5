"""Print a bearer token whose ``sub`` is the given caller address.

Run with:
    SIGNING_KEY_PATH=keys/signing.pem python scripts/mint_token.py 0xissuer

The server must load the same SIGNING_KEY_PATH; without one, every
process signs with its own ephemeral key and the token is useless
anywhere else.
"""

from __future__ import annotations

import argparse

from cert_registry.services import token_service


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("address", help="caller address to put in the sub claim")
    parser.add_argument(
        "--ttl-minutes",
        type=int,
        default=token_service.ACCESS_TOKEN_TTL_MIN,
        help="token lifetime (default: %(default)s)",
    )
    args = parser.parse_args()
    print(token_service.create_access_token(sub=args.address, ttl_minutes=args.ttl_minutes))


if __name__ == "__main__":
    main()
