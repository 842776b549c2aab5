"""Text fields as the ledger stores them.

Certificate and credential fields are opaque: they are kept verbatim,
never trimmed or parsed.  They must still be storable text, which means
valid UTF-8 without NUL characters, on every ledger backend.
"""

from __future__ import annotations

from cert_registry.services.errors import InvalidInputError, MalformedTextError

Text = str | bytes


def decode_text(value: Text, *, field: str) -> str:
    """Return ``value`` as text, decoding raw bytes as strict UTF-8.

    A ``str`` carrying lone surrogates cannot be stored as UTF-8 and is
    rejected the same way as undecodable bytes.  So is a NUL character,
    which PostgreSQL text columns cannot hold.
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        try:
            value = bytes(value).decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedTextError(field, e.reason) from None
    else:
        try:
            value.encode("utf-8")
        except UnicodeEncodeError as e:
            raise MalformedTextError(field, e.reason) from None
    if "\x00" in value:
        raise MalformedTextError(field, "contains a NUL character")
    return value


def decode_address(value: Text, *, field: str) -> str:
    """Like decode_text, but an address must also be non-empty.

    Tokens always name a caller, so a certificate minted to "" could
    never be destroyed.
    """
    address = decode_text(value, field=field)
    if not address:
        raise InvalidInputError(f"{field} must be non-empty")
    return address
