from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from typing import Annotated

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from redis.exceptions import RedisError

from cert_registry.core.clock import Clock, system_clock
from cert_registry.middleware.request_context import caller_var
from cert_registry.models.principal import Principal
from cert_registry.repos.ledger import Ledger, open_ledger
from cert_registry.services import token_service
from cert_registry.services.errors import (
    AlreadyInitializedError,
    InvalidInputError,
    MalformedTextError,
    NotAuthorizedError,
    NotFoundError,
    RegistryError,
)
from cert_registry.services.event_feed import event_feed, publish_all

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def require_caller(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
) -> Principal:
    """Validate the bearer token and return the caller it names.

    Async so that setting ``caller_var`` happens in the request's own
    context and shows up on every log line the endpoint emits.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        claims = token_service.decode_access_token(credentials.credentials)
    except jwt.ExpiredSignatureError:
        logger.warning("Expired token rejected")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token expired",
            headers={"WWW-Authenticate": "Bearer"},
        ) from None
    except jwt.InvalidTokenError as e:
        logger.warning("Invalid token rejected: %s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from None

    principal = Principal(address=claims["sub"])
    caller_var.set(principal.address)
    return principal


async def get_ledger() -> AsyncIterator[Ledger]:
    """One ledger transaction per request.

    The transaction commits when the endpoint returns normally; any
    exception, HTTPException included, rolls it back.  Events reach the
    observer feed only after a successful commit.  A feed outage at that
    point is logged and the request still succeeds.
    """
    async with open_ledger() as ledger:
        yield ledger
    try:
        await publish_all(event_feed, ledger.emitted)
    except (RedisError, OSError):
        logger.warning(
            "Event feed publish failed after commit; %d event(s) only in the ledger log",
            len(ledger.emitted),
            exc_info=True,
        )


def get_clock() -> Clock:
    return system_clock


CallerDep = Annotated[Principal, Depends(require_caller)]
# Commits before the response is sent.
LedgerDep = Annotated[Ledger, Depends(get_ledger, scope="function")]
ClockDep = Annotated[Clock, Depends(get_clock)]


_STATUS_BY_ERROR: tuple[tuple[type[RegistryError], int], ...] = (
    (NotAuthorizedError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (AlreadyInitializedError, status.HTTP_409_CONFLICT),
    (MalformedTextError, 422),
    (InvalidInputError, 422),
)


def http_error(exc: RegistryError) -> HTTPException:
    """Translate a service exception into the HTTPException to raise."""
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return HTTPException(status_code=code, detail=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
