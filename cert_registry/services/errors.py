"""Exceptions raised by the ledger services.

Every failure aborts the whole operation: the services raise before
their first write, and the Postgres ledger rolls back on any exception.
The API layer maps each class to one HTTP status.
"""

from __future__ import annotations

import logging
from typing import NoReturn

from cert_registry.core.metrics import AUTHORIZATION_DENIALS

logger = logging.getLogger(__name__)


class RegistryError(Exception):
    pass


class NotAuthorizedError(RegistryError):
    def __init__(self, operation: str, detail: str = "not authorized") -> None:
        super().__init__(detail)
        self.operation = operation


class InvalidInputError(RegistryError, ValueError):
    pass


class MalformedTextError(RegistryError, ValueError):
    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"{field} is not storable text: {reason}")
        self.field = field


class NotFoundError(RegistryError, LookupError):
    pass


class AlreadyInitializedError(RegistryError):
    pass


def deny(operation: str, caller: str | None, detail: str) -> NoReturn:
    """Count, log and raise a NotAuthorizedError for ``operation``."""
    AUTHORIZATION_DENIALS.labels(operation=operation).inc()
    logger.warning("Denied %s caller=%s: %s", operation, caller, detail)
    raise NotAuthorizedError(operation, detail)
