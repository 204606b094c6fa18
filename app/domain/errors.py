"""Error kinds raised by the catalog and subscription services."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    INVALID_ARGUMENT = "invalid argument"
    NOT_FOUND = "not found"
    NOT_ALLOWED = "not allowed"
    STATUS_UNCHANGED = "status is unchanged"


class SubscriptionError(Exception):
    """Business rule violation, tagged with the kind of failure."""

    def __init__(self, kind: ErrorKind, message: str = "") -> None:
        self.kind = kind
        self.message = message
        super().__init__(f"{message}: {kind.value}" if message else kind.value)


class PersistenceError(Exception):
    """Base class for failures reported by a storage adapter."""


class MalformedIdentifierError(PersistenceError):
    """The identifier does not have the format the store expects."""


class RecordNotFoundError(PersistenceError):
    """No record exists for the identifier."""
