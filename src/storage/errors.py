# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Exception hierarchy shared by storage drivers.

Transport and HTTP status failures are not wrapped: they surface as
``httpx.HTTPError`` subclasses. The classes below cover the conditions a
driver detects on its own.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .models import MoveResult


class StorageError(Exception):
    """Base class for storage driver errors."""

    status_code: int | None = None


class NotAuthenticatedError(StorageError):
    """Operation attempted without an authenticated session.

    Mirrors the provider's 499 (cancelled) condition: the request is never
    issued.
    """

    status_code = 499

    def __init__(self, operation: str = ""):
        self.operation = operation
        msg = "Not authenticated"
        if operation:
            msg = f"Not authenticated: cannot run '{operation}' before auth()"
        super().__init__(msg)


class AuthenticationError(StorageError):
    """Authentication succeeded at HTTP level but returned no usable session."""


class StorageFileNotFoundError(StorageError, FileNotFoundError):
    """Requested object does not exist."""

    def __init__(self, location: str):
        self.location = location
        super().__init__(f"File not found: {location}")

    def __str__(self) -> str:
        return f"File not found: {self.location}"


class SigningError(StorageError):
    """Temporary URL could not be signed."""


class PartialMoveError(StorageError):
    """Move copied the object but could not delete the source.

    Attributes:
        result: MoveResult with ``copied=True`` and ``deleted=False``.
    """

    def __init__(self, result: MoveResult, cause: Any = None):
        self.result = result
        self.cause = cause
        super().__init__(
            f"Moved '{result.source}' to '{result.destination}' "
            f"but source was not deleted: {cause}"
        )


__all__ = [
    "AuthenticationError",
    "NotAuthenticatedError",
    "PartialMoveError",
    "SigningError",
    "StorageError",
    "StorageFileNotFoundError",
]
