"""
Error types shared by the storage gateway, schema bootstrap and controllers.

Store faults (`StoreError` and subclasses) are raised by `core.db` and must
reach the controllers unchanged. Controllers decide how each one is shown
to the client.
"""

from __future__ import annotations


class ValidationError(Exception):
    """
    Malformed or missing input, detected before any store call.
    """

    def __init__(self, field: str, message: str, *, error: str = "Invalid input") -> None:
        super().__init__(message)
        self.field = field
        self.message = message
        self.error = error


class StoreError(Exception):
    def __init__(self, message: str, *, sqlstate: str | None = None) -> None:
        super().__init__(message)
        self.sqlstate = sqlstate


class ConnectivityError(StoreError):
    """
    The store is unreachable, the connection dropped, or the call timed out.
    """


class QueryError(StoreError):
    """
    The server rejected the statement for a reason other than a constraint.
    """


class ConstraintViolation(StoreError):
    """
    A unique, not-null, check, enum or length constraint rejected the row.
    """

    def __init__(
        self,
        message: str,
        *,
        sqlstate: str | None = None,
        constraint: str | None = None,
    ) -> None:
        super().__init__(message, sqlstate=sqlstate)
        self.constraint = constraint


class InitializationError(Exception):
    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"Database initialization failed: {cause}")
        self.cause = cause
