"""Error taxonomy shared by the classifier, builder, client and pager."""
from __future__ import annotations


class QParasError(Exception):
    """Base class for every failure that aborts a qparas invocation."""


class InvalidDirective(QParasError):
    """Raised when an argument, control parameter or sort value is malformed."""


class UnknownQuery(QParasError):
    """Raised when a query name does not map to a supported endpoint."""


class FetchFailed(QParasError):
    """Raised for transport errors and non-success HTTP statuses."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class DecodeFailed(QParasError):
    """Raised when a response body is not JSON of the expected shape."""


__all__ = [
    "QParasError",
    "InvalidDirective",
    "UnknownQuery",
    "FetchFailed",
    "DecodeFailed",
]
