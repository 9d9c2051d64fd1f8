"""Feed-specific exceptions."""

from __future__ import annotations


class FeedError(Exception):
    """Base exception for remote question service failures."""


class NetworkError(FeedError):
    """Transport or connectivity failure."""


class ServiceError(FeedError):
    """Non-success response or unexpected payload from the service."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class AuthorizationError(ServiceError):
    """Privileged call rejected: missing, expired or insufficient token."""


class NotFoundError(ServiceError):
    """Target resource no longer exists."""


class InvalidTransitionError(RuntimeError):
    """FeedState transition attempted from the wrong status."""

    def __init__(self, operation: str, status: str) -> None:
        self.operation = operation
        self.status = status
        super().__init__(f"Cannot {operation} while feed is {status}")
