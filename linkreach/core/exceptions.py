"""Custom exceptions for the LinkReach application."""

from __future__ import annotations

from typing import Any


class LinkReachException(Exception):
    """Base exception for LinkReach application."""

    status_code = 500

    def __init__(self, message: str = "", details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(LinkReachException):
    """Raised when validation fails."""

    status_code = 400


class NotFoundError(LinkReachException):
    """Raised when a resource is not found or belongs to another company."""

    status_code = 404


class ConflictError(LinkReachException):
    """Raised when a write collides with existing state."""

    status_code = 409


class InvalidTransitionError(ConflictError, ValueError):
    """Raised when a disallowed state transition is attempted."""


class DatabaseError(LinkReachException):
    """Raised when a database operation fails."""

    status_code = 500


class UpstreamServiceError(LinkReachException):
    """Raised when an external provider call fails.

    ``details`` carries the provider's own error message when one is available.
    """

    def __init__(self, message: str, provider: str, details: Any = None) -> None:
        super().__init__(message, details=details)
        self.provider = provider


class ConfigurationError(LinkReachException):
    """Raised when configuration is invalid."""


class AuthenticationError(LinkReachException):
    """Raised when authentication fails."""

    status_code = 401


class AuthorizationError(LinkReachException):
    """Raised when an authenticated user lacks a permission."""

    status_code = 403
