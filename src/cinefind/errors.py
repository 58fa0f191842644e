from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "Not found") -> None:
        super().__init__(message)


class AuthenticationError(UserError):
    """Raised when an operation requires a signed-in user and there is none."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class ValidationError(UserError):
    """Raised when user input fails validation."""


class UpstreamError(Exception):
    """Base class for failures of the external movie API."""


class FetchFailedError(UpstreamError):
    """Raised when a movie API request fails.

    Covers transport errors, non-2xx responses, undecodable bodies and
    responses flagged with ``"Response": "False"``. Never cached, never retried.
    """

    def __init__(self, message: str = "Failed to fetch movie data", status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class StorageError(Exception):
    """Raised when durable storage cannot be read or written."""
