"""Domain errors for the session lifecycle."""


class SessionError(Exception):
    """Base class for session lifecycle errors."""


class Unauthenticated(SessionError):
    """Raised when no caller identity is attached to a request."""

    def __init__(self, message: str = "User not authenticated") -> None:
        super().__init__(message)
        self.message = message


class ValidationFailed(SessionError):
    """Raised when session fields fail validation."""

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__("Validation failed")
        self.errors = errors


class NotFoundOrUnauthorized(SessionError):
    """Raised when a session is missing or owned by another caller.

    Both causes share one message so that callers cannot probe for the
    existence of other users' sessions.
    """

    def __init__(self) -> None:
        super().__init__("Session not found or unauthorized")


class StorageFailure(SessionError):
    """Raised when the persistence layer fails."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
