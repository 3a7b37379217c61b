"""
Application exceptions. Each carries the HTTP status and the message sent to the client.
"""


class ChatAppError(Exception):
    """Base exception for the chat application."""

    status_code = 500
    message = "Internal error"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(ChatAppError):
    """Request content failed validation."""

    status_code = 400
    message = "Invalid request"


class DuplicateUserError(ChatAppError):
    """Username is already registered."""

    status_code = 400
    message = "Username already exists"


class InvalidCredentialsError(ChatAppError):
    """Unknown username or wrong password (reported identically)."""

    status_code = 401
    message = "Invalid username or password"


class UnauthenticatedError(ChatAppError):
    """No valid session on a protected resource."""

    status_code = 401
    message = "Not logged in"


class ThreadNotFoundError(ChatAppError):
    status_code = 404
    message = "Thread not found"


class AssistantUnavailableError(ChatAppError):
    """Reply generation failed."""

    status_code = 502
    message = "Assistant is unavailable. Please try again."
