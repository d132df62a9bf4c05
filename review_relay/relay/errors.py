"""Error taxonomy for the relay pipeline.

Each error maps to exactly one HTTP status. Pipeline steps raise them and
the route turns them into JSON responses; nothing in the pipeline recovers
from one.
"""

from fastapi import status


class RelayError(Exception):
    """Base class for terminal relay outcomes that are not a success."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        if message:
            self.message = message

    def to_content(self) -> dict[str, object]:
        return {"message": self.message}


class AuthFailure(RelayError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Invalid credentials"


class InputInvalid(RelayError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request body"

    def __init__(self, violations: list[str]) -> None:
        super().__init__()
        self.violations = violations

    def to_content(self) -> dict[str, object]:
        return {"message": self.message, "errors": self.violations}


class NoRecipients(RelayError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "No reviewers could be mapped to a chat user"


class StoreReadFailure(RelayError):
    message = "Failed to read from the database"


class DispatchFailure(RelayError):
    message = "Failed to send the chat notification"


class StoreWriteFailure(RelayError):
    message = "Notification sent but failed to record the pull request"
