"""
Domain error kinds and the HTTP status each one maps to at the request boundary.
"""

from pydantic import ValidationError as PydanticValidationError


class AppError(Exception):
    """Base class for every error the domain core raises on purpose."""

    status_code: int = 500
    default_message: str = "Internal server error."

    def __init__(self, *messages: str):
        self.messages: list[str] = list(messages) or [self.default_message]
        super().__init__("; ".join(self.messages))

    def to_payload(self) -> dict[str, list[str]]:
        return {"errors": self.messages}


class ValidationError(AppError):
    """Malformed or out-of-range input (InvalidInput)."""

    status_code = 400
    default_message = "Invalid input."

    @classmethod
    def from_pydantic(cls, exc: PydanticValidationError) -> "ValidationError":
        messages = []
        for error in exc.errors():
            field = ".".join(str(part) for part in error["loc"])
            messages.append(f"{field}: {error['msg']}" if field else error["msg"])
        return cls(*messages)


class DuplicateIdentityError(AppError):
    # Same status the original registration endpoint answers with.
    status_code = 400
    default_message = "User with this email already exists."


class AuthenticationError(AppError):
    """Bad credentials, bad token or inactive account. Deliberately undifferentiated."""

    status_code = 401
    default_message = "Invalid credentials."


class NotFoundError(AppError):
    """Resource absent or owned by someone else. Deliberately undifferentiated."""

    status_code = 404
    default_message = "Resource not found."


class StorageError(AppError):
    status_code = 500
    default_message = "Internal server error."
