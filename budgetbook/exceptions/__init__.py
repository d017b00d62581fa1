from .http import (
    AppError,
    AuthenticationError,
    DuplicateIdentityError,
    NotFoundError,
    StorageError,
    ValidationError,
)

__all__ = [
    "AppError",
    "AuthenticationError",
    "DuplicateIdentityError",
    "NotFoundError",
    "StorageError",
    "ValidationError",
]
