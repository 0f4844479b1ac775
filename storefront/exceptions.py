"""
Domain errors raised by the service layer.

Two categories are exposed to callers:

    StorefrontError
    ├── NotFoundError               target row does not exist
    └── ConstraintViolationError    duplicate key, missing reference, bad state

The HTTP layer turns them into 404 and 400 responses (see main.py).
"""


class StorefrontError(Exception):
    """Base class for storefront business errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(StorefrontError):
    """Raised when an operation targets a row that does not exist."""


class ConstraintViolationError(StorefrontError):
    """Raised when a write would break a uniqueness or reference rule."""
