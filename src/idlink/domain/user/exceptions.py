"""User domain exceptions.

Custom exceptions for the user domain, used for validation
and business rule violations.
"""

from idlink.exceptions import ConflictError, IdentityError, ValidationError


class InvalidEmailError(ValidationError):
    """Raised when email format is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class EmailAlreadyExistsError(ConflictError):
    """Email already registered."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__("Email already registered")


class LinkedAccountConflictError(ConflictError):
    """A (provider, provider_id) pair was linked by a concurrent request."""

    def __init__(self, provider: str, provider_id: str) -> None:
        self.provider = provider
        self.provider_id = provider_id
        super().__init__(f"Linked account already exists for provider {provider}")


class UserNotFoundError(IdentityError):
    """User not found."""

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        super().__init__(f"User not found: {user_id}")
