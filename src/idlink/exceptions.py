"""Identity and credential exceptions.

These exceptions are raised by the idlink services and repositories.
The transport layer maps them to status codes; messages never contain
plaintext credentials.
"""


class IdentityError(Exception):
    """Base exception for all identity errors."""

    def __init__(self, message: str = "Identity error"):
        self.message = message
        super().__init__(self.message)


class ConflictError(IdentityError):
    """A uniqueness constraint was violated by a racing write."""

    def __init__(self, message: str = "Resource already exists"):
        super().__init__(message)


class ValidationError(IdentityError):
    """Caller supplied input that violates a business rule."""

    def __init__(self, message: str = "Invalid input"):
        super().__init__(message)


class InvalidProfileError(ValidationError):
    """A federated profile lacks a required linking key."""

    def __init__(self, message: str = "Federated profile is missing an email"):
        super().__init__(message)


class NoCredentialError(IdentityError):
    """Password operation on an account that has no local password."""

    def __init__(self, message: str = "No password set for this account"):
        super().__init__(message)


class AuthenticationError(IdentityError):
    """The supplied current password is wrong."""

    def __init__(self, message: str = "Current password is incorrect"):
        super().__init__(message)


class TransactionTimeoutError(IdentityError):
    """The store could not acquire or finish a transaction in time.

    Storage is left unchanged. Callers may retry with backoff.
    """

    def __init__(self, message: str = "Transaction timed out"):
        super().__init__(message)
