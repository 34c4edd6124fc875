"""Authentication exceptions.

These exceptions are raised by the idlink_auth package and should be
caught and handled by the application layer.
"""


class AuthError(Exception):
    """Base exception for all authentication errors."""

    def __init__(self, message: str = "Authentication error"):
        self.message = message
        super().__init__(self.message)


class Unauthenticated(AuthError):
    """Raised when a session token is invalid, expired, or malformed.

    Every verification failure maps to this one error with the same
    message, so callers cannot tell the failure causes apart.
    """

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)


class WeakPasswordError(AuthError):
    """Raised when a password doesn't meet strength requirements."""

    def __init__(self, message: str = "Password does not meet requirements"):
        super().__init__(message)
