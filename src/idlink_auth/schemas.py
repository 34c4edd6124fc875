"""Auth schemas and data structures.

These are simple data classes used for transferring authentication
data between components.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class SessionClaims:
    """Decoded session token claims.

    This represents the data extracted from a verified JWT token.

    Attributes
    ----------
    subject
        The unique identifier of the user (the ``sub`` claim)
    email
        The user's email address
    expires_at
        Token expiration timestamp
    """

    subject: UUID
    email: str
    expires_at: datetime

    def is_expired(self) -> bool:
        """Check if the token has expired."""
        return datetime.now(tz=self.expires_at.tzinfo) > self.expires_at
