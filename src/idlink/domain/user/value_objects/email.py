"""Email value object.

Provides validated email addresses for user identification. The address
is the primary linking key between federated identities and local users,
so it is stored exactly as given (minus surrounding whitespace); case is
never folded.
"""

import re
from dataclasses import dataclass

from idlink.domain.user.exceptions import InvalidEmailError

# One "@" between a non-empty local part and a non-empty domain, no
# whitespace. Apostrophes and non-ASCII local parts are accepted.
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+$")

# Width of users.email
MAX_EMAIL_LENGTH = 255


@dataclass(frozen=True)
class Email:
    """Value object representing a validated email address."""

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            msg = "Email cannot be empty"
            raise InvalidEmailError(msg)

        stripped = self.value.strip()

        if not EMAIL_PATTERN.match(stripped):
            msg = "Invalid email format"
            raise InvalidEmailError(msg)

        if len(stripped) > MAX_EMAIL_LENGTH:
            msg = f"Email cannot exceed {MAX_EMAIL_LENGTH} characters"
            raise InvalidEmailError(msg)

        # frozen dataclass workaround
        object.__setattr__(self, "value", stripped)

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"Email('{self.value}')"
