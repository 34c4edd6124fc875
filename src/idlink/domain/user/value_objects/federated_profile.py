"""Federated profile handed over by OAuth adapters.

An adapter finishes the provider handshake, verifies the provider
response and normalizes it into a FederatedProfile. Reconciliation only
ever sees this closed, validated shape.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

from idlink.domain.user.value_objects.email import Email
from idlink.exceptions import InvalidProfileError

# Column widths of linked_accounts.provider and linked_accounts.provider_id
MAX_PROVIDER_LENGTH = 50
MAX_PROVIDER_ID_LENGTH = 255


class ExpiryUnit(str, Enum):
    """Epoch scale an adapter uses for ``expires_at``."""

    SECONDS = "seconds"
    MILLISECONDS = "milliseconds"


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class OAuthTokens:
    """Provider tokens stored on a linked account."""

    access_token: str | None = None
    refresh_token: str | None = None
    expires_at: datetime | None = None


@dataclass(frozen=True)
class FederatedProfile:
    """Normalized identity reported by an OAuth provider.

    Raises
    ------
    InvalidProfileError
        If email, provider or provider_id is missing or too long, or if
        expires_at is not a finite, non-negative number
    InvalidEmailError
        If the email is malformed
    """

    email: str
    provider: str
    provider_id: str
    name: str | None = None
    picture: str | None = None
    access_token: str | None = None
    refresh_token: str | None = None
    expires_at: int | float | None = None

    def __post_init__(self) -> None:
        if not self.email or not str(self.email).strip():
            raise InvalidProfileError
        if not self.provider or not str(self.provider).strip():
            msg = "Federated profile is missing a provider"
            raise InvalidProfileError(msg)
        if self.provider_id is None or not str(self.provider_id).strip():
            msg = "Federated profile is missing a provider id"
            raise InvalidProfileError(msg)

        object.__setattr__(self, "email", Email(self.email).value)
        object.__setattr__(self, "provider", self.provider.strip().lower())
        # GitHub reports numeric ids
        object.__setattr__(self, "provider_id", str(self.provider_id).strip())
        if len(self.provider) > MAX_PROVIDER_LENGTH:
            msg = f"Provider name exceeds {MAX_PROVIDER_LENGTH} characters"
            raise InvalidProfileError(msg)
        if len(self.provider_id) > MAX_PROVIDER_ID_LENGTH:
            msg = f"Provider id exceeds {MAX_PROVIDER_ID_LENGTH} characters"
            raise InvalidProfileError(msg)
        _check_expiry(self.expires_at)
        for field in ("name", "picture", "access_token", "refresh_token"):
            object.__setattr__(self, field, _blank_to_none(getattr(self, field)))

    def tokens(self, unit: ExpiryUnit = ExpiryUnit.SECONDS) -> OAuthTokens:
        """Return the provider tokens with ``expires_at`` made absolute."""
        return OAuthTokens(
            access_token=self.access_token,
            refresh_token=self.refresh_token,
            expires_at=normalize_expiry(self.expires_at, unit),
        )


def normalize_expiry(
    value: int | float | None,
    unit: ExpiryUnit = ExpiryUnit.SECONDS,
) -> datetime | None:
    """Convert an epoch offset into a UTC datetime.

    Falsy values (missing or zero) mean the provider reported no expiry.

    Raises
    ------
    InvalidProfileError
        If the value is not finite or does not fit a datetime on the given
        scale (e.g. milliseconds read as seconds)
    """
    if not value:
        return None
    _check_expiry(value)
    seconds = value / 1000 if unit == ExpiryUnit.MILLISECONDS else value
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (ValueError, OverflowError, OSError) as e:
        msg = f"Token expiry {value!r} is out of range for {unit.value}"
        raise InvalidProfileError(msg) from e


def _check_expiry(value: object) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        msg = "Token expiry must be an epoch number"
        raise InvalidProfileError(msg)
    if not math.isfinite(value) or value < 0:
        msg = f"Token expiry {value!r} is not a valid epoch offset"
        raise InvalidProfileError(msg)
