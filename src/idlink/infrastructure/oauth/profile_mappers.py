"""Normalize provider profiles into FederatedProfile.

OAuth strategies (passport style) hand over the provider tokens and a
loosely shaped profile dict after the authorization code exchange. The
mappers here turn those dicts into the closed FederatedProfile type
before anything reaches reconciliation.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from idlink.domain.user import FederatedProfile
from idlink.exceptions import InvalidProfileError, ValidationError

logger = logging.getLogger(__name__)

GOOGLE = "google"
GITHUB = "github"


def _first_value(entries: Any) -> str | None:
    """Return ``entries[0]["value"]`` for passport-style lists."""
    if not entries:
        return None
    first = entries[0]
    if isinstance(first, Mapping):
        return first.get("value")
    return None


def map_google_profile(
    profile: Mapping[str, Any],
    access_token: str | None = None,
    refresh_token: str | None = None,
    expires_at: int | float | None = None,
) -> FederatedProfile:
    email = _first_value(profile.get("emails"))
    if not email:
        raise InvalidProfileError

    return FederatedProfile(
        email=email,
        provider=GOOGLE,
        provider_id=profile.get("id"),
        name=profile.get("displayName"),
        picture=_first_value(profile.get("photos")),
        access_token=access_token,
        refresh_token=refresh_token,
        expires_at=expires_at,
    )


def map_github_profile(
    profile: Mapping[str, Any],
    access_token: str | None = None,
    refresh_token: str | None = None,
    expires_at: int | float | None = None,
) -> FederatedProfile:
    # GitHub may list several addresses; the primary one links accounts
    emails = profile.get("emails") or []
    email = next(
        (
            entry.get("value")
            for entry in emails
            if isinstance(entry, Mapping) and entry.get("primary")
        ),
        None,
    )
    if not email:
        email = (profile.get("_json") or {}).get("email")
    if not email:
        raise InvalidProfileError

    return FederatedProfile(
        email=email,
        provider=GITHUB,
        provider_id=profile.get("id"),
        name=profile.get("displayName") or profile.get("username"),
        picture=_first_value(profile.get("photos")),
        access_token=access_token,
        refresh_token=refresh_token,
        expires_at=expires_at,
    )


ProfileMapper = Callable[..., FederatedProfile]

PROFILE_MAPPERS: dict[str, ProfileMapper] = {
    GOOGLE: map_google_profile,
    GITHUB: map_github_profile,
}


def map_profile(
    provider: str,
    profile: Mapping[str, Any],
    access_token: str | None = None,
    refresh_token: str | None = None,
    expires_at: int | float | None = None,
) -> FederatedProfile:
    """Dispatch to the mapper registered for ``provider``.

    Raises
    ------
    ValidationError
        If no mapper exists for the provider
    InvalidProfileError
        If the provider reported no usable email
    """
    mapper = PROFILE_MAPPERS.get(provider.lower())
    if mapper is None:
        msg = f"Unsupported OAuth provider: {provider}"
        raise ValidationError(msg)

    try:
        return mapper(
            profile,
            access_token=access_token,
            refresh_token=refresh_token,
            expires_at=expires_at,
        )
    except InvalidProfileError:
        logger.info("Rejected %s profile without a usable email", provider)
        raise
