"""OAuth adapter boundary: provider profile normalization."""

from idlink.infrastructure.oauth.profile_mappers import (
    GITHUB,
    GOOGLE,
    PROFILE_MAPPERS,
    map_github_profile,
    map_google_profile,
    map_profile,
)

__all__ = [
    "GITHUB",
    "GOOGLE",
    "PROFILE_MAPPERS",
    "map_github_profile",
    "map_google_profile",
    "map_profile",
]
