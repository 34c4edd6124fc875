"""Value objects for the user domain."""

from idlink.domain.user.value_objects.email import Email
from idlink.domain.user.value_objects.federated_profile import (
    ExpiryUnit,
    FederatedProfile,
    OAuthTokens,
    normalize_expiry,
)
from idlink.domain.user.value_objects.public_user import PublicUser

__all__ = [
    "Email",
    "ExpiryUnit",
    "FederatedProfile",
    "OAuthTokens",
    "PublicUser",
    "normalize_expiry",
]
