"""User domain manages user identity and federated identities.

This domain handles:
- User aggregate (identity: id, email, name, picture)
- LinkedAccount entity (provider identities bound to a user)
- Federated profiles reported by OAuth adapters
"""

from idlink.domain.user.aggregates import User
from idlink.domain.user.entities import LinkedAccount
from idlink.domain.user.exceptions import (
    EmailAlreadyExistsError,
    InvalidEmailError,
    LinkedAccountConflictError,
    UserNotFoundError,
)
from idlink.domain.user.repositories import (
    LinkedAccountRepository,
    UserCredentialRepository,
    UserRepository,
)
from idlink.domain.user.value_objects import (
    Email,
    ExpiryUnit,
    FederatedProfile,
    OAuthTokens,
    PublicUser,
    normalize_expiry,
)

__all__ = [
    "Email",
    "EmailAlreadyExistsError",
    "ExpiryUnit",
    "FederatedProfile",
    "InvalidEmailError",
    "LinkedAccount",
    "LinkedAccountConflictError",
    "LinkedAccountRepository",
    "OAuthTokens",
    "PublicUser",
    "User",
    "UserCredentialRepository",
    "UserNotFoundError",
    "UserRepository",
    "normalize_expiry",
]
