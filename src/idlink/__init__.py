"""idlink - federated identity reconciliation and local credentials.

This package handles:
- Reconciling OAuth logins with local users (find, create or link)
- Local password registration and rotation
- Session token resolution

Password hashing and token signing live in idlink_auth; configuration
lives in idlink_config.
"""

from idlink.application.services import (
    CredentialService,
    IdentityReconciliationService,
    ReconciliationResult,
    SessionService,
)
from idlink.container import IdentityContainer, build_container
from idlink.domain.user import (
    EmailAlreadyExistsError,
    ExpiryUnit,
    FederatedProfile,
    InvalidEmailError,
    LinkedAccount,
    LinkedAccountConflictError,
    PublicUser,
    User,
    UserNotFoundError,
)
from idlink.exceptions import (
    AuthenticationError,
    ConflictError,
    IdentityError,
    InvalidProfileError,
    NoCredentialError,
    TransactionTimeoutError,
    ValidationError,
)
from idlink_auth import Unauthenticated

__all__ = [
    # Application services
    "CredentialService",
    "IdentityReconciliationService",
    "ReconciliationResult",
    "SessionService",
    # Composition root
    "IdentityContainer",
    "build_container",
    # Domain
    "ExpiryUnit",
    "FederatedProfile",
    "LinkedAccount",
    "PublicUser",
    "User",
    # Exceptions
    "AuthenticationError",
    "ConflictError",
    "EmailAlreadyExistsError",
    "IdentityError",
    "InvalidEmailError",
    "InvalidProfileError",
    "LinkedAccountConflictError",
    "NoCredentialError",
    "TransactionTimeoutError",
    "Unauthenticated",
    "UserNotFoundError",
    "ValidationError",
]
