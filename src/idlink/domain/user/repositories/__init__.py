from idlink.domain.user.repositories.linked_account_repository import (
    LinkedAccountRepository,
)
from idlink.domain.user.repositories.user_credential_repository import (
    UserCredentialRepository,
)
from idlink.domain.user.repositories.user_repository import UserRepository

__all__ = [
    "LinkedAccountRepository",
    "UserCredentialRepository",
    "UserRepository",
]
