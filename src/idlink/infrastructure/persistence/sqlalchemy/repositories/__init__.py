# ruff: noqa: E501 - Long import paths in __init__.py re-exports
from idlink.infrastructure.persistence.sqlalchemy.repositories.linked_account_repository import (
    LinkedAccountRepositorySQLAlchemy,
)
from idlink.infrastructure.persistence.sqlalchemy.repositories.user_credential_repository import (
    UserCredentialRepositorySQLAlchemy,
)
from idlink.infrastructure.persistence.sqlalchemy.repositories.user_repository import (
    UserRepositorySQLAlchemy,
)

__all__ = [
    "LinkedAccountRepositorySQLAlchemy",
    "UserCredentialRepositorySQLAlchemy",
    "UserRepositorySQLAlchemy",
]
