# ruff: noqa: E501 - Long import paths in __init__.py re-exports
"""SQLAlchemy models for identity management."""

from idlink.infrastructure.persistence.sqlalchemy.models.linked_account_model import (
    LinkedAccountModel,
)
from idlink.infrastructure.persistence.sqlalchemy.models.user_credential_model import (
    UserCredentialModel,
)
from idlink.infrastructure.persistence.sqlalchemy.models.user_model import UserModel

__all__ = [
    "LinkedAccountModel",
    "UserCredentialModel",
    "UserModel",
]
