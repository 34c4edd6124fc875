"""SQLAlchemy implementation for idlink persistence.

Provides:
- Base: Declarative base for identity models
- UserModel, LinkedAccountModel, UserCredentialModel
- Repository implementations for users, linked accounts and credentials
- SQLAlchemyTransactionRunner: bounded atomic units of work
"""

from idlink.infrastructure.persistence.sqlalchemy.base import Base
from idlink.infrastructure.persistence.sqlalchemy.engine import (
    create_engine,
    create_session_maker,
)
from idlink.infrastructure.persistence.sqlalchemy.init_db import (
    create_tables,
    drop_tables,
)
from idlink.infrastructure.persistence.sqlalchemy.models import (
    LinkedAccountModel,
    UserCredentialModel,
    UserModel,
)
from idlink.infrastructure.persistence.sqlalchemy.repositories import (
    LinkedAccountRepositorySQLAlchemy,
    UserCredentialRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)
from idlink.infrastructure.persistence.sqlalchemy.unit_of_work import (
    SQLAlchemyAccountUnitOfWork,
    SQLAlchemyTransactionRunner,
)

__all__ = [
    "Base",
    "LinkedAccountModel",
    "LinkedAccountRepositorySQLAlchemy",
    "SQLAlchemyAccountUnitOfWork",
    "SQLAlchemyTransactionRunner",
    "UserCredentialModel",
    "UserCredentialRepositorySQLAlchemy",
    "UserModel",
    "UserRepositorySQLAlchemy",
    "create_engine",
    "create_session_maker",
    "create_tables",
    "drop_tables",
]
