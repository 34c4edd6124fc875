"""
Pytest configuration for persistence tests.

These run the real repositories and transaction runner against an
in-memory SQLite database; no Docker required.
"""

from types import SimpleNamespace

import pytest
import pytest_asyncio

from idlink.application.services import (
    CredentialService,
    IdentityReconciliationService,
    SessionService,
)
from idlink_auth import JWTService, PasswordHashingService

# Re-export shared database fixtures
from tests.shared.fixtures.database import (
    session_maker,
    sqlite_engine,
    transactions,
)

__all__ = [
    "db_session",
    "services",
    "session_maker",
    "sqlite_engine",
    "transactions",
]

TEST_JWT_SECRET = "persistence-test-secret"


@pytest_asyncio.fixture
async def db_session(session_maker):
    """Plain session for exercising repositories directly."""
    async with session_maker() as session:
        yield session
        await session.rollback()


@pytest.fixture
def services(transactions):
    """Application services over SQLite with fast bcrypt rounds."""
    jwt_service = JWTService(secret_key=TEST_JWT_SECRET)
    return SimpleNamespace(
        jwt=jwt_service,
        passwords=PasswordHashingService(rounds=4),
        reconciliation=IdentityReconciliationService(
            transactions=transactions,
            jwt_service=jwt_service,
        ),
        credentials=CredentialService(
            transactions=transactions,
            password_service=PasswordHashingService(rounds=4),
        ),
        sessions=SessionService(transactions=transactions, jwt_service=jwt_service),
    )
