"""Composition root.

Builds every component once, in dependency order, from one Settings
object. Nothing below this module reads configuration on its own.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine

from idlink.application.services import (
    CredentialService,
    IdentityReconciliationService,
    SessionService,
)
from idlink.domain.user import ExpiryUnit
from idlink.infrastructure.persistence.sqlalchemy import (
    SQLAlchemyTransactionRunner,
    create_engine,
    create_session_maker,
)
from idlink_auth import JWTService, PasswordHashingService
from idlink_config import Settings

logger = logging.getLogger(__name__)


@dataclass
class IdentityContainer:
    settings: Settings
    engine: AsyncEngine
    password_service: PasswordHashingService
    jwt_service: JWTService
    transactions: SQLAlchemyTransactionRunner
    reconciliation: IdentityReconciliationService
    credentials: CredentialService
    sessions: SessionService

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self.engine.dispose()


def build_container(
    settings: Settings,
    engine: AsyncEngine | None = None,
) -> IdentityContainer:
    """Wire all identity components.

    Parameters
    ----------
    settings
        Application settings, loaded once at startup
    engine
        Existing engine to reuse (tests); created from settings otherwise
    """
    password_service = PasswordHashingService(
        rounds=settings.password_hash_rounds,
        min_length=settings.password_min_length,
    )
    jwt_service = JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        access_token_expire_hours=settings.jwt_access_token_expire_hours,
    )

    engine = engine or create_engine(settings)
    transactions = SQLAlchemyTransactionRunner(
        create_session_maker(engine),
        max_wait=settings.tx_max_wait_seconds,
        timeout=settings.tx_timeout_seconds,
    )

    logger.debug("Identity container built for %s", settings.database_type)
    return IdentityContainer(
        settings=settings,
        engine=engine,
        password_service=password_service,
        jwt_service=jwt_service,
        transactions=transactions,
        reconciliation=IdentityReconciliationService(
            transactions=transactions,
            jwt_service=jwt_service,
            expires_at_unit=ExpiryUnit(settings.oauth_expires_at_unit),
        ),
        credentials=CredentialService(
            transactions=transactions,
            password_service=password_service,
        ),
        sessions=SessionService(transactions=transactions, jwt_service=jwt_service),
    )
