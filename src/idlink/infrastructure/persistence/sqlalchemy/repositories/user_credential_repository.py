"""SQLAlchemy implementation of UserCredentialRepository."""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from idlink.domain.shared.time import utc_now
from idlink.domain.user import UserCredentialRepository
from idlink.exceptions import ConflictError
from idlink.infrastructure.persistence.sqlalchemy.models import UserCredentialModel
from idlink.infrastructure.persistence.sqlalchemy.repositories.integrity import (
    is_unique_violation,
)

logger = logging.getLogger(__name__)


class UserCredentialRepositorySQLAlchemy(UserCredentialRepository):
    """
    SQLAlchemy implementation of UserCredentialRepository.

    Only this repository ever selects the password_hash column.
    """

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session.

        Parameters
        ----------
        session
            SQLAlchemy async session
        """
        self._session = session

    async def _find_model_by_user_id(
        self,
        user_id: UUID,
        for_update: bool = False,
    ) -> UserCredentialModel | None:
        """Internal helper to find the concrete model for modification."""
        stmt = select(UserCredentialModel).where(
            UserCredentialModel.user_id == user_id,
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_hash(self, user_id: UUID, for_update: bool = False) -> str | None:
        model = await self._find_model_by_user_id(user_id, for_update=for_update)
        return model.password_hash if model else None

    async def save(self, user_id: UUID, password_hash: str) -> None:
        existing = await self._find_model_by_user_id(user_id)

        if existing:
            existing.password_hash = password_hash
            existing.updated_at = utc_now()
            await self._session.flush()
            logger.debug("Updated credentials for user: %s", user_id)
            return

        self._session.add(
            UserCredentialModel(user_id=user_id, password_hash=password_hash),
        )
        try:
            await self._session.flush()
        except IntegrityError as e:
            if is_unique_violation(e):
                msg = "Credentials already exist for this user"
                raise ConflictError(msg) from e
            raise
        logger.info("Created credentials for user: %s", user_id)
