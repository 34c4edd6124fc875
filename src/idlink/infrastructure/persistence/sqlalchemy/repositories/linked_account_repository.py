"""SQLAlchemy implementation of LinkedAccountRepository."""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from idlink.domain.shared.time import ensure_tz_aware, utc_now
from idlink.domain.user import (
    LinkedAccount,
    LinkedAccountConflictError,
    LinkedAccountRepository,
    OAuthTokens,
)
from idlink.infrastructure.persistence.sqlalchemy.models import LinkedAccountModel
from idlink.infrastructure.persistence.sqlalchemy.repositories.integrity import (
    is_unique_violation,
)

logger = logging.getLogger(__name__)


class LinkedAccountRepositorySQLAlchemy(LinkedAccountRepository):
    """SQLAlchemy implementation of the LinkedAccountRepository interface."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def upsert(
        self,
        provider: str,
        provider_id: str,
        user_id: UUID,
        tokens: OAuthTokens,
    ) -> LinkedAccount:
        model = await self._find_model(provider, provider_id)

        if model is not None:
            # Tokens are always stale on login; ownership never moves
            model.access_token = tokens.access_token
            model.refresh_token = tokens.refresh_token
            model.expires_at = tokens.expires_at
            model.updated_at = utc_now()
            await self._session.flush()
            logger.debug(
                "Refreshed tokens for %s identity of user %s",
                provider,
                model.user_id,
            )
            return self._map_to_domain(model)

        model = LinkedAccountModel(
            provider=provider,
            provider_id=provider_id,
            user_id=user_id,
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
            expires_at=tokens.expires_at,
        )
        self._session.add(model)

        try:
            await self._session.flush()
        except IntegrityError as e:
            if is_unique_violation(e):
                raise LinkedAccountConflictError(provider, provider_id) from e
            raise

        logger.info("Linked %s identity to user: %s", provider, user_id)
        return self._map_to_domain(model)

    async def find(self, provider: str, provider_id: str) -> LinkedAccount | None:
        model = await self._find_model(provider, provider_id)
        return self._map_to_domain(model) if model else None

    async def list_for_user(self, user_id: UUID) -> list[LinkedAccount]:
        stmt = (
            select(LinkedAccountModel)
            .where(LinkedAccountModel.user_id == user_id)
            .order_by(LinkedAccountModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [self._map_to_domain(model) for model in result.scalars().all()]

    async def _find_model(
        self,
        provider: str,
        provider_id: str,
    ) -> LinkedAccountModel | None:
        stmt = select(LinkedAccountModel).where(
            LinkedAccountModel.provider == provider,
            LinkedAccountModel.provider_id == provider_id,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: LinkedAccountModel) -> LinkedAccount:
        return LinkedAccount(
            id=model.id,
            provider=model.provider,
            provider_id=model.provider_id,
            user_id=model.user_id,
            access_token=model.access_token,
            refresh_token=model.refresh_token,
            expires_at=ensure_tz_aware(model.expires_at) if model.expires_at else None,
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )
