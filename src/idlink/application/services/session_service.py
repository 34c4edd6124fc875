"""Session token resolution for authenticated requests."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from idlink.domain.user import PublicUser
from idlink_auth import SessionClaims, Unauthenticated

if TYPE_CHECKING:
    from idlink.application.ports import TransactionRunner
    from idlink_auth import JWTService

logger = logging.getLogger(__name__)


class SessionService:
    """Turns a session token into the current user.

    Any failure, including a valid token for a user that no longer
    exists, surfaces as the same Unauthenticated error.
    """

    def __init__(self, transactions: TransactionRunner, jwt_service: JWTService):
        self._transactions = transactions
        self._jwt_service = jwt_service

    def verify_token(self, token: str) -> SessionClaims:
        return self._jwt_service.verify_token(token)

    async def authenticate(self, token: str) -> PublicUser:
        claims = self.verify_token(token)
        user = await self._transactions.run(
            lambda uow: uow.users.find_by_id(claims.subject),
        )
        if user is None:
            logger.debug("Token subject no longer exists: %s", claims.subject)
            raise Unauthenticated
        return user.to_public()
