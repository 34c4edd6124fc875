"""Identity reconciliation for OAuth logins.

Runs on every OAuth callback: find or create the local user for the
reported email, refresh profile fields, link the federated identity and
issue a session token, all inside one transaction.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from idlink.domain.user import (
    ExpiryUnit,
    FederatedProfile,
    OAuthTokens,
    PublicUser,
    User,
)
from idlink.exceptions import ConflictError, InvalidProfileError

if TYPE_CHECKING:
    from idlink.application.ports import AccountUnitOfWork, TransactionRunner
    from idlink_auth import JWTService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReconciliationResult:
    """Session token plus the public view of the logged-in user."""

    token: str
    user: PublicUser


class IdentityReconciliationService:
    """
    Application service for federated logins.

    Race policy: two first-time logins for the same email (or the same
    provider identity) race on the unique constraints. The loser's
    transaction is rolled back and the whole reconciliation is run once
    more, which then finds the winner's rows. A second conflict is
    surfaced as ConflictError.
    """

    MAX_ATTEMPTS = 2

    def __init__(
        self,
        transactions: TransactionRunner,
        jwt_service: JWTService,
        expires_at_unit: ExpiryUnit = ExpiryUnit.SECONDS,
    ):
        self._transactions = transactions
        self._jwt_service = jwt_service
        self._expires_at_unit = ExpiryUnit(expires_at_unit)

    async def reconcile(self, profile: FederatedProfile) -> ReconciliationResult:
        if profile is None or not profile.email:
            raise InvalidProfileError
        tokens = profile.tokens(self._expires_at_unit)

        attempt = 1
        while True:
            try:
                return await self._transactions.run(
                    lambda uow: self._reconcile(uow, profile, tokens),
                )
            except ConflictError:
                if attempt >= self.MAX_ATTEMPTS:
                    logger.warning(
                        "Reconciliation via %s still conflicting after %d attempts",
                        profile.provider,
                        attempt,
                    )
                    raise
                logger.warning(
                    "Concurrent first login via %s detected, retrying",
                    profile.provider,
                )
                attempt += 1

    async def _reconcile(
        self,
        uow: AccountUnitOfWork,
        profile: FederatedProfile,
        tokens: OAuthTokens,
    ) -> ReconciliationResult:
        user = await self._resolve_user(uow, profile)

        linked = await uow.linked_accounts.upsert(
            provider=profile.provider,
            provider_id=profile.provider_id,
            user_id=user.id,
            tokens=tokens,
        )
        if linked.user_id != user.id:
            logger.warning(
                "Identity %s/%s belongs to user %s, not %s; ownership kept",
                linked.provider,
                linked.provider_id,
                linked.user_id,
                user.id,
            )

        token = self._jwt_service.create_access_token(
            user_id=user.id,
            email=user.email,
        )
        return ReconciliationResult(token=token, user=user.to_public())

    async def _resolve_user(
        self,
        uow: AccountUnitOfWork,
        profile: FederatedProfile,
    ) -> User:
        user = await uow.users.find_by_email(profile.email)

        if user is None:
            user = await uow.users.create(
                email=profile.email,
                name=profile.name,
                picture=profile.picture,
            )
            logger.info("User created from %s login: %s", profile.provider, user.id)
            return user

        if user.refresh_profile(name=profile.name, picture=profile.picture):
            user = await uow.users.update_profile(
                user_id=user.id,
                name=user.name,
                picture=user.picture,
            )
            logger.info("Profile refreshed from %s: %s", profile.provider, user.id)
        else:
            logger.debug("Profile unchanged for user %s", user.id)

        return user
