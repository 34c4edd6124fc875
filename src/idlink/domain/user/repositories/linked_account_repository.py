"""Linked account repository interface."""

from abc import ABC, abstractmethod
from uuid import UUID

from idlink.domain.user.entities.linked_account import LinkedAccount
from idlink.domain.user.value_objects.federated_profile import OAuthTokens


class LinkedAccountRepository(ABC):
    """Repository interface for federated identities."""

    @abstractmethod
    async def upsert(
        self,
        provider: str,
        provider_id: str,
        user_id: UUID,
        tokens: OAuthTokens,
    ) -> LinkedAccount:
        """Insert the identity or refresh its tokens.

        An existing row only gets ``access_token``, ``refresh_token`` and
        ``expires_at`` replaced; its ``user_id`` is kept even when it
        differs from the one passed in.

        Raises
        ------
        LinkedAccountConflictError
            If a concurrent writer inserted the same identity first
        """

    @abstractmethod
    async def find(self, provider: str, provider_id: str) -> LinkedAccount | None:
        """Find a linked account by its federated identity."""

    @abstractmethod
    async def list_for_user(self, user_id: UUID) -> list[LinkedAccount]:
        """List all linked accounts owned by a user."""
