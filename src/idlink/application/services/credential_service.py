"""Local password credentials: registration and rotation."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING
from uuid import UUID

from idlink.domain.user import (
    Email,
    EmailAlreadyExistsError,
    PublicUser,
    UserNotFoundError,
)
from idlink.exceptions import (
    AuthenticationError,
    NoCredentialError,
    ValidationError,
)
from idlink_auth import WeakPasswordError

if TYPE_CHECKING:
    from idlink.application.ports import AccountUnitOfWork, TransactionRunner
    from idlink_auth import PasswordHashingService

logger = logging.getLogger(__name__)


class CredentialService:
    """
    Application service for local password credentials.

    bcrypt work is pushed to a worker thread so that hashing never
    blocks the event loop serving other requests. Registration and
    rotation share the configured work factor.
    """

    def __init__(
        self,
        transactions: TransactionRunner,
        password_service: PasswordHashingService,
    ):
        self._transactions = transactions
        self._password_service = password_service

    async def register_local(
        self,
        email: str,
        name: str | None,
        password: str,
    ) -> PublicUser:
        email_value = Email(email).value
        self._check_strength(password)

        # Fail fast before paying for the hash; the unique constraint
        # still decides a concurrent registration.
        if await self._transactions.run(
            lambda uow: uow.users.find_by_email(email_value),
        ):
            raise EmailAlreadyExistsError(email_value)

        password_hash = await asyncio.to_thread(self._password_service.hash, password)

        async def _create(uow: AccountUnitOfWork) -> PublicUser:
            user = await uow.users.create(email=email_value, name=name)
            await uow.credentials.save(user_id=user.id, password_hash=password_hash)
            return user.to_public()

        public_user = await self._transactions.run(_create)
        logger.info("User registered with local password: %s", public_user.id)
        return public_user

    async def change_password(
        self,
        user_id: UUID,
        old_password: str,
        new_password: str,
        confirm_new_password: str | None = None,
    ) -> PublicUser:
        """Rotate the local password of ``user_id``.

        Returns the id, email and name of the user; ``picture`` is left
        unset.
        """
        if confirm_new_password is not None and confirm_new_password != new_password:
            msg = "New passwords do not match"
            raise ValidationError(msg)
        self._check_strength(new_password)

        async def _rotate(uow: AccountUnitOfWork) -> PublicUser:
            current_hash = await uow.credentials.find_hash(user_id, for_update=True)
            if current_hash is None:
                raise NoCredentialError

            matches = await asyncio.to_thread(
                self._password_service.verify,
                old_password,
                current_hash,
            )
            if not matches:
                raise AuthenticationError

            new_hash = await asyncio.to_thread(
                self._password_service.hash,
                new_password,
            )
            await uow.credentials.save(user_id=user_id, password_hash=new_hash)

            user = await uow.users.find_by_id(user_id)
            if user is None:
                raise UserNotFoundError(str(user_id))
            return PublicUser(id=user.id, email=user.email, name=user.name)

        try:
            public_user = await self._transactions.run(_rotate)
        except AuthenticationError:
            logger.info("Password change rejected for user %s", user_id)
            raise

        logger.info("Password changed for user: %s", user_id)
        return public_user

    def _check_strength(self, password: str) -> None:
        try:
            self._password_service.validate_strength(password)
        except WeakPasswordError as e:
            raise ValidationError(e.message) from e
