"""Unit tests for SessionService."""

from datetime import timedelta
from uuid import uuid4

import pytest

from idlink.application.services import SessionService
from idlink.domain.user import User
from idlink_auth import JWTService, Unauthenticated

TEST_EMAIL = "ada@example.com"


class TestSessionService:
    @pytest.fixture(autouse=True)
    def _setup(self, runner):
        self.runner = runner
        self.uow = runner.uow
        self.jwt_service = JWTService(secret_key="test-secret-key-12345")
        self.service = SessionService(
            transactions=runner,
            jwt_service=self.jwt_service,
        )

    @pytest.mark.asyncio
    async def test_authenticate_returns_public_user(self):
        user = User.create(TEST_EMAIL, name="Ada")
        self.uow.users.find_by_id.return_value = user
        token = self.jwt_service.create_access_token(user.id, user.email)

        public = await self.service.authenticate(token)

        assert public == user.to_public()
        self.uow.users.find_by_id.assert_called_once_with(user.id)

    @pytest.mark.asyncio
    async def test_deleted_user_is_unauthenticated(self):
        self.uow.users.find_by_id.return_value = None
        token = self.jwt_service.create_access_token(uuid4(), TEST_EMAIL)

        with pytest.raises(Unauthenticated):
            await self.service.authenticate(token)

    @pytest.mark.asyncio
    async def test_expired_token_never_reaches_store(self):
        token = self.jwt_service.create_access_token(
            uuid4(),
            TEST_EMAIL,
            expires_delta=timedelta(seconds=-1),
        )

        with pytest.raises(Unauthenticated):
            await self.service.authenticate(token)

        assert self.runner.calls == 0

    def test_verify_token_returns_claims(self):
        user_id = uuid4()
        token = self.jwt_service.create_access_token(user_id, TEST_EMAIL)

        claims = self.service.verify_token(token)

        assert claims.subject == user_id
        assert claims.email == TEST_EMAIL
