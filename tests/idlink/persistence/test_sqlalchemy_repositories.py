"""Repository tests against in-memory SQLite."""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from idlink.domain.user import (
    EmailAlreadyExistsError,
    OAuthTokens,
    UserNotFoundError,
)
from idlink.infrastructure.persistence.sqlalchemy import (
    LinkedAccountRepositorySQLAlchemy,
    UserCredentialRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)

TEST_EMAIL = "ada@example.com"
EXPIRES = datetime(2030, 1, 1, tzinfo=timezone.utc)


class TestUserRepositorySQLAlchemy:
    @pytest.fixture(autouse=True)
    def _setup(self, db_session):
        self.session = db_session
        self.repo = UserRepositorySQLAlchemy(db_session)

    @pytest.mark.asyncio
    async def test_create_and_find_by_id(self):
        user = await self.repo.create(TEST_EMAIL, name="Ada", picture="P1")

        found = await self.repo.find_by_id(user.id)

        assert found == user
        assert found.email == TEST_EMAIL
        assert found.name == "Ada"
        assert found.picture == "P1"
        assert found.created_at.tzinfo is not None

    @pytest.mark.asyncio
    async def test_find_by_id_not_found(self):
        assert await self.repo.find_by_id(uuid4()) is None

    @pytest.mark.asyncio
    async def test_find_by_email(self):
        user = await self.repo.create(TEST_EMAIL)

        found = await self.repo.find_by_email(TEST_EMAIL)

        assert found is not None
        assert found.id == user.id

    @pytest.mark.asyncio
    async def test_find_by_email_exact_match(self):
        """Email case is preserved, so lookups are exact."""
        await self.repo.create(TEST_EMAIL)

        assert await self.repo.find_by_email("ADA@example.com") is None

    @pytest.mark.asyncio
    async def test_duplicate_email_raises_conflict(self):
        await self.repo.create(TEST_EMAIL)

        with pytest.raises(EmailAlreadyExistsError):
            await self.repo.create(TEST_EMAIL)

    @pytest.mark.asyncio
    async def test_update_profile(self):
        user = await self.repo.create(TEST_EMAIL, name="A", picture="P1")

        updated = await self.repo.update_profile(user.id, name="A", picture="P2")

        assert updated.picture == "P2"
        assert (await self.repo.find_by_id(user.id)).picture == "P2"

    @pytest.mark.asyncio
    async def test_update_profile_unknown_user(self):
        with pytest.raises(UserNotFoundError):
            await self.repo.update_profile(uuid4(), name="A", picture=None)

    @pytest.mark.asyncio
    async def test_count(self):
        await self.repo.create(TEST_EMAIL)
        await self.repo.create("grace@example.com")

        assert await self.repo.count() == 2


class TestLinkedAccountRepositorySQLAlchemy:
    @pytest.fixture(autouse=True)
    def _setup(self, db_session):
        self.users = UserRepositorySQLAlchemy(db_session)
        self.repo = LinkedAccountRepositorySQLAlchemy(db_session)

    @pytest.mark.asyncio
    async def test_upsert_creates_link(self):
        user = await self.users.create(TEST_EMAIL)

        linked = await self.repo.upsert(
            provider="google",
            provider_id="g-1",
            user_id=user.id,
            tokens=OAuthTokens("at", "rt", EXPIRES),
        )

        assert linked.user_id == user.id
        assert linked.access_token == "at"
        assert linked.expires_at == EXPIRES

    @pytest.mark.asyncio
    async def test_upsert_existing_refreshes_tokens_only(self):
        owner = await self.users.create(TEST_EMAIL)
        other = await self.users.create("grace@example.com")
        first = await self.repo.upsert("google", "g-1", owner.id, OAuthTokens("at1"))

        second = await self.repo.upsert(
            "google",
            "g-1",
            other.id,
            OAuthTokens("at2", "rt2", EXPIRES),
        )

        assert second.id == first.id
        assert second.user_id == owner.id
        assert second.access_token == "at2"
        assert second.refresh_token == "rt2"
        assert len(await self.repo.list_for_user(other.id)) == 0

    @pytest.mark.asyncio
    async def test_find_and_list(self):
        user = await self.users.create(TEST_EMAIL)
        await self.repo.upsert("google", "g-1", user.id, OAuthTokens())
        await self.repo.upsert("github", "42", user.id, OAuthTokens())

        assert await self.repo.find("github", "42") is not None
        assert await self.repo.find("github", "43") is None
        providers = {a.provider for a in await self.repo.list_for_user(user.id)}
        assert providers == {"google", "github"}


class TestUserCredentialRepositorySQLAlchemy:
    @pytest.fixture(autouse=True)
    def _setup(self, db_session):
        self.users = UserRepositorySQLAlchemy(db_session)
        self.repo = UserCredentialRepositorySQLAlchemy(db_session)

    @pytest.mark.asyncio
    async def test_no_credential_returns_none(self):
        user = await self.users.create(TEST_EMAIL)

        assert await self.repo.find_hash(user.id) is None

    @pytest.mark.asyncio
    async def test_save_inserts_then_updates(self):
        user = await self.users.create(TEST_EMAIL)

        await self.repo.save(user.id, "$2b$04$first")
        assert await self.repo.find_hash(user.id) == "$2b$04$first"

        await self.repo.save(user.id, "$2b$04$second")
        assert await self.repo.find_hash(user.id, for_update=True) == "$2b$04$second"
