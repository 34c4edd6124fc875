"""Atomicity, timeout and race-retry behavior on a real database."""

import asyncio

import pytest

from idlink.domain.user import FederatedProfile
from idlink.exceptions import TransactionTimeoutError
from idlink.infrastructure.persistence.sqlalchemy import (
    SQLAlchemyTransactionRunner,
    UserRepositorySQLAlchemy,
)

TEST_EMAIL = "ada@example.com"


@pytest.mark.asyncio
async def test_failed_unit_of_work_is_rolled_back(transactions):
    async def work(uow):
        await uow.users.create(TEST_EMAIL)
        raise RuntimeError("after the insert")

    with pytest.raises(RuntimeError):
        await transactions.run(work)

    assert await transactions.run(lambda uow: uow.users.count()) == 0


@pytest.mark.asyncio
async def test_timed_out_unit_of_work_leaves_storage_unchanged(
    session_maker,
    transactions,
):
    runner = SQLAlchemyTransactionRunner(session_maker, timeout=0.1)

    async def slow(uow):
        await uow.users.create(TEST_EMAIL)
        await asyncio.sleep(1.0)

    with pytest.raises(TransactionTimeoutError):
        await runner.run(slow)

    assert await transactions.run(lambda uow: uow.users.count()) == 0


@pytest.mark.asyncio
async def test_lost_creation_race_is_retried(services, transactions, monkeypatch):
    """A create that loses to a committed row resolves on the retry."""
    winner = await services.reconciliation.reconcile(
        FederatedProfile(email=TEST_EMAIL, provider="google", provider_id="g-1")
    )

    original = UserRepositorySQLAlchemy.find_by_email
    lookups = []

    async def stale_first_lookup(self, email):
        # First lookup behaves as if the winner had not committed yet
        lookups.append(email)
        if len(lookups) == 1:
            return None
        return await original(self, email)

    monkeypatch.setattr(UserRepositorySQLAlchemy, "find_by_email", stale_first_lookup)

    loser = await services.reconciliation.reconcile(
        FederatedProfile(email=TEST_EMAIL, provider="github", provider_id="42")
    )

    assert len(lookups) == 2
    assert loser.user.id == winner.user.id
    assert await transactions.run(lambda uow: uow.users.count()) == 1
