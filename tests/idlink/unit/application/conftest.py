"""Fixtures for application service unit tests."""

from unittest.mock import AsyncMock

import pytest

from idlink.application.ports import AccountUnitOfWork, TransactionRunner


class FakeUnitOfWork(AccountUnitOfWork):
    def __init__(self):
        self.users = AsyncMock()
        self.linked_accounts = AsyncMock()
        self.credentials = AsyncMock()


class FakeTransactionRunner(TransactionRunner):
    """Runs work directly against a mocked unit of work.

    Exceptions queued in ``failures`` are raised by the next calls to
    ``run`` instead of executing the work, mimicking a transaction that
    lost a race and was rolled back.
    """

    def __init__(self):
        self.uow = FakeUnitOfWork()
        self.failures: list[Exception] = []
        self.calls = 0

    async def run(self, work):
        self.calls += 1
        if self.failures:
            raise self.failures.pop(0)
        return await work(self.uow)


@pytest.fixture
def runner() -> FakeTransactionRunner:
    return FakeTransactionRunner()
