"""Transactional access to the account repositories.

Every multi-step mutation runs as one unit of work: a single handle that
bundles the user, linked account and credential repositories over the
same database transaction. Services never call repositories outside a
unit of work.
"""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import TypeVar

from idlink.domain.user.repositories import (
    LinkedAccountRepository,
    UserCredentialRepository,
    UserRepository,
)

T = TypeVar("T")


class AccountUnitOfWork(ABC):
    """Repositories sharing one open transaction."""

    users: UserRepository
    linked_accounts: LinkedAccountRepository
    credentials: UserCredentialRepository


class TransactionRunner(ABC):
    """Runs a unit of work atomically with bounded wait and execution time."""

    @abstractmethod
    async def run(self, work: Callable[[AccountUnitOfWork], Awaitable[T]]) -> T:
        """Execute ``work`` inside one transaction and commit on success.

        Raises
        ------
        TransactionTimeoutError
            If acquiring the transaction or running ``work`` exceeds its
            bound; nothing is committed in that case
        """
