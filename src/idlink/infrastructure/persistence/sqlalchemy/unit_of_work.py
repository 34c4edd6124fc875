"""SQLAlchemy transaction runner.

One call to ``run`` = one session, one connection, one transaction:

1. acquire a pooled connection and BEGIN, bounded by ``max_wait``
2. run the unit of work, bounded by ``timeout``
3. COMMIT on success, ROLLBACK on any failure

The session is closed on every exit path so the connection always goes
back to the pool, including when a caller retries.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from sqlalchemy import text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from idlink.application.ports import AccountUnitOfWork, TransactionRunner
from idlink.exceptions import TransactionTimeoutError
from idlink.infrastructure.persistence.sqlalchemy.repositories import (
    LinkedAccountRepositorySQLAlchemy,
    UserCredentialRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# PostgreSQL SQLSTATEs for lock_not_available and query_canceled
_TIMEOUT_SQLSTATES = frozenset({"55P03", "57014"})


class SQLAlchemyAccountUnitOfWork(AccountUnitOfWork):
    """The three account repositories bound to one session."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.users = UserRepositorySQLAlchemy(session)
        self.linked_accounts = LinkedAccountRepositorySQLAlchemy(session)
        self.credentials = UserCredentialRepositorySQLAlchemy(session)


class SQLAlchemyTransactionRunner(TransactionRunner):
    """Runs units of work against a shared async session maker."""

    DEFAULT_MAX_WAIT_SECONDS = 10.0
    DEFAULT_TIMEOUT_SECONDS = 15.0

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        max_wait: float = DEFAULT_MAX_WAIT_SECONDS,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the runner.

        Parameters
        ----------
        session_maker
            Session factory bound to the shared engine (the pool)
        max_wait
            Seconds allowed for acquiring a connection and starting the
            transaction; also used as the server-side lock wait limit
        timeout
            Seconds allowed for the unit of work itself
        """
        self._session_maker = session_maker
        self._max_wait = max_wait
        self._timeout = timeout

    async def run(self, work: Callable[[AccountUnitOfWork], Awaitable[T]]) -> T:
        async with self._session_maker() as session:
            await self._begin(session)

            try:
                result = await asyncio.wait_for(
                    work(SQLAlchemyAccountUnitOfWork(session)),
                    timeout=self._timeout,
                )
                await session.commit()
            except asyncio.TimeoutError as e:
                await self._abort(session)
                logger.warning(
                    "Transaction exceeded %.1fs and was rolled back",
                    self._timeout,
                )
                raise TransactionTimeoutError from e
            except DBAPIError as e:
                await session.rollback()
                if _is_timeout(e):
                    logger.warning("Transaction hit a database lock/statement timeout")
                    raise TransactionTimeoutError from e
                raise
            except BaseException:
                await session.rollback()
                raise

            return result

    async def _abort(self, session: AsyncSession) -> None:
        """Roll back after a cancelled unit of work.

        The cancelled statement may have left the connection unusable; in
        that case it is invalidated instead of being returned to the pool.
        """
        try:
            await session.rollback()
        except DBAPIError:
            logger.warning("Rollback after timeout failed, discarding connection")
            await session.invalidate()

    async def _begin(self, session: AsyncSession) -> None:
        """Check out a connection and open the transaction within max_wait."""
        try:
            connection = await asyncio.wait_for(
                session.connection(),
                timeout=self._max_wait,
            )
        except (asyncio.TimeoutError, PoolTimeoutError) as e:
            logger.warning(
                "No database connection available within %.1fs",
                self._max_wait,
            )
            raise TransactionTimeoutError from e

        if connection.dialect.name == "postgresql":
            # SET LOCAL cannot take bind parameters
            lock_timeout_ms = int(self._max_wait * 1000)
            await session.execute(text(f"SET LOCAL lock_timeout = {lock_timeout_ms}"))


def _is_timeout(error: DBAPIError) -> bool:
    orig = error.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    return code in _TIMEOUT_SQLSTATES
