"""Abstract repository interface for user credentials.

Password hashes are kept apart from the User aggregate so that no read
path of a user can ever leak them.
"""

from abc import ABC, abstractmethod
from uuid import UUID


class UserCredentialRepository(ABC):
    """Repository interface for local password credentials."""

    @abstractmethod
    async def find_hash(self, user_id: UUID, for_update: bool = False) -> str | None:
        """
        Read the stored password hash of a user.

        Parameters
        ----------
        user_id
            The user's unique identifier
        for_update
            Lock the credential row until the transaction ends

        Returns
        -------
        The bcrypt hash, or None for accounts without a local password
        """

    @abstractmethod
    async def save(self, user_id: UUID, password_hash: str) -> None:
        """
        Create or replace the credential of a user.

        Parameters
        ----------
        user_id
            The user's unique identifier
        password_hash
            The bcrypt password hash
        """
