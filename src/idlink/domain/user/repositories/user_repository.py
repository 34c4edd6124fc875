"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Union
from uuid import UUID

from idlink.domain.user.aggregates.user import User
from idlink.domain.user.value_objects.email import Email


class UserRepository(ABC):
    """Repository interface for User aggregates."""

    @abstractmethod
    async def find_by_id(self, user_id: UUID) -> Optional[User]:
        """Find a user by their ID."""

    @abstractmethod
    async def find_by_email(self, email: Union[str, Email]) -> Optional[User]:
        """Find a user by their exact email address."""

    @abstractmethod
    async def create(
        self,
        email: Union[str, Email],
        name: str | None = None,
        picture: str | None = None,
    ) -> User:
        """Create a new user.

        Raises
        ------
        EmailAlreadyExistsError
            If the email is taken, including by a concurrent writer
        """

    @abstractmethod
    async def update_profile(
        self,
        user_id: UUID,
        name: str | None,
        picture: str | None,
    ) -> User:
        """Overwrite name and picture of an existing user.

        Raises
        ------
        UserNotFoundError
            If no user has this ID
        """

    @abstractmethod
    async def count(self) -> int:
        """Count total users."""
