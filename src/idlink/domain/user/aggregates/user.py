"""User aggregate for identity concerns only."""

from datetime import datetime
from typing import Union
from uuid import UUID, uuid4

from idlink.domain.shared.time import utc_now
from idlink.domain.user.value_objects.email import Email
from idlink.domain.user.value_objects.public_user import PublicUser


class User:
    """
    User aggregate root.

    Holds the identity attributes only. The password hash lives in the
    credential store and is never part of this object.
    """

    def __init__(
        self,
        email: Union[str, Email],
        name: str | None = None,
        picture: str | None = None,
        id: UUID | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        self._email = email if isinstance(email, Email) else Email(email)
        self._id = id or uuid4()
        self._name = name
        self._picture = picture
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def email(self) -> str:
        return self._email.value

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def picture(self) -> str | None:
        return self._picture

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def refresh_profile(
        self,
        name: str | None = None,
        picture: str | None = None,
    ) -> bool:
        """Apply provider-reported profile fields.

        A field is only taken over when the incoming value is truthy and
        differs from the stored one, so a provider that omits a field never
        erases data another provider supplied.

        Returns
        -------
        True if any field changed
        """
        changed = False
        if name and name != self._name:
            self._name = name
            changed = True
        if picture and picture != self._picture:
            self._picture = picture
            changed = True
        if changed:
            self._updated_at = utc_now()
        return changed

    def to_public(self) -> PublicUser:
        return PublicUser(
            id=self._id,
            email=self.email,
            name=self._name,
            picture=self._picture,
        )

    @classmethod
    def create(
        cls,
        email: Union[str, Email],
        name: str | None = None,
        picture: str | None = None,
    ) -> "User":
        return cls(email=email, name=name, picture=picture)

    @classmethod
    def reconstitute(  # noqa: PLR0913
        cls,
        id: UUID,
        email: Union[str, Email],
        name: str | None,
        picture: str | None,
        created_at: datetime,
        updated_at: datetime,
    ) -> "User":
        return cls(
            id=id,
            email=email,
            name=name,
            picture=picture,
            created_at=created_at,
            updated_at=updated_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"User(id={self._id}, email={self._email.value})"
