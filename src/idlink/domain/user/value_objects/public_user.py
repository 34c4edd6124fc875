from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class PublicUser:
    """Read projection of a User that is safe to hand to callers.

    Carries no credential material.
    """

    id: UUID
    email: str
    name: str | None = None
    picture: str | None = None
