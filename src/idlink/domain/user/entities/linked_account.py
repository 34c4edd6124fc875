"""LinkedAccount entity.

Binds one federated identity to exactly one local user.

Invariants:
- ``(provider, provider_id)`` is globally unique
- ``user_id`` never changes after creation
- only the provider tokens and their expiry are refreshed on later logins
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class LinkedAccount:
    id: UUID
    provider: str
    provider_id: str
    user_id: UUID
    access_token: str | None
    refresh_token: str | None
    expires_at: datetime | None
    created_at: datetime
    updated_at: datetime

    def is_token_expired(self, now: datetime) -> bool:
        if self.expires_at is None:
            return False
        return now >= self.expires_at
