"""idlink auth - generic authentication primitives.

This package has no dependency on the identity domain. It handles:
- Password hashing (bcrypt)
- Session token signing and verification (JWT)

Architecture:
    idlink_auth/
    ├── services/           # Pure logic (password hashing, JWT)
    ├── schemas.py          # Data classes
    └── exceptions.py       # Auth exceptions

Usage:
    from idlink_auth import PasswordHashingService, JWTService
"""

from idlink_auth.exceptions import (
    AuthError,
    Unauthenticated,
    WeakPasswordError,
)
from idlink_auth.schemas import SessionClaims
from idlink_auth.services import JWTService, PasswordHashingService

__all__ = [
    # Services
    "PasswordHashingService",
    "JWTService",
    # Schemas
    "SessionClaims",
    # Exceptions
    "AuthError",
    "Unauthenticated",
    "WeakPasswordError",
]
