"""Session token issuer (HS256 JWT)."""

import logging
from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt

from idlink_auth.exceptions import Unauthenticated
from idlink_auth.schemas import SessionClaims

logger = logging.getLogger(__name__)


class JWTService:
    """Signs and verifies short-lived session tokens.

    Tokens carry ``sub`` (user id), ``email``, ``iat`` and ``exp``. There
    are no refresh tokens and no revocation list; a token is valid until
    it expires.

    Examples
    --------
    >>> issuer = JWTService(secret_key="s3cret", access_token_expire_hours=1)
    >>> token = issuer.create_access_token(user.id, user.email)
    >>> issuer.verify_token(token).subject == user.id
    True
    """

    DEFAULT_ACCESS_EXPIRE_HOURS = 24
    ALGORITHM = "HS256"

    def __init__(
        self,
        secret_key: str,
        access_token_expire_hours: int = DEFAULT_ACCESS_EXPIRE_HOURS,
    ):
        """
        Parameters
        ----------
        secret_key
            HMAC signing key, read once from configuration at startup
        access_token_expire_hours
            Default token lifetime
        """
        if not secret_key:
            msg = "JWT secret key cannot be empty"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._ttl = timedelta(hours=access_token_expire_hours)

    def create_access_token(
        self,
        user_id: UUID,
        email: str,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Sign a token for ``user_id``; ``expires_delta`` overrides the lifetime."""
        issued_at = datetime.now(tz=timezone.utc)
        claims = {
            "sub": str(user_id),
            "email": email,
            "iat": issued_at,
            "exp": issued_at + (expires_delta or self._ttl),
        }
        return jwt.encode(claims, self._secret_key, algorithm=self.ALGORITHM)

    def verify_token(self, token: str) -> SessionClaims:
        """Decode ``token`` and return its claims.

        Raises
        ------
        Unauthenticated
            For every failure (expired, bad signature, malformed, missing
            claims). The cause is only logged at debug level.
        """
        try:
            decoded = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.ALGORITHM],
                options={"require": ["sub", "exp"]},
            )
            return SessionClaims(
                subject=UUID(decoded["sub"]),
                email=decoded["email"],
                expires_at=datetime.fromtimestamp(decoded["exp"], tz=timezone.utc),
            )
        except jwt.InvalidTokenError as e:
            logger.debug("Token rejected: %s", type(e).__name__)
            raise Unauthenticated from e
        except (KeyError, ValueError, TypeError) as e:
            logger.debug("Token payload malformed: %s", type(e).__name__)
            raise Unauthenticated from e
