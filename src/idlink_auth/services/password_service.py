"""bcrypt credential store.

Pure functions over plaintext and hashes; no I/O. Callers in async code
run ``hash`` and ``verify`` in a worker thread; both are CPU bound.
"""

import bcrypt

from idlink_auth.exceptions import WeakPasswordError

# bcrypt only accepts work factors in this range
BCRYPT_MIN_ROUNDS = 4
BCRYPT_MAX_ROUNDS = 31


class PasswordHashingService:
    """Hashes and checks local passwords with one configured cost factor.

    Registration and rotation share the same instance, so a rotated
    password is never hashed more weakly than a freshly registered one.

    Examples
    --------
    >>> store = PasswordHashingService(rounds=12)
    >>> stored = store.hash("correct horse battery")
    >>> store.verify("correct horse battery", stored)
    True
    """

    MIN_LENGTH = 8
    # bcrypt rejects inputs longer than 72 bytes
    MAX_BYTES = 72

    def __init__(self, rounds: int = 12, min_length: int = MIN_LENGTH):
        """
        Parameters
        ----------
        rounds
            Cost factor (log2 of the key expansion iterations). Operators
            raise it over time through configuration.
        min_length
            Shortest accepted password, in characters
        """
        self._check_rounds(rounds)
        self._rounds = rounds
        self._min_length = min_length

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, password: str, rounds: int | None = None) -> str:
        """Return a salted bcrypt hash of ``password``.

        Raises
        ------
        WeakPasswordError
            If the password fails the strength policy
        ValueError
            If ``rounds`` is outside bcrypt's range
        """
        self.validate_strength(password)
        cost = self._rounds if rounds is None else rounds
        self._check_rounds(cost)
        digest = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=cost))
        return digest.decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Constant-time check of ``password`` against a stored hash.

        A malformed stored hash counts as a mismatch.
        """
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"),
                password_hash.encode("utf-8"),
            )
        except (ValueError, TypeError):
            return False

    def validate_strength(self, password: str) -> None:
        if not password:
            msg = "Password cannot be empty"
            raise WeakPasswordError(msg)

        if len(password) < self._min_length:
            msg = f"Password must be at least {self._min_length} characters"
            raise WeakPasswordError(msg)

        if len(password.encode("utf-8")) > self.MAX_BYTES:
            msg = f"Password cannot exceed {self.MAX_BYTES} bytes"
            raise WeakPasswordError(msg)

    def needs_rehash(self, password_hash: str) -> bool:
        """True if the hash was made with a cost other than the configured one."""
        # $2b$<cost>$<salt+digest>
        parts = password_hash.split("$")
        if len(parts) < 4:
            return True
        try:
            return int(parts[2]) != self._rounds
        except ValueError:
            return True

    @staticmethod
    def _check_rounds(rounds: int) -> None:
        if not BCRYPT_MIN_ROUNDS <= rounds <= BCRYPT_MAX_ROUNDS:
            msg = (
                f"bcrypt rounds must be between {BCRYPT_MIN_ROUNDS} "
                f"and {BCRYPT_MAX_ROUNDS}, got {rounds}"
            )
            raise ValueError(msg)
