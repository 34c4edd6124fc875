"""Unit tests for PasswordHashingService."""

import pytest

from idlink_auth.exceptions import WeakPasswordError
from idlink_auth.services import PasswordHashingService


class TestPasswordHashingService:
    """Tests for password hashing and verification."""

    def setup_method(self):
        """Set up test fixtures."""
        self.service = PasswordHashingService(rounds=4)  # Low rounds for fast tests

    def test_hash_returns_bcrypt_format(self):
        hashed = self.service.hash("secure_password123")

        assert hashed.startswith("$2")
        assert len(hashed) >= 50

    def test_hash_uses_configured_rounds(self):
        hashed = self.service.hash("secure_password123")

        assert hashed.split("$")[2] == "04"

    def test_verify_correct_password(self):
        hashed = self.service.hash("my_secret_password")

        assert self.service.verify("my_secret_password", hashed) is True

    def test_verify_incorrect_password(self):
        hashed = self.service.hash("my_secret_password")

        assert self.service.verify("wrong_password", hashed) is False

    def test_verify_invalid_hash_returns_false(self):
        """Malformed stored hashes never raise."""
        assert self.service.verify("password", "not_a_valid_hash") is False
        assert self.service.verify("password", "") is False

    def test_hash_produces_different_hashes(self):
        """Random salt makes every hash unique."""
        hash1 = self.service.hash("same_password")
        hash2 = self.service.hash("same_password")

        assert hash1 != hash2
        assert self.service.verify("same_password", hash1)
        assert self.service.verify("same_password", hash2)

    def test_hash_rounds_override(self):
        hashed = self.service.hash("secure_password123", rounds=5)

        assert hashed.split("$")[2] == "05"

    @pytest.mark.parametrize("rounds", [3, 32])
    def test_rounds_outside_bcrypt_range_rejected(self, rounds):
        with pytest.raises(ValueError, match="between 4 and 31"):
            PasswordHashingService(rounds=rounds)


class TestPasswordValidation:
    """Tests for password strength validation."""

    def setup_method(self):
        self.service = PasswordHashingService(rounds=4)

    def test_empty_password_rejected(self):
        with pytest.raises(WeakPasswordError, match="cannot be empty"):
            self.service.validate_strength("")

    def test_short_password_rejected(self):
        with pytest.raises(WeakPasswordError, match="at least 8"):
            self.service.validate_strength("short")

    def test_custom_min_length(self):
        service = PasswordHashingService(rounds=4, min_length=12)

        with pytest.raises(WeakPasswordError, match="at least 12"):
            service.validate_strength("elevenchars")

    def test_password_over_72_bytes_rejected(self):
        # 37 two-byte characters: long enough by length, too long in bytes
        with pytest.raises(WeakPasswordError, match="72 bytes"):
            self.service.validate_strength("ä" * 37)

    def test_password_at_72_bytes_accepted(self):
        self.service.validate_strength("a" * 72)

    def test_hash_validates_strength(self):
        with pytest.raises(WeakPasswordError):
            self.service.hash("short")


class TestNeedsRehash:
    """Tests for work factor upgrade detection."""

    def test_same_rounds_no_rehash(self):
        service = PasswordHashingService(rounds=4)
        hashed = service.hash("secure_password123")

        assert service.needs_rehash(hashed) is False

    def test_raised_rounds_need_rehash(self):
        old = PasswordHashingService(rounds=4)
        new = PasswordHashingService(rounds=5)
        hashed = old.hash("secure_password123")

        assert new.needs_rehash(hashed) is True

    def test_garbage_hash_needs_rehash(self):
        service = PasswordHashingService(rounds=4)

        assert service.needs_rehash("garbage") is True
