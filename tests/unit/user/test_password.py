"""Tests for salted password digests."""

import pytest

from chatroom.core.modules.user.password import hash_password, verify_password


class TestHashPassword:
    """Tests for hash_password function."""

    def test_format_is_salt_and_hex_digest(self):
        """Test the stored value is a 16-character salt and a SHA-256 hex digest."""
        salt, digest = hash_password("longpassword").split(":")
        assert len(salt) == 16
        assert len(digest) == 64
        int(digest, 16)

    def test_same_password_different_salts(self):
        """Test that hashing twice yields different stored values."""
        assert hash_password("longpassword") != hash_password("longpassword")


class TestVerifyPassword:
    """Tests for verify_password function."""

    @pytest.mark.parametrize("password", ["longpassword", "pässwörd-ñ", "with:colon", " spaced out ", "x" * 500])
    def test_correct_password_matches(self, password):
        assert verify_password(hash_password(password), password) is True

    def test_wrong_password_rejected(self):
        stored = hash_password("longpassword")
        assert verify_password(stored, "longpassworD") is False
        assert verify_password(stored, "longpassword ") is False
        assert verify_password(stored, "") is False

    @pytest.mark.parametrize("stored", ["", ":", "salt:", ":abcdef", "no-separator", "salt:nothex"])
    def test_malformed_stored_value_rejected(self, stored):
        """Test that malformed stored values return False instead of raising."""
        assert verify_password(stored, "longpassword") is False
