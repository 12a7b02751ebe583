"""Tests for password hashing."""

from app.auth.passwords import hash_password, verify_password


def test_hash_is_salted() -> None:
    """Hashing the same password twice gives different hashes."""
    assert hash_password("secret123") != hash_password("secret123")


def test_verify_matches_only_original_password() -> None:
    """Only the original password verifies."""
    password_hash = hash_password("secret123")
    assert verify_password(password_hash, "secret123") is True
    assert verify_password(password_hash, "secret124") is False


def test_verify_rejects_unreadable_hash() -> None:
    """A corrupt stored hash never verifies."""
    assert verify_password("plaintext", "plaintext") is False
