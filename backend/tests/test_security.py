from __future__ import annotations

import datetime as dt

from onboarding.core.security import (
    SECRET_ALPHABET,
    generate_secret,
    hash_secret,
    issue_verification_token,
    verify_secret,
)

NOW = dt.datetime(2026, 3, 1, 12, 0, tzinfo=dt.timezone.utc)


def test_generated_secret_is_32_alphanumeric_characters() -> None:
    secret = generate_secret()

    assert len(secret) == 32
    assert set(secret) <= set(SECRET_ALPHABET)
    assert generate_secret() != secret


def test_hash_is_salted_and_verifies_only_the_original_secret() -> None:
    first = hash_secret("s3cret")
    second = hash_secret("s3cret")

    assert first != second
    assert "s3cret" not in first
    assert verify_secret("s3cret", first)
    assert verify_secret("s3cret", second)
    assert not verify_secret("other", first)


def test_verify_secret_rejects_corrupted_hash() -> None:
    assert not verify_secret("s3cret", "not-a-hash")


def test_issued_token_expires_after_24_hours() -> None:
    secret, token = issue_verification_token(NOW)

    assert verify_secret(secret, token.secret_hash)
    assert token.expires_at == NOW + dt.timedelta(hours=24)
    assert not token.is_expired(NOW + dt.timedelta(hours=23, minutes=59))
    assert token.is_expired(NOW + dt.timedelta(hours=24, seconds=1))


def test_token_expiry_accepts_naive_timestamps_as_utc() -> None:
    _, token = issue_verification_token(NOW)
    naive_later = (NOW + dt.timedelta(days=2)).replace(tzinfo=None)

    assert token.is_expired(naive_later)
