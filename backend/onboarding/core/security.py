"""Security helpers for issuing and checking email verification tokens."""

from __future__ import annotations

import datetime as dt
import secrets
import string

from passlib.context import CryptContext

from onboarding.core.config import settings
from onboarding.models.dealer_signup import VerificationToken, utcnow

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
SECRET_ALPHABET = string.ascii_letters + string.digits


def generate_secret(length: int | None = None) -> str:
    size = length or settings.VERIFICATION_SECRET_LENGTH
    return "".join(secrets.choice(SECRET_ALPHABET) for _ in range(size))


def hash_secret(secret: str) -> str:
    return pwd_context.hash(secret)


def verify_secret(secret: str, hashed: str) -> bool:
    try:
        return pwd_context.verify(secret, hashed)
    except ValueError:
        # Unrecognised or corrupted hash in the store.
        return False


def issue_verification_token(now: dt.datetime | None = None) -> tuple[str, VerificationToken]:
    """Create a one-time secret and the hashed token that is persisted for it.

    The plain secret is only ever returned to the caller so it can be embedded
    in the verification link; the store receives the salted hash.
    """
    issued_at = now or utcnow()
    secret = generate_secret()
    token = VerificationToken(
        secret_hash=hash_secret(secret),
        expires_at=issued_at + dt.timedelta(hours=settings.VERIFICATION_TOKEN_EXPIRE_HOURS),
    )
    return secret, token
