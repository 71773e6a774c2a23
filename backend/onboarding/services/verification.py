"""Email verification state machine for dealer signups.

A signup is either unverified (with or without a pending token) or verified,
which is terminal. The store owns all state: every transition re-reads the
record and writes back with a single atomic UPDATE, so nothing is cached in
process between requests.

    create  -> unverified, token issued, email sent
    verify  -> verified, token cleared          (secret matches, not expired)
    resend  -> unverified, token replaced, email sent
"""

from __future__ import annotations

import datetime as dt
import logging

from sqlalchemy.orm import Session

from onboarding.core.exceptions import (
    AlreadyVerifiedError,
    LinkExpiredError,
    NoActiveTokenError,
    SignupNotFoundError,
    TokenMismatchError,
)
from onboarding.core.security import issue_verification_token, verify_secret
from onboarding.models.dealer_signup import EPOCH_ZERO, DealerSignup, token_fields, utcnow
from onboarding.services.email import Mailer, send_verification_email
from onboarding.services.store import (
    find_signup_by_email,
    insert_signup,
    update_signup_by_email,
)

logger = logging.getLogger(__name__)


def register_signup(
    db: Session,
    mailer: Mailer,
    record: DealerSignup,
    *,
    now: dt.datetime | None = None,
) -> DealerSignup:
    """Persist a new signup with a fresh token and send the verification email.

    A mail failure propagates as `MailError` but leaves the stored record in
    place; the resend flow can always recover it.
    """
    now = now or utcnow()
    secret, token = issue_verification_token(now)

    record.email_verified = False
    record.verified_at = EPOCH_ZERO
    record.created_at = now
    record.updated_at = now
    for column, value in token_fields(token).items():
        setattr(record, column, value)

    stored = insert_signup(db, record)
    logger.info("Signup stored, verification token issued: %s", stored.contact_email)

    send_verification_email(
        mailer,
        email=stored.contact_email,
        contact_name=stored.contact_full_name,
        secret=secret,
    )
    return stored


def verify_email(db: Session, email: str, secret: str, *, now: dt.datetime | None = None) -> DealerSignup:
    now = now or utcnow()
    record = find_signup_by_email(db, email)
    if record is None:
        logger.warning("Email verification failed: signup not found (%s)", email)
        raise SignupNotFoundError(email)

    token = record.verification
    if token is None:
        logger.warning("Email verification failed: no active token (%s)", email)
        raise NoActiveTokenError(email, already_verified=record.email_verified)
    if token.is_expired(now):
        logger.warning("Email verification failed: expired token (%s)", email)
        raise LinkExpiredError(email)
    if not verify_secret(secret, token.secret_hash):
        logger.warning("Email verification failed: token mismatch (%s)", email)
        raise TokenMismatchError()

    values = {
        **token_fields(None),
        "email_verified": True,
        "verified_at": now,
        "updated_at": now,
    }
    updated = update_signup_by_email(db, email, values, expected_hash=token.secret_hash)
    if updated is None:
        # The token was consumed or replaced between the read and the write.
        current = find_signup_by_email(db, email)
        if current is None:
            raise SignupNotFoundError(email)
        if current.verification is None:
            raise NoActiveTokenError(email, already_verified=current.email_verified)
        logger.warning("Email verification failed: token replaced concurrently (%s)", email)
        raise TokenMismatchError()

    logger.info("Email verified: %s", updated.contact_email)
    return updated


def resend_verification(
    db: Session,
    mailer: Mailer,
    email: str,
    *,
    now: dt.datetime | None = None,
) -> DealerSignup:
    now = now or utcnow()
    # Hash before touching the store; it is the slow part of the transition.
    secret, token = issue_verification_token(now)

    record = find_signup_by_email(db, email)
    if record is None:
        logger.warning("Verification resend failed: signup not found (%s)", email)
        raise SignupNotFoundError(email)
    if record.email_verified:
        raise AlreadyVerifiedError(email)

    values = {
        **token_fields(token),
        "email_verified": False,
        "verified_at": EPOCH_ZERO,
        "updated_at": now,
    }
    updated = update_signup_by_email(db, email, values, require_unverified=True)
    if updated is None:
        if find_signup_by_email(db, email) is None:
            raise SignupNotFoundError(email)
        raise AlreadyVerifiedError(email)
    logger.info("Verification token replaced: %s", updated.contact_email)

    send_verification_email(
        mailer,
        email=updated.contact_email,
        contact_name=updated.contact_full_name,
        secret=secret,
    )
    return updated
