"""Email verification link endpoints (verify, resend), rendered as HTML pages."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from onboarding.core.deps import get_mailer
from onboarding.core.exceptions import (
    AlreadyVerifiedError,
    LinkExpiredError,
    MailError,
    MalformedLinkError,
    NoActiveTokenError,
    SignupNotFoundError,
    StoreError,
    TokenMismatchError,
)
from onboarding.core.links import decode_resend_payload, decode_verify_payload
from onboarding.core.rate_limit import rate_limit
from onboarding.db.session import get_db
from onboarding.services import pages
from onboarding.services.email import Mailer
from onboarding.services.verification import resend_verification, verify_email

router = APIRouter(dependencies=[Depends(rate_limit("verification"))])
logger = logging.getLogger(__name__)


def _page(status_code: int, content: str) -> HTMLResponse:
    return HTMLResponse(content=content, status_code=status_code)


@router.get("/verify-email", response_class=HTMLResponse)
def verify_email_link(data: str | None = None, db: Session = Depends(get_db)) -> HTMLResponse:
    if not data:
        return _page(400, pages.error_page(1, pages.error_msg_bad_link()))
    try:
        email, key = decode_verify_payload(data)
    except MalformedLinkError as exc:
        logger.warning("Verification link rejected: %s", exc.message)
        return _page(400, pages.error_page(2, pages.error_msg_bad_link()))

    try:
        record = verify_email(db, email, key)
    except StoreError as exc:
        return _page(exc.status_code, pages.error_page(4, pages.error_msg_try_again()))
    except SignupNotFoundError as exc:
        return _page(exc.status_code, pages.error_page(5, pages.error_msg_support()))
    except NoActiveTokenError as exc:
        if exc.already_verified:
            return _page(exc.status_code, pages.already_verified_page())
        return _page(exc.status_code, pages.error_page(9, pages.error_msg_support()))
    except LinkExpiredError as exc:
        return _page(exc.status_code, pages.link_expired_page(exc.email))
    except TokenMismatchError as exc:
        return _page(exc.status_code, pages.error_page(6, pages.error_msg_support()))

    return _page(200, pages.verified_page(record.dealership_country, record.dealership_billing_email))


@router.get("/resend-verification-email", response_class=HTMLResponse)
def resend_verification_link(
    data: str | None = None,
    db: Session = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
) -> HTMLResponse:
    try:
        email = decode_resend_payload(data)
    except MalformedLinkError as exc:
        logger.warning("Verification link rejected: %s", exc.message)
        return _page(400, pages.error_page(2, pages.error_msg_bad_link()))

    try:
        resend_verification(db, mailer, email)
    except StoreError as exc:
        return _page(exc.status_code, pages.error_page(13, pages.error_msg_try_again()))
    except SignupNotFoundError as exc:
        return _page(exc.status_code, pages.error_page(14, pages.error_msg_try_again()))
    except AlreadyVerifiedError as exc:
        return _page(exc.status_code, pages.already_verified_page())
    except MailError as exc:
        return _page(exc.status_code, pages.error_page(16, pages.error_msg_try_again()))

    return _page(200, pages.resent_page())
