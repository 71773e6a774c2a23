"""Dealer and dealer group signup flows."""

from __future__ import annotations

import datetime as dt
import logging

from sqlalchemy.orm import Session

from onboarding.core.exceptions import BadRequestError, DuplicateSignupError, FieldValidationError, NotFoundError
from onboarding.models.dealer_group import DEALER_GROUP_TYPE, DealerGroup
from onboarding.models.dealer_signup import DealerSignup, utcnow
from onboarding.schemas.dealer import DealerGroupIn, DealerSignupIn
from onboarding.services.email import Mailer
from onboarding.services.store import (
    domain_has_inventory,
    find_active_agent,
    find_group_by_domain,
    find_signup_by_domain,
    insert_group,
)
from onboarding.services.validation import (
    email_domain,
    extract_domain,
    format_phone_number,
    validate_dealer_group,
    validate_dealer_signup,
)
from onboarding.services.verification import register_signup

logger = logging.getLogger(__name__)


def submit_dealer_signup(
    db: Session,
    mailer: Mailer,
    payload: DealerSignupIn,
    *,
    now: dt.datetime | None = None,
) -> DealerSignup:
    if payload.agent_id and find_active_agent(db, payload.agent_id) is None:
        logger.warning("Signup rejected: unknown agent %s", payload.agent_id)
        raise NotFoundError("Invalid Agent ID")

    data = payload.model_dump()
    data["dealership_phone"] = format_phone_number(data["dealership_phone"])
    data["contact_phone"] = format_phone_number(data["contact_phone"])

    errors = validate_dealer_signup(data)
    if errors:
        logger.info("Signup rejected: invalid fields %s", [field for field, _ in errors])
        raise FieldValidationError(errors)

    website_domain = extract_domain(data["dealership_website"])
    contact_domain = email_domain(data["contact_email"])
    if website_domain != contact_domain:
        raise BadRequestError(
            f"Email and website domains must match. ({website_domain}, {contact_domain})",
            error_code="DOMAIN_MISMATCH",
        )

    if not domain_has_inventory(db, website_domain, data["dealership_country"]):
        raise BadRequestError(
            "Dealership Website must have inventory to claim.",
            error_code="NO_INVENTORY",
        )
    # Contact email collisions surface from the insert via the unique email index.
    if find_signup_by_domain(db, website_domain) is not None:
        raise DuplicateSignupError("dealership_domain")

    record = DealerSignup(
        **data,
        dealership_domain=website_domain,
        provisioned_email=None,
    )
    if record.dealership_providers is None:
        record.dealership_providers = []
    return register_signup(db, mailer, record, now=now)


def create_dealer_group(db: Session, payload: DealerGroupIn, *, now: dt.datetime | None = None) -> DealerGroup:
    data = payload.model_dump()
    errors = validate_dealer_group(data)
    if errors:
        raise FieldValidationError(errors)

    domain = extract_domain(data["dealer_group_website"])
    if find_group_by_domain(db, domain) is not None:
        raise BadRequestError("Dealer group domain already exists in system.", error_code="DOMAIN_EXISTS")

    group = DealerGroup(
        type=DEALER_GROUP_TYPE,
        dealer_group_name=data["dealer_group_name"],
        dealer_group_website=domain,
        user_created=True,
        created_at=now or utcnow(),
    )
    stored = insert_group(db, group)
    logger.info("Dealer group created: %s", stored.dealer_group_website)
    return stored
