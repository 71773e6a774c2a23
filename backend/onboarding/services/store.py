"""Record store operations for signups and the reference collections.

Every function takes the request-scoped session explicitly and translates
driver failures into `StoreError` so callers can tell infrastructure trouble
apart from business outcomes.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from onboarding.core.exceptions import DuplicateSignupError, StoreError
from onboarding.models.dealer_group import DealerGroup
from onboarding.models.dealer_signup import DealerSignup
from onboarding.models.reference import Agent, InventoryListing

logger = logging.getLogger(__name__)

# Marker for "do not condition the update on the stored token hash".
ANY_TOKEN = object()


@contextmanager
def store_operation(db: Session, operation: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        logger.exception("Store operation failed: %s", operation)
        db.rollback()
        raise StoreError(operation) from exc


def find_signup_by_email(db: Session, email: str) -> DealerSignup | None:
    with store_operation(db, "db lookup"):
        stmt = select(DealerSignup).where(func.lower(DealerSignup.contact_email) == email.lower())
        return db.execute(stmt).scalars().first()


def find_signup_by_domain(db: Session, domain: str) -> DealerSignup | None:
    with store_operation(db, "db lookup"):
        stmt = select(DealerSignup).where(DealerSignup.dealership_domain == domain.lower())
        return db.execute(stmt).scalars().first()


def _conflicting_signup_field(db: Session, email: str, domain: str) -> str | None:
    if find_signup_by_email(db, email) is not None:
        return "contact_email"
    if find_signup_by_domain(db, domain) is not None:
        return "dealership_domain"
    return None


def insert_signup(db: Session, record: DealerSignup) -> DealerSignup:
    """Insert a new signup; unique email/domain violations raise `DuplicateSignupError`.

    The uniqueness checks in the signup flow run before the insert, so a
    concurrent request can still win the race; the unique indexes settle it.
    """
    email, domain = record.contact_email, record.dealership_domain
    with store_operation(db, "failed to store to DB"):
        try:
            db.add(record)
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            field = _conflicting_signup_field(db, email, domain)
            if field is None:
                raise
            logger.info("Signup rejected on insert: duplicate %s (%s)", field, email)
            raise DuplicateSignupError(field) from exc
        db.refresh(record)
    return record


def update_signup_by_email(
    db: Session,
    email: str,
    values: dict[str, Any],
    *,
    expected_hash: Any = ANY_TOKEN,
    require_unverified: bool = False,
) -> DealerSignup | None:
    """Atomically replace `values` on the signup identified by `email`.

    The write is a single UPDATE statement. When `expected_hash` is given the
    statement only matches while the stored token hash is still that value,
    which turns the write into a compare-and-set; `require_unverified` likewise
    guards against rewriting a record that was verified in the meantime.
    Returns the refreshed record, or None when no row matched.
    """
    with store_operation(db, "db update"):
        stmt = update(DealerSignup).where(func.lower(DealerSignup.contact_email) == email.lower())
        if expected_hash is not ANY_TOKEN:
            stmt = stmt.where(DealerSignup.verification_hash == expected_hash)
        if require_unverified:
            stmt = stmt.where(DealerSignup.email_verified.is_(False))
        result = db.execute(stmt.values(**values).execution_options(synchronize_session=False))
        db.commit()
        matched = result.rowcount
    if not matched:
        return None
    return find_signup_by_email(db, email)


def list_onboarded_dealership_names(db: Session) -> set[str]:
    with store_operation(db, "db lookup"):
        stmt = select(DealerSignup.dealership_name).distinct()
        return {name for name in db.execute(stmt).scalars().all() if name}


def find_active_agent(db: Session, agent_id: str) -> Agent | None:
    with store_operation(db, "db lookup"):
        stmt = select(Agent).where(Agent.agent_id == agent_id, Agent.disabled_at.is_(None))
        return db.execute(stmt).scalars().first()


def domain_has_inventory(db: Session, domain: str, country: str) -> bool:
    with store_operation(db, "inventory check"):
        stmt = (
            select(InventoryListing.id)
            .where(
                InventoryListing.country == country,
                func.lower(InventoryListing.va_seller_domains) == domain.lower(),
            )
            .limit(1)
        )
        return db.execute(stmt).first() is not None


def find_group_by_domain(db: Session, domain: str) -> DealerGroup | None:
    with store_operation(db, "db lookup"):
        stmt = select(DealerGroup).where(func.lower(DealerGroup.dealer_group_website) == domain.lower())
        return db.execute(stmt).scalars().first()


def insert_group(db: Session, group: DealerGroup) -> DealerGroup:
    with store_operation(db, "failed to store to DB"):
        db.add(group)
        db.commit()
        db.refresh(group)
    return group
