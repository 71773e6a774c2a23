"""Dealer signup record and its pending email verification token."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from uuid import UUID, uuid4

from sqlalchemy import JSON, Boolean, DateTime, Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from onboarding.db.base import Base

# Sentinel for "has not happened yet" timestamps such as verified_at.
EPOCH_ZERO = dt.datetime(1970, 1, 1, tzinfo=dt.timezone.utc)


def utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def as_utc(value: dt.datetime) -> dt.datetime:
    # Some backends (SQLite) hand back naive datetimes for timezone-aware columns.
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.timezone.utc)
    return value


@dataclass(frozen=True)
class VerificationToken:
    secret_hash: str
    expires_at: dt.datetime

    def is_expired(self, now: dt.datetime) -> bool:
        return as_utc(now) > as_utc(self.expires_at)


class DealerSignup(Base):
    __tablename__ = "dealer_signups"
    __table_args__ = (
        # Lookups compare lower(contact_email).
        Index("ix_dealer_signups_contact_email_lower", text("lower(contact_email)"), unique=True),
    )

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    dealership_name: Mapped[str] = mapped_column(String(255), nullable=False)
    dealership_phone: Mapped[str] = mapped_column(String(255), nullable=False)
    dealership_lead_email: Mapped[str] = mapped_column(Text, nullable=False)
    dealership_billing_email: Mapped[str] = mapped_column(Text, nullable=False)
    dealership_website: Mapped[str] = mapped_column(String(512), nullable=False)
    dealership_additional_websites: Mapped[str | None] = mapped_column(Text, nullable=True)
    dealership_domain: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    dealership_country: Mapped[str] = mapped_column(String(2), nullable=False)
    dealer_group_domain: Mapped[str | None] = mapped_column(String(255), nullable=True)
    contact_full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    contact_phone: Mapped[str] = mapped_column(String(255), nullable=False)
    dealership_providers: Mapped[list[str]] = mapped_column(JSON, default=list)
    lead_option: Mapped[str | None] = mapped_column(String(64), nullable=True)
    agent_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    # Filled in later by the inbox provisioning job; NULL marks "not provisioned".
    provisioned_email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    email_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    verified_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=lambda: EPOCH_ZERO)
    verification_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    verification_expires_at: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    @property
    def verification(self) -> VerificationToken | None:
        if not self.verification_hash or self.verification_expires_at is None:
            return None
        return VerificationToken(
            secret_hash=self.verification_hash,
            expires_at=as_utc(self.verification_expires_at),
        )


def token_fields(token: VerificationToken | None) -> dict[str, object]:
    """Column values that replace the stored token wholesale (or clear it)."""
    if token is None:
        return {"verification_hash": None, "verification_expires_at": None}
    return {"verification_hash": token.secret_hash, "verification_expires_at": token.expires_at}
