"""Reference collections consulted during onboarding: agents, lenders and inventory."""

from __future__ import annotations

import datetime as dt

from sqlalchemy import JSON, DateTime, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from onboarding.db.base import Base
from onboarding.models.dealer_signup import utcnow


class Agent(Base):
    __tablename__ = "agents"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    agent_id: Mapped[str] = mapped_column(String(64), unique=True, index=True, nullable=False)
    agency: Mapped[str | None] = mapped_column(String(255), nullable=True)
    first_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    disabled_at: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class Lender(Base):
    __tablename__ = "lenders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    country: Mapped[str | None] = mapped_column(String(2), nullable=True)
    filenames: Mapped[list[str]] = mapped_column(JSON, default=list)
    mapping: Mapped[list[str]] = mapped_column(JSON, default=list)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class InventoryListing(Base):
    """One vehicle listing with the attributes of the dealer (seller) that posted it."""

    __tablename__ = "inventory_listings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    country: Mapped[str] = mapped_column(String(2), index=True, nullable=False)
    vin: Mapped[str | None] = mapped_column(String(32), nullable=True)
    listing_vdp_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    va_seller_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    va_seller_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    va_seller_address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    va_seller_city: Mapped[str | None] = mapped_column(String(255), nullable=True)
    va_seller_county: Mapped[str | None] = mapped_column(String(255), nullable=True)
    va_seller_state: Mapped[str | None] = mapped_column(String(64), nullable=True)
    va_seller_zip: Mapped[str | None] = mapped_column(String(32), nullable=True)
    va_seller_country: Mapped[str | None] = mapped_column(String(64), nullable=True)
    va_seller_websites: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    va_seller_domains: Mapped[str | None] = mapped_column(String(255), index=True, nullable=True)
    va_seller_phones: Mapped[str | None] = mapped_column(String(255), nullable=True)
    va_seller_type: Mapped[str | None] = mapped_column(String(64), nullable=True)
    va_seller_makes: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    va_seller_latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    va_seller_longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
