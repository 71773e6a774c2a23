"""Dealer group model (imported reference groups and user-created ones)."""

from __future__ import annotations

import datetime as dt

from sqlalchemy import Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from onboarding.db.base import Base
from onboarding.models.dealer_signup import utcnow

DEALER_GROUP_TYPE = "dealer_group"


class DealerGroup(Base):
    __tablename__ = "dealer_groups"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    type: Mapped[str] = mapped_column(String(32), default=DEALER_GROUP_TYPE)
    dealer_group_name: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    dealer_group_website: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    dealer_group_country: Mapped[str | None] = mapped_column(String(2), nullable=True)
    user_created: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
