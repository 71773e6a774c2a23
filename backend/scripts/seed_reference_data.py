"""Seed agents, lenders, dealer groups and inventory listings for local testing."""

from __future__ import annotations

import sys
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parents[1]
sys.path.append(str(BASE_DIR))

from sqlalchemy import select  # noqa: E402

from onboarding.core.logging import setup_logging  # noqa: E402
from onboarding.db.session import SessionLocal  # noqa: E402
from onboarding.models import Agent, DealerGroup, InventoryListing, Lender  # noqa: E402


AGENTS = [
    {
        "agent_id": "AG-1001",
        "agency": "Prairie Auto Agency",
        "first_name": "Dana",
        "last_name": "Whitford",
        "email": "dana@prairieagency.ca",
        "phone": "780-555-0142",
    },
    {
        "agent_id": "AG-1002",
        "agency": "Lakeshore Dealer Services",
        "first_name": "Marco",
        "last_name": "Ruiz",
        "email": "marco@lakeshoreds.com",
        "phone": "312-555-0177",
    },
]

LENDERS = [
    {"code": "TDAF", "name": "TD Auto Finance", "country": "CA"},
    {"code": "RBC", "name": "RBC Royal Bank Auto", "country": "CA"},
    {"code": "FMCC", "name": "Ford Credit", "country": "US"},
    {"code": "ALLY", "name": "Ally Financial", "country": "US"},
    {"code": "CAPONE", "name": "Capital One Auto Finance", "country": "US"},
]

DEALER_GROUPS = [
    {"dealer_group_name": "Northgate Automotive Group", "dealer_group_website": "northgategroup.ca", "dealer_group_country": "CA"},
    {"dealer_group_name": "Lakeshore Motor Holdings", "dealer_group_website": "lakeshoremotors.com", "dealer_group_country": "US"},
]

INVENTORY = [
    {
        "country": "CA",
        "vin": "2T1BURHE0JC000101",
        "va_seller_id": "S-CA-1",
        "va_seller_name": "Northgate Toyota",
        "va_seller_address": "13010 97 St NW",
        "va_seller_city": "Edmonton",
        "va_seller_state": "AB",
        "va_seller_zip": "T5E 4C7",
        "va_seller_country": "CA",
        "va_seller_websites": "https://www.northgatetoyota.ca",
        "va_seller_domains": "northgatetoyota.ca",
        "va_seller_phones": "780-555-0190",
        "va_seller_type": "franchise",
        "va_seller_makes": "Toyota",
    },
    {
        "country": "US",
        "vin": "1FTFW1E50MFA00202",
        "va_seller_id": "S-US-1",
        "va_seller_name": "Lakeshore Ford",
        "va_seller_address": "2400 N Lake Shore Dr",
        "va_seller_city": "Chicago",
        "va_seller_county": "Cook",
        "va_seller_state": "IL",
        "va_seller_zip": "60614",
        "va_seller_country": "US",
        "va_seller_websites": "https://lakeshoreford.com",
        "va_seller_domains": "lakeshoreford.com",
        "va_seller_phones": "312-555-0133",
        "va_seller_type": "franchise",
        "va_seller_makes": "Ford",
    },
]


def seed_reference_data() -> None:
    setup_logging()
    db = SessionLocal()
    created = 0
    try:
        for item in AGENTS:
            if db.execute(select(Agent).where(Agent.agent_id == item["agent_id"])).scalars().first():
                continue
            db.add(Agent(**item))
            created += 1

        for item in LENDERS:
            if db.execute(select(Lender).where(Lender.code == item["code"])).scalars().first():
                continue
            db.add(Lender(**item))
            created += 1

        for item in DEALER_GROUPS:
            existing = db.execute(
                select(DealerGroup).where(DealerGroup.dealer_group_website == item["dealer_group_website"])
            ).scalars().first()
            if existing:
                continue
            db.add(DealerGroup(**item))
            created += 1

        for item in INVENTORY:
            if db.execute(select(InventoryListing).where(InventoryListing.vin == item["vin"])).scalars().first():
                continue
            db.add(InventoryListing(**item))
            created += 1

        db.commit()
        print(f"seeded_rows={created}")
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_reference_data()
