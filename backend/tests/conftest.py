from __future__ import annotations

import os
import re
import sys
from pathlib import Path
from urllib.parse import unquote

import pytest


BASE_DIR = Path(__file__).resolve().parents[1]
if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

os.environ.setdefault("ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("BASE_URL", "https://onboarding.test")

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from onboarding.core.deps import get_mailer  # noqa: E402
from onboarding.core.links import decode_verify_payload  # noqa: E402
from onboarding.db.base import Base  # noqa: E402
from onboarding.db.session import get_db  # noqa: E402
from onboarding.main import app  # noqa: E402
from onboarding.models import Agent, InventoryListing  # noqa: E402

_VERIFY_DATA_RE = re.compile(r"/verify-email\?data=(\S+)")


class RecordingMailer:
    def __init__(self) -> None:
        self.sent: list[dict[str, str | None]] = []

    def send(self, to: str, subject: str, body: str, *, html_body: str | None = None) -> None:
        self.sent.append({"to": to, "subject": subject, "body": body, "html_body": html_body})

    def last_secret(self) -> str:
        """Pull the one-time secret back out of the most recent verify link."""
        match = _VERIFY_DATA_RE.search(self.sent[-1]["body"] or "")
        assert match, "no verify link in the last email"
        _, secret = decode_verify_payload(unquote(match.group(1)))
        return secret


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture
def client(db, mailer):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_mailer] = lambda: mailer
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides = {}


@pytest.fixture
def seed_inventory(db):
    def _seed(domain: str, country: str = "US", **seller) -> InventoryListing:
        listing = InventoryListing(
            country=country,
            va_seller_domains=domain,
            va_seller_name=seller.pop("va_seller_name", f"{domain} Motors"),
            **seller,
        )
        db.add(listing)
        db.commit()
        return listing

    return _seed


@pytest.fixture
def seed_agent(db):
    def _seed(agent_id: str, **fields) -> Agent:
        agent = Agent(agent_id=agent_id, **fields)
        db.add(agent)
        db.commit()
        return agent

    return _seed


@pytest.fixture
def dealer_payload():
    def _build(**overrides) -> dict[str, object]:
        payload: dict[str, object] = {
            "dealership_name": "X Motors",
            "dealership_phone": "(780) 555-0100",
            "dealership_lead_email": "leads@x.com",
            "dealership_billing_email": "billing@x.com",
            "dealership_website": "https://x.com",
            "dealership_country": "US",
            "contact_full_name": "Jane Doe",
            "contact_email": "a@x.com",
            "contact_phone": "1-780-555-0101",
            "dealership_providers": ["CDK"],
            "lead_option": "email",
        }
        payload.update(overrides)
        return payload

    return _build
