from __future__ import annotations

import datetime as dt

from onboarding.models import DealerGroup, DealerSignup
from onboarding.services import store


def test_signup_with_matching_domains_is_accepted(client, db, mailer, seed_inventory, dealer_payload) -> None:
    seed_inventory("x.com")

    response = client.post("/new-dealer", json=dealer_payload())

    assert response.status_code == 200
    assert response.json() == {"data": {"message": "Success"}}
    record = store.find_signup_by_email(db, "a@x.com")
    assert record.dealership_domain == "x.com"
    assert record.dealership_phone == "780-555-0100"
    assert record.contact_phone == "780-555-0101"
    assert record.email_verified is False
    assert record.provisioned_email is None
    assert [message["to"] for message in mailer.sent] == ["a@x.com"]


def test_signup_with_mismatched_domains_is_rejected(client, db, mailer, seed_inventory, dealer_payload) -> None:
    seed_inventory("y.com")

    response = client.post("/new-dealer", json=dealer_payload(dealership_website="https://y.com"))

    assert response.status_code == 400
    body = response.json()["data"]
    assert body["message"] == "Email and website domains must match. (y.com, x.com)"
    assert body["error_code"] == "DOMAIN_MISMATCH"
    assert store.find_signup_by_email(db, "a@x.com") is None
    assert mailer.sent == []


def test_signup_with_unknown_agent_is_not_found(client, dealer_payload) -> None:
    response = client.post("/new-dealer", json=dealer_payload(agent_id="AG-404"))

    assert response.status_code == 404
    assert response.json()["data"]["message"] == "Invalid Agent ID"


def test_signup_with_disabled_agent_is_not_found(client, seed_agent, seed_inventory, dealer_payload) -> None:
    seed_agent("AG-1", disabled_at=dt.datetime(2026, 1, 1, tzinfo=dt.timezone.utc))
    seed_inventory("x.com")

    response = client.post("/new-dealer", json=dealer_payload(agent_id="AG-1"))

    assert response.status_code == 404


def test_signup_with_known_agent_is_accepted(client, db, seed_agent, seed_inventory, dealer_payload) -> None:
    seed_agent("AG-1", agency="Prairie Auto Agency")
    seed_inventory("x.com")

    response = client.post("/new-dealer", json=dealer_payload(agent_id="AG-1"))

    assert response.status_code == 200
    assert store.find_signup_by_email(db, "a@x.com").agent_id == "AG-1"


def test_signup_field_errors_list_every_failing_field(client, dealer_payload) -> None:
    response = client.post(
        "/new-dealer",
        json=dealer_payload(dealership_phone="12345", dealership_country="MX", contact_full_name="  "),
    )

    assert response.status_code == 400
    body = response.json()["data"]
    assert body["message"] == "Field validation failed."
    assert body["fields"] == ["dealership_phone", "dealership_country", "contact_full_name"]


def test_signup_with_wrongly_typed_field_is_a_field_error(client, dealer_payload) -> None:
    response = client.post("/new-dealer", json=dealer_payload(dealership_providers="CDK"))

    assert response.status_code == 400
    body = response.json()["data"]
    assert body["error_code"] == "FIELD_VALIDATION_FAILED"
    assert body["fields"] == ["dealership_providers"]


def test_signup_without_inventory_is_rejected(client, seed_inventory, dealer_payload) -> None:
    seed_inventory("x.com", country="CA")

    response = client.post("/new-dealer", json=dealer_payload())

    assert response.status_code == 400
    assert response.json()["data"]["message"] == "Dealership Website must have inventory to claim."


def test_duplicate_domain_is_rejected(client, seed_inventory, dealer_payload) -> None:
    seed_inventory("x.com")
    assert client.post("/new-dealer", json=dealer_payload()).status_code == 200

    same_domain = client.post("/new-dealer", json=dealer_payload(contact_email="b@x.com"))
    assert same_domain.status_code == 400
    assert same_domain.json()["data"]["message"] == "Dealership domain already exists in system."


def test_unknown_fields_cannot_preverify_a_signup(client, db, seed_inventory, dealer_payload) -> None:
    seed_inventory("x.com")

    response = client.post(
        "/new-dealer",
        json=dealer_payload(email_verified=True, verification_hash="known", provisioned_email="a@x.com"),
    )

    assert response.status_code == 200
    record = store.find_signup_by_email(db, "a@x.com")
    assert record.email_verified is False
    assert record.verification_hash != "known"
    assert record.provisioned_email is None


def test_new_dealer_group_stores_bare_hostname(client, db) -> None:
    response = client.post(
        "/new-dealer-group",
        json={"dealer_group_name": "Prairie Group", "dealer_group_website": "https://www.prairie.com/about"},
    )

    assert response.status_code == 200
    group = db.query(DealerGroup).one()
    assert group.dealer_group_website == "prairie.com"
    assert group.type == "dealer_group"
    assert group.user_created is True


def test_duplicate_dealer_group_is_rejected(client) -> None:
    payload = {"dealer_group_name": "Prairie Group", "dealer_group_website": "https://prairie.com"}
    assert client.post("/new-dealer-group", json=payload).status_code == 200

    response = client.post("/new-dealer-group", json={**payload, "dealer_group_website": "https://www.prairie.com"})

    assert response.status_code == 400
    assert response.json()["data"]["message"] == "Dealer group domain already exists in system."


def test_dealer_group_validation(client) -> None:
    response = client.post("/new-dealer-group", json={"dealer_group_website": "prairie"})

    assert response.status_code == 400
    assert response.json()["data"]["fields"] == ["dealer_group_name", "dealer_group_website"]


def test_health(client) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_concurrent_signup_with_same_email_is_rejected(client, db, mailer, monkeypatch, seed_inventory, dealer_payload) -> None:
    seed_inventory("x.com")
    # Both requests pass the duplicate check before either has been stored.
    monkeypatch.setattr("onboarding.services.signups.find_signup_by_domain", lambda *_: None)
    assert client.post("/new-dealer", json=dealer_payload()).status_code == 200

    response = client.post("/new-dealer", json=dealer_payload())

    assert response.status_code == 400
    body = response.json()["data"]
    assert body["message"] == "Contact email already exists in system."
    assert body["error_code"] == "EMAIL_EXISTS"
    assert db.query(DealerSignup).count() == 1
    assert len(mailer.sent) == 1


def test_concurrent_signup_with_same_domain_is_rejected(client, db, mailer, monkeypatch, seed_inventory, dealer_payload) -> None:
    seed_inventory("x.com")
    monkeypatch.setattr("onboarding.services.signups.find_signup_by_domain", lambda *_: None)
    assert client.post("/new-dealer", json=dealer_payload()).status_code == 200

    response = client.post("/new-dealer", json=dealer_payload(contact_email="b@x.com"))

    assert response.status_code == 400
    body = response.json()["data"]
    assert body["message"] == "Dealership domain already exists in system."
    assert body["error_code"] == "DOMAIN_EXISTS"
    assert store.find_signup_by_email(db, "b@x.com") is None
    assert len(mailer.sent) == 1
