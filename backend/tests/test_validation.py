from __future__ import annotations

import pytest

from onboarding.schemas.dealer import DealerSignupIn
from onboarding.services.validation import (
    extract_domain,
    format_phone_number,
    is_valid_email,
    is_valid_url,
    validate_dealer_group,
    validate_dealer_signup,
)


def _valid_data(**overrides) -> dict[str, object]:
    data: dict[str, object] = {
        "dealership_name": "X Motors",
        "dealership_phone": "780-555-0100",
        "dealership_lead_email": "leads@x.com,sales@x.com",
        "dealership_billing_email": "billing@x.com",
        "dealership_website": "https://www.x.com",
        "dealership_additional_websites": None,
        "dealership_country": "CA",
        "contact_full_name": "Jane Doe",
        "contact_email": "a@x.com",
        "contact_phone": "780-555-0101",
        "dealership_providers": ["CDK"],
    }
    data.update(overrides)
    return data


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("(780) 555-0100", "780-555-0100"),
        ("1-780-555-0100", "780-555-0100"),
        ("+1 780 555 0100", "780-555-0100"),
        ("780.555.0100, 7805550101", "780-555-0100,780-555-0101"),
        ("555-0100", None),
        ("780-555-0100,12", "780-555-0100,"),
        (None, None),
    ],
)
def test_format_phone_number(raw, expected) -> None:  # noqa: ANN001
    assert format_phone_number(raw) == expected


def test_email_and_url_patterns() -> None:
    assert is_valid_email("a@x.com")
    assert not is_valid_email("a@x")
    assert not is_valid_email("a x@x.com")
    assert is_valid_url("https://x.com")
    assert is_valid_url("http://www.x-motors.ca/inventory?new=1")
    assert not is_valid_url("x.com")
    assert not is_valid_url("ftp://x.com")


def test_extract_domain_strips_leading_www_only() -> None:
    assert extract_domain("https://www.x.com/path") == "x.com"
    assert extract_domain("https://shop.x.com") == "shop.x.com"
    assert extract_domain("HTTPS://WWW.X.COM") == "x.com"


def test_valid_dealer_has_no_errors() -> None:
    assert validate_dealer_signup(_valid_data()) == []


def test_missing_and_malformed_fields_are_all_reported() -> None:
    errors = validate_dealer_signup(
        _valid_data(
            dealership_name=None,
            dealership_phone="780-555-0100,",
            contact_email="a@x.com,b@x.com",
            dealership_website="https://x.com,https://y.com",
            dealership_additional_websites="https://z.com,nope",
            dealership_country="MX",
        )
    )

    assert [field for field, _ in errors] == [
        "dealership_name",
        "dealership_phone",
        "dealership_website",
        "dealership_additional_websites",
        "dealership_country",
        "contact_email",
    ]
    assert ("dealership_country", "Please enter either US or CA for country.") in errors


def test_providers_must_be_a_list_of_strings() -> None:
    errors = validate_dealer_signup(_valid_data(dealership_providers="CDK"))

    assert errors == [("dealership_providers", "Providers must be a list of names.")]


def test_dealer_group_requires_name_and_url() -> None:
    assert validate_dealer_group({"dealer_group_name": "Big Group", "dealer_group_website": "https://big.com"}) == []
    assert [field for field, _ in validate_dealer_group({"dealer_group_website": "big.com"})] == [
        "dealer_group_name",
        "dealer_group_website",
    ]


def test_signup_schema_whitelists_and_normalizes_fields() -> None:
    payload = DealerSignupIn.model_validate(
        {
            "dealership_name": "  X\nMotors ",
            "dealership_country": "us",
            "contact_email": " A@X.COM ",
            "dealership_lead_email": "Leads@x.com, , Sales@x.com",
            "dealership_providers": ["CDK", "cdk", " Reynolds "],
            "email_verified": True,
            "provisioned_email": "sneaky@x.com",
        }
    )
    data = payload.model_dump()

    assert data["dealership_name"] == "X Motors"
    assert data["dealership_country"] == "US"
    assert data["contact_email"] == "a@x.com"
    assert data["dealership_lead_email"] == "leads@x.com,sales@x.com"
    assert data["dealership_providers"] == ["CDK", "Reynolds"]
    assert "email_verified" not in data
    assert "provisioned_email" not in data
