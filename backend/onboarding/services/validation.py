"""Pure field validators and normalizers for dealer signup submissions."""

from __future__ import annotations

import re
from typing import Any, Callable, Iterable, Mapping
from urllib.parse import urlsplit

_EMAIL_RE = re.compile(
    r"^(([^<>()\[\]\\.,;:\s@\"]+(\.[^<>()\[\]\\.,;:\s@\"]+)*)|(\".+\"))@"
    r"((\[[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\])|(([a-zA-Z\-0-9]+\.)+[a-zA-Z]{2,}))$"
)
_URL_RE = re.compile(
    r"^https?://[-a-zA-Z0-9@:%._+~#=]{1,256}\.[a-zA-Z]{2,63}\b([-a-zA-Z0-9@:%_+.~#?&/=]*)$"
)
_PHONE_RE = re.compile(r"\d{3}-\d{3}-\d{4}")
_NON_DIGIT_RE = re.compile(r"\D")

SUPPORTED_COUNTRIES = ("US", "CA")

FieldError = tuple[str, str]


def is_valid_email(value: str) -> bool:
    return bool(_EMAIL_RE.match(value))


def is_valid_url(value: str) -> bool:
    return bool(_URL_RE.match(value))


def is_valid_phone(value: str) -> bool:
    return bool(_PHONE_RE.search(value))


def is_valid_country(value: str | None) -> bool:
    return value in SUPPORTED_COUNTRIES


def _each(validator: Callable[[str], bool]) -> Callable[[str], bool]:
    """Lift a single-value validator to a comma-separated list."""

    def _check(value: str) -> bool:
        return all(validator(part) for part in value.split(","))

    return _check


def _format_single_phone(value: str) -> str | None:
    digits = _NON_DIGIT_RE.sub("", value)
    if len(digits) == 11 and digits.startswith("1"):
        digits = digits[1:]
    if len(digits) != 10:
        return None
    return f"{digits[:3]}-{digits[3:6]}-{digits[6:]}"


def format_phone_number(value: str | None) -> str | None:
    """Normalize one or more comma-separated phone numbers to NNN-NNN-NNNN.

    Parts that cannot be normalized become empty so that validation rejects
    the field instead of silently dropping a number.
    """
    if value is None:
        return None
    if "," in value:
        return ",".join(_format_single_phone(part) or "" for part in value.split(","))
    return _format_single_phone(value)


def extract_domain(url: str) -> str:
    hostname = urlsplit(url.strip()).hostname or ""
    return hostname.replace("www.", "", 1)


def email_domain(email: str) -> str:
    return email.rsplit("@", 1)[-1].lower()


# (field, required, validator, message)
_DEALER_RULES: tuple[tuple[str, bool, Callable[[str], bool] | None, str], ...] = (
    ("dealership_name", True, None, "Dealership Name required."),
    ("dealership_phone", True, _each(is_valid_phone), "Please enter a valid phone number."),
    ("dealership_lead_email", True, _each(is_valid_email), "Please enter a valid email."),
    ("dealership_billing_email", True, _each(is_valid_email), "Please enter a valid email."),
    (
        "dealership_website",
        True,
        lambda value: "," not in value and is_valid_url(value),
        "Please enter a valid website URL.",
    ),
    ("dealership_additional_websites", False, _each(is_valid_url), "Please enter a valid website URL."),
    ("dealership_country", True, is_valid_country, "Please enter either US or CA for country."),
    ("contact_full_name", True, None, "Contact name required."),
    ("contact_email", True, is_valid_email, "Please enter a valid email."),
    ("contact_phone", True, _each(is_valid_phone), "Please enter a valid phone number."),
)

_GROUP_RULES: tuple[tuple[str, bool, Callable[[str], bool] | None, str], ...] = (
    ("dealer_group_name", True, None, "Dealer group name required."),
    ("dealer_group_website", True, is_valid_url, "Please enter a valid website URL."),
)


def _apply_rules(
    data: Mapping[str, Any],
    rules: Iterable[tuple[str, bool, Callable[[str], bool] | None, str]],
) -> list[FieldError]:
    errors: list[FieldError] = []
    for field, required, validator, message in rules:
        value = data.get(field)
        if value is None or value == "":
            if required:
                errors.append((field, message))
            continue
        if not isinstance(value, str):
            errors.append((field, message))
            continue
        if validator is not None and not validator(value):
            errors.append((field, message))
    return errors


def validate_dealer_signup(data: Mapping[str, Any]) -> list[FieldError]:
    """Return `(field, message)` pairs for every invalid dealer field."""
    errors = _apply_rules(data, _DEALER_RULES)
    providers = data.get("dealership_providers")
    if providers is not None and (
        not isinstance(providers, list) or not all(isinstance(item, str) for item in providers)
    ):
        errors.append(("dealership_providers", "Providers must be a list of names."))
    return errors


def validate_dealer_group(data: Mapping[str, Any]) -> list[FieldError]:
    return _apply_rules(data, _GROUP_RULES)
