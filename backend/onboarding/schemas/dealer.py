"""Pydantic schemas for dealer and dealer group submissions."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from onboarding.core.sanitize import clean_csv, clean_email, clean_list, clean_single_line

MAX_PROVIDERS = 25
MAX_PROVIDER_LEN = 128


def _clean_optional(value: Any, cleaner) -> Any:  # noqa: ANN001
    # Non-strings are left for pydantic to reject with a field error.
    if value is None or not isinstance(value, str):
        return value
    return cleaner(value) or None


class DealerSignupIn(BaseModel):
    """Whitelisted dealer fields; anything else in the request body is dropped."""

    model_config = ConfigDict(extra="ignore")

    dealership_name: str | None = None
    dealership_phone: str | None = None
    dealership_lead_email: str | None = None
    dealership_billing_email: str | None = None
    dealership_website: str | None = None
    dealership_additional_websites: str | None = None
    dealership_country: str | None = None
    dealer_group_domain: str | None = None
    contact_full_name: str | None = None
    contact_email: str | None = None
    contact_phone: str | None = None
    dealership_providers: list[str] | None = None
    lead_option: str | None = None
    agent_id: str | None = None

    @field_validator(
        "dealership_name",
        "dealership_phone",
        "dealership_website",
        "contact_full_name",
        "contact_phone",
        "lead_option",
        "agent_id",
        mode="before",
    )
    @classmethod
    def normalize_text(cls, value: Any) -> Any:
        return _clean_optional(value, clean_single_line)

    @field_validator("dealership_country", mode="before")
    @classmethod
    def normalize_country(cls, value: Any) -> Any:
        return _clean_optional(value, lambda v: clean_single_line(v).upper())

    @field_validator("contact_email", "dealer_group_domain", mode="before")
    @classmethod
    def normalize_email(cls, value: Any) -> Any:
        return _clean_optional(value, clean_email)

    @field_validator("dealership_lead_email", "dealership_billing_email", mode="before")
    @classmethod
    def normalize_email_list(cls, value: Any) -> Any:
        return _clean_optional(value, lambda v: clean_csv(v, lower=True))

    @field_validator("dealership_additional_websites", mode="before")
    @classmethod
    def normalize_website_list(cls, value: Any) -> Any:
        return _clean_optional(value, clean_csv)

    @field_validator("dealership_providers", mode="before")
    @classmethod
    def normalize_providers(cls, value: Any) -> Any:
        if value is None or not isinstance(value, (list, tuple)):
            return value
        return clean_list(value, max_items=MAX_PROVIDERS, item_max_length=MAX_PROVIDER_LEN)


class DealerGroupIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    dealer_group_name: str | None = None
    dealer_group_website: str | None = None

    @field_validator("dealer_group_name", "dealer_group_website", mode="before")
    @classmethod
    def normalize_text(cls, value: Any) -> Any:
        return _clean_optional(value, clean_single_line)


class MessageData(BaseModel):
    message: str


class MessageResponse(BaseModel):
    data: MessageData

    @classmethod
    def success(cls) -> "MessageResponse":
        return cls(data=MessageData(message="Success"))
