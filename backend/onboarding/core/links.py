"""Encoding of the opaque `data` payload carried by verification links."""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any
from urllib.parse import urlencode

from onboarding.core.config import settings
from onboarding.core.exceptions import MalformedLinkError
from onboarding.services.validation import is_valid_email

VERIFY_PATH = "/verify-email"
RESEND_PATH = "/resend-verification-email"


def encode_payload(data: dict[str, Any]) -> str:
    raw = json.dumps(data, separators=(",", ":")).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii")


def decode_payload(encoded: str | None) -> dict[str, Any]:
    if not encoded or not isinstance(encoded, str):
        raise MalformedLinkError("missing_payload")

    # Links minted before the switch to URL-safe base64 use "+" and "/".
    normalized = encoded.strip().replace("+", "-").replace("/", "_").replace(" ", "-")
    normalized += "=" * (-len(normalized) % 4)
    try:
        raw = base64.urlsafe_b64decode(normalized.encode("ascii"))
        data = json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeError, ValueError) as exc:
        raise MalformedLinkError("undecodable_payload") from exc

    if not isinstance(data, dict):
        raise MalformedLinkError("payload_not_object")
    return data


def decode_verify_payload(encoded: str | None) -> tuple[str, str]:
    data = decode_payload(encoded)
    email = data.get("email")
    key = data.get("key")
    if not isinstance(email, str) or not is_valid_email(email):
        raise MalformedLinkError("invalid_email")
    if not isinstance(key, str) or not key:
        raise MalformedLinkError("invalid_key")
    return email, key


def decode_resend_payload(encoded: str | None) -> str:
    data = decode_payload(encoded)
    email = data.get("email")
    if not isinstance(email, str) or not is_valid_email(email):
        raise MalformedLinkError("invalid_email")
    return email


def build_verify_url(email: str, secret: str) -> str:
    query = urlencode({"data": encode_payload({"email": email, "key": secret})})
    return f"{settings.base_url}{VERIFY_PATH}?{query}"


def build_resend_url(email: str) -> str:
    query = urlencode({"data": encode_payload({"email": email})})
    return f"{settings.base_url}{RESEND_PATH}?{query}"
