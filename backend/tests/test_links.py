from __future__ import annotations

import base64
import json
from urllib.parse import parse_qs, urlsplit

import pytest

from onboarding.core.exceptions import MalformedLinkError
from onboarding.core.links import (
    build_resend_url,
    build_verify_url,
    decode_payload,
    decode_resend_payload,
    decode_verify_payload,
    encode_payload,
)


@pytest.mark.parametrize(
    "data",
    [
        {"email": "a@x.com", "key": "AbC123xyz"},
        {"email": "weird+tag@x.com", "key": "?/=+&% ~"},
        {"email": "a@x.com"},
    ],
)
def test_payload_round_trips(data) -> None:  # noqa: ANN001
    assert decode_payload(encode_payload(data)) == data


def test_encoded_payload_is_url_safe() -> None:
    encoded = encode_payload({"email": "a@x.com", "key": ">>>???"})

    assert "+" not in encoded
    assert "/" not in encoded


def test_decode_accepts_standard_alphabet_and_missing_padding() -> None:
    raw = json.dumps({"email": "a@x.com", "key": ">>>???"}).encode()
    standard = base64.b64encode(raw).decode().rstrip("=")

    assert decode_verify_payload(standard) == ("a@x.com", ">>>???")


def test_decode_accepts_plus_turned_into_space_by_query_parsing() -> None:
    standard = base64.b64encode(b'{"k":">>>"}').decode()
    assert "+" in standard

    assert decode_payload(standard.replace("+", " ")) == {"k": ">>>"}


@pytest.mark.parametrize(
    "encoded",
    [
        None,
        "",
        "!!!not-base64!!!",
        base64.urlsafe_b64encode(b"not json").decode(),
        base64.urlsafe_b64encode(b"[1, 2]").decode(),
        encode_payload({"email": "not-an-email", "key": "abc"}),
        encode_payload({"email": "a@x.com"}),
        encode_payload({"email": "a@x.com", "key": 42}),
    ],
)
def test_malformed_verify_payloads_are_rejected(encoded) -> None:  # noqa: ANN001
    with pytest.raises(MalformedLinkError):
        decode_verify_payload(encoded)


def test_resend_payload_requires_only_email() -> None:
    assert decode_resend_payload(encode_payload({"email": "a@x.com"})) == "a@x.com"
    with pytest.raises(MalformedLinkError):
        decode_resend_payload(encode_payload({"key": "abc"}))


def test_links_point_at_configured_base_url() -> None:
    verify = urlsplit(build_verify_url("a@x.com", "secret123"))
    resend = urlsplit(build_resend_url("a@x.com"))

    assert verify.path == "/verify-email"
    assert resend.path == "/resend-verification-email"
    assert decode_verify_payload(parse_qs(verify.query)["data"][0]) == ("a@x.com", "secret123")
    assert decode_resend_payload(parse_qs(resend.query)["data"][0]) == "a@x.com"
