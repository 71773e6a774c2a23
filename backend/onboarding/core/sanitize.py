"""Input sanitization helpers for request payloads."""

from __future__ import annotations

import unicodedata
from typing import Any, Iterable


def _strip_control_chars(value: str) -> str:
    return "".join(ch for ch in value if unicodedata.category(ch) != "Cc")


def clean_single_line(value: str | None) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        value = str(value)
    value = _strip_control_chars(value.replace("\r", " ").replace("\n", " "))
    return " ".join(value.split())


def clean_email(value: str | None) -> str:
    return clean_single_line(value).lower()


def clean_csv(value: str | None, *, lower: bool = False) -> str:
    """Normalize a comma-separated list: trim each item and drop empty ones."""
    cleaned = clean_single_line(value)
    parts = [part.strip() for part in cleaned.split(",")]
    joined = ",".join(part for part in parts if part)
    return joined.lower() if lower else joined


def clean_list(
    values: Iterable[Any] | str | None,
    *,
    max_items: int | None = None,
    item_max_length: int | None = None,
) -> list[str]:
    if values is None:
        return []
    if isinstance(values, str):
        values = [values]
    cleaned: list[str] = []
    seen: set[str] = set()
    for item in values:
        if item is None:
            continue
        item_clean = clean_single_line(str(item))
        if not item_clean:
            continue
        if item_max_length and len(item_clean) > item_max_length:
            raise ValueError("item_too_long")
        key = item_clean.casefold()
        if key in seen:
            continue
        seen.add(key)
        cleaned.append(item_clean)
    if max_items is not None and len(cleaned) > max_items:
        raise ValueError("too_many_items")
    return cleaned
