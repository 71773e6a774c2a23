"""Autocomplete search over lenders, dealer groups and inventory dealers.

Matching is prefix-anchored and fuzzy: the first two characters of the query
must match exactly, after which up to two edits are tolerated against the
start of the field or of any word inside it.
"""

from __future__ import annotations

import re
from typing import Any, Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from onboarding.core.config import settings
from onboarding.models.dealer_group import DealerGroup
from onboarding.models.reference import InventoryListing, Lender
from onboarding.services.store import list_onboarded_dealership_names, store_operation

FUZZY_MAX_EDITS = 2
FUZZY_PREFIX_LENGTH = 2
# Upper bound on rows pulled for in-process fuzzy scoring.
CANDIDATE_SCAN_LIMIT = 500

_WORD_RE = re.compile(r"[a-z0-9]+")

SELLER_FIELDS = (
    "va_seller_name",
    "va_seller_address",
    "va_seller_city",
    "va_seller_county",
    "va_seller_state",
    "va_seller_country",
    "va_seller_zip",
    "va_seller_websites",
    "va_seller_domains",
    "va_seller_phones",
    "va_seller_type",
    "va_seller_makes",
)


def _edit_distance(a: str, b: str) -> int:
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + (ca != cb),
                )
            )
        previous = current
    return previous[-1]


def _prefix_distance(query: str, candidate: str) -> int | None:
    if not candidate.startswith(query[:FUZZY_PREFIX_LENGTH]):
        return None
    best: int | None = None
    for length in range(len(query) - FUZZY_MAX_EDITS, len(query) + FUZZY_MAX_EDITS + 1):
        if length < FUZZY_PREFIX_LENGTH or length > len(candidate):
            continue
        distance = _edit_distance(query, candidate[:length])
        if best is None or distance < best:
            best = distance
    return best


def autocomplete_distance(query: str, text: str | None) -> int | None:
    """Edit distance between `query` and the best-matching prefix in `text`.

    Returns None when nothing in `text` is within the fuzzy edit limit.
    """
    needle = query.casefold().strip()
    if not needle or not text:
        return None
    haystack = text.casefold()
    candidates = [haystack, *_WORD_RE.findall(haystack)]
    distances = [d for d in (_prefix_distance(needle, candidate) for candidate in candidates) if d is not None]
    if not distances:
        return None
    best = min(distances)
    return best if best <= FUZZY_MAX_EDITS else None


def rank_matches(query: str, rows: Sequence[Any], field: str, limit: int) -> list[Any]:
    scored = []
    for index, row in enumerate(rows):
        value = getattr(row, field)
        distance = autocomplete_distance(query, value)
        if distance is None:
            continue
        scored.append((distance, len(value), index, row))
    scored.sort(key=lambda item: item[:3])
    return [row for *_, row in scored[:limit]]


def _prefix_filter(column, query: str):  # noqa: ANN001
    return func.lower(column).contains(query.casefold().strip()[:FUZZY_PREFIX_LENGTH], autoescape=True)


def search_lenders(db: Session, query: str) -> list[dict[str, Any]]:
    with store_operation(db, "db lookup"):
        stmt = select(Lender).where(_prefix_filter(Lender.name, query)).limit(CANDIDATE_SCAN_LIMIT)
        rows = db.execute(stmt).scalars().all()
    matches = rank_matches(query, rows, "name", settings.SEARCH_RESULT_LIMIT)
    return [{"_id": lender.id, "code": lender.code, "name": lender.name} for lender in matches]


def search_dealer_groups(db: Session, query: str) -> list[dict[str, Any]]:
    with store_operation(db, "db lookup"):
        stmt = (
            select(DealerGroup)
            .where(_prefix_filter(DealerGroup.dealer_group_name, query))
            .limit(CANDIDATE_SCAN_LIMIT)
        )
        rows = db.execute(stmt).scalars().all()
    matches = rank_matches(query, rows, "dealer_group_name", settings.SEARCH_RESULT_LIMIT)
    return [
        {
            "_id": group.id,
            "dealer_group_name": group.dealer_group_name,
            "dealer_group_website": group.dealer_group_website,
        }
        for group in matches
    ]


def search_dealers(db: Session, query: str, country: str) -> list[dict[str, Any]]:
    """Search inventory sellers by domain and flag the ones already onboarded."""
    columns = [getattr(InventoryListing, field) for field in SELLER_FIELDS]
    with store_operation(db, "db lookup"):
        stmt = (
            select(*columns)
            .where(
                InventoryListing.country == country,
                _prefix_filter(InventoryListing.va_seller_domains, query),
            )
            .distinct()
            .limit(CANDIDATE_SCAN_LIMIT)
        )
        rows = db.execute(stmt).all()
    matches = rank_matches(query, rows, "va_seller_domains", settings.SEARCH_RESULT_LIMIT)

    onboarded_names = list_onboarded_dealership_names(db) if matches else set()
    results = []
    for row in matches:
        seller = {field: getattr(row, field) for field in SELLER_FIELDS}
        seller["onboarded"] = seller["va_seller_name"] in onboarded_names
        results.append({"_id": seller})
    return results
