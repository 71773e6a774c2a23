"""Autocomplete endpoints for lenders, dealer groups and inventory dealers."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from onboarding.core.exceptions import BadRequestError
from onboarding.core.rate_limit import rate_limit
from onboarding.core.sanitize import clean_single_line
from onboarding.db.session import get_db
from onboarding.services.search import search_dealer_groups, search_dealers, search_lenders
from onboarding.services.validation import is_valid_country

router = APIRouter(dependencies=[Depends(rate_limit("search"))])

MAX_QUERY_LEN = 128


def _require_query(query: str | None) -> str:
    cleaned = clean_single_line(query)[:MAX_QUERY_LEN]
    if not cleaned:
        raise BadRequestError("Bad request, missing data.")
    return cleaned


@router.get("/search-lenders")
def lenders(query: str | None = None, db: Session = Depends(get_db)) -> list[dict[str, Any]]:
    return search_lenders(db, _require_query(query))


@router.get("/search-dealer-groups")
def dealer_groups(query: str | None = None, db: Session = Depends(get_db)) -> list[dict[str, Any]]:
    return search_dealer_groups(db, _require_query(query))


@router.get("/search-dealers")
def dealers(
    query: str | None = None,
    country: str | None = None,
    db: Session = Depends(get_db),
) -> list[dict[str, Any]]:
    cleaned = _require_query(query)
    if not is_valid_country(country):
        raise BadRequestError("Bad request, missing data.")
    return search_dealers(db, cleaned, country)
