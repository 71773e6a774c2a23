"""Dealer and dealer group signup endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from onboarding.core.deps import get_mailer
from onboarding.core.rate_limit import rate_limit
from onboarding.db.session import get_db
from onboarding.schemas.dealer import DealerGroupIn, DealerSignupIn, MessageResponse
from onboarding.services.email import Mailer
from onboarding.services.signups import create_dealer_group, submit_dealer_signup

router = APIRouter(dependencies=[Depends(rate_limit("signup"))])


@router.post("/new-dealer", response_model=MessageResponse)
def new_dealer(
    payload: DealerSignupIn,
    db: Session = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
) -> MessageResponse:
    submit_dealer_signup(db, mailer, payload)
    return MessageResponse.success()


@router.post("/new-dealer-group", response_model=MessageResponse)
def new_dealer_group(payload: DealerGroupIn, db: Session = Depends(get_db)) -> MessageResponse:
    create_dealer_group(db, payload)
    return MessageResponse.success()
