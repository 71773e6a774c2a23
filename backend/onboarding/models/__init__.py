"""Convenience imports for Alembic metadata discovery."""

from onboarding.models.dealer_signup import DealerSignup
from onboarding.models.dealer_group import DealerGroup
from onboarding.models.reference import Agent, InventoryListing, Lender

__all__ = ["Agent", "DealerGroup", "DealerSignup", "InventoryListing", "Lender"]
