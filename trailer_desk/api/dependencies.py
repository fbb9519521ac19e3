"""Dependency injection for FastAPI endpoints"""

from datetime import datetime

from fastapi import Request
from trailer_desk.config import settings
from trailer_desk.domain.pricing import PricingPolicy, resolve_pricing_policy
from trailer_desk.utils.date_utils import utc_now


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def build_pricing_policy() -> PricingPolicy:
    """Pricing policy from settings, resolved once by create_app"""
    return resolve_pricing_policy(
        settings.pricing_policy,
        markup_factor=settings.price_markup,
        min_profit_floor=settings.price_min_profit,
        round_to_dollar=settings.price_round_to_dollar,
    )


def get_pricing_policy(request: Request) -> PricingPolicy:
    """Policy resolved at startup"""
    return request.app.state.pricing_policy


def get_clock() -> datetime:
    """Current time used for lead scoring, overridable in tests"""
    return utc_now()
