"""Pricing policy - selling price from wholesale cost, and the listed-price guardrail"""

import math
import re
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from trailer_desk.domain.exceptions import InvalidInputError
from trailer_desk.domain.models import (
    Cost,
    NumericCost,
    PlaceholderCost,
    PriceRangeCheck,
    PricingResult,
    PricingStatus,
)
from trailer_desk.domain.validation import non_negative_amount, require_finite

PLACEHOLDER_PATTERN = re.compile(r"call|offer|tbd|n/a|price|contact", re.IGNORECASE)
_LEADING_NUMBER = re.compile(r"\d+(?:\.\d*)?|\.\d+")

PRICE_RANGE_MIN_RATIO = 0.7  # -30% of listed
PRICE_RANGE_MAX_RATIO = 2.0  # +100% of listed


@dataclass(frozen=True)
class PricingPolicy:
    """
    Markup with a profit floor.

    price = max(cost * markup_factor, cost + min_profit_floor)

    The floor wins on cheap units, the markup on expensive ones. With the
    standard preset the two meet at cost $5,600 (price $7,000).
    """

    markup_factor: float
    min_profit_floor: float
    round_to_dollar: bool = True

    def __post_init__(self) -> None:
        require_finite("markup_factor", self.markup_factor)
        require_finite("min_profit_floor", self.min_profit_floor)
        if self.markup_factor < 1:
            raise InvalidInputError(f"markup_factor must be >= 1, got {self.markup_factor}")
        if self.min_profit_floor < 0:
            raise InvalidInputError(f"min_profit_floor must be >= 0, got {self.min_profit_floor}")


STANDARD_POLICY = PricingPolicy(markup_factor=1.25, min_profit_floor=1400.0)
PREMIUM_POLICY = PricingPolicy(markup_factor=1.5, min_profit_floor=1500.0)

PRICING_PRESETS: Dict[str, PricingPolicy] = {
    "standard": STANDARD_POLICY,
    "premium": PREMIUM_POLICY,
}


def resolve_pricing_policy(
    preset: str,
    markup_factor: Optional[float] = None,
    min_profit_floor: Optional[float] = None,
    round_to_dollar: Optional[bool] = None,
) -> PricingPolicy:
    """Look up a named preset and apply any explicit overrides"""
    try:
        policy = PRICING_PRESETS[preset.lower()]
    except KeyError:
        raise InvalidInputError(
            f"Unknown pricing preset {preset!r}, expected one of {sorted(PRICING_PRESETS)}"
        ) from None

    overrides: Dict[str, Any] = {}
    if markup_factor is not None:
        overrides["markup_factor"] = markup_factor
    if min_profit_floor is not None:
        overrides["min_profit_floor"] = min_profit_floor
    if round_to_dollar is not None:
        overrides["round_to_dollar"] = round_to_dollar

    return replace(policy, **overrides) if overrides else policy


def parse_cost(raw: Any) -> Cost:
    """
    Decide once whether a cost cell holds a usable number.

    Inventory sheets mix amounts ("$3,425") with text ("Call for Price",
    "Make an Offer", "TBD"). Anything missing, textual, unparseable or not
    positive becomes a PlaceholderCost.
    """
    if isinstance(raw, (NumericCost, PlaceholderCost)):
        return raw

    if raw is None or isinstance(raw, bool) or not raw:
        return PlaceholderCost(reason="missing")

    if isinstance(raw, str):
        if PLACEHOLDER_PATTERN.search(raw):
            return PlaceholderCost(reason=raw.strip())

        match = _LEADING_NUMBER.match(re.sub(r"[^0-9.]", "", raw))
        if match is None:
            return PlaceholderCost(reason="unparseable")
        amount = float(match.group())
    elif isinstance(raw, (int, float)):
        amount = float(raw)
    else:
        return PlaceholderCost(reason=f"unsupported type {type(raw).__name__}")

    if not math.isfinite(amount) or amount <= 0:
        return PlaceholderCost(reason="non-positive")

    return NumericCost(amount=amount)


def _round_half_up(value: float) -> float:
    return float(math.floor(value + 0.5))


def compute_selling_price(cost: Any, policy: PricingPolicy = STANDARD_POLICY) -> PricingResult:
    """
    Selling price for a unit given its wholesale cost.

    Examples (standard policy):
    - Cost $3,425  → target $4,281.25, floor $4,825  → $4,825
    - Cost $18,425 → target $23,031.25, floor $19,825 → $23,031
    - "Call for Price" → ASK_FOR_PRICING, no price
    """
    parsed = parse_cost(cost)

    if isinstance(parsed, PlaceholderCost):
        return PricingResult(price=None, pricing_status=PricingStatus.ASK_FOR_PRICING)

    target = parsed.amount * policy.markup_factor
    floor = parsed.amount + policy.min_profit_floor
    price = max(target, floor)

    if policy.round_to_dollar:
        price = _round_half_up(price)

    return PricingResult(price=price, pricing_status=PricingStatus.PRICED)


def validate_price_range(selling_price: float, listed_price: float) -> PriceRangeCheck:
    """
    Check a proposed selling price against the listed price band.

    Allowed: 70% to 200% of listed, inclusive. Only reports; the caller
    decides whether to block the save.
    """
    selling_price = require_finite("selling_price", selling_price)
    listed_price = non_negative_amount("listed_price", listed_price)

    min_price = listed_price * PRICE_RANGE_MIN_RATIO
    max_price = listed_price * PRICE_RANGE_MAX_RATIO
    valid = min_price <= selling_price <= max_price

    message = None
    if not valid:
        message = (
            f"Price must be between ${min_price:,.2f} and ${max_price:,.2f} "
            f"(-30% to +100% of listed price ${listed_price:,.2f})"
        )

    return PriceRangeCheck(valid=valid, min=min_price, max=max_price, message=message)
