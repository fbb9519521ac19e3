"""Unit tests for the pricing policy and listed-price guardrail"""

import pytest
from trailer_desk.domain.exceptions import InvalidInputError
from trailer_desk.domain.models import NumericCost, PlaceholderCost, PricingStatus
from trailer_desk.domain.pricing import (
    PREMIUM_POLICY,
    STANDARD_POLICY,
    PricingPolicy,
    compute_selling_price,
    parse_cost,
    resolve_pricing_policy,
    validate_price_range,
)


def test_compute_selling_price_crossover():
    """At $5,600 the 25% markup and the $1,400 floor agree"""
    result = compute_selling_price(5600)

    assert result.price == 7000
    assert result.pricing_status == PricingStatus.PRICED


def test_compute_selling_price_profit_floor_wins():
    """Cost $3,425 → target $4,281.25, floor $4,825"""
    assert compute_selling_price(3425).price == 4825


def test_compute_selling_price_markup_wins():
    """Cost $18,425 → target $23,031.25 rounds to $23,031"""
    assert compute_selling_price(18425).price == 23031


@pytest.mark.parametrize(
    "cost",
    ["Call for Price", "Make an Offer", "TBD", "N/A", "contact dealer", "", None, 0, -500, "abc"],
)
def test_compute_selling_price_asks_for_pricing(cost):
    result = compute_selling_price(cost)

    assert result.pricing_status == PricingStatus.ASK_FOR_PRICING
    assert result.price is None


def test_compute_selling_price_parses_formatted_strings():
    assert compute_selling_price("$3,425").price == 4825
    assert compute_selling_price("18425.00").price == 23031


def test_compute_selling_price_without_rounding():
    policy = PricingPolicy(markup_factor=1.25, min_profit_floor=1400, round_to_dollar=False)

    assert compute_selling_price(18425, policy).price == pytest.approx(23031.25)


def test_compute_selling_price_premium_policy():
    """50% markup with a $1,500 floor"""
    assert compute_selling_price(5000, PREMIUM_POLICY).price == 7500
    assert compute_selling_price(2000, PREMIUM_POLICY).price == 3500


def test_parse_cost_variants():
    assert parse_cost(3425) == NumericCost(amount=3425.0)
    assert parse_cost("$3,425.50") == NumericCost(amount=3425.5)
    assert isinstance(parse_cost("Call for Price"), PlaceholderCost)
    assert isinstance(parse_cost(True), PlaceholderCost)
    assert isinstance(parse_cost(float("nan")), PlaceholderCost)
    # Already parsed values pass through
    assert parse_cost(NumericCost(amount=10.0)) == NumericCost(amount=10.0)


def test_resolve_pricing_policy_presets_and_overrides():
    assert resolve_pricing_policy("standard") is STANDARD_POLICY
    assert resolve_pricing_policy("Premium") is PREMIUM_POLICY

    policy = resolve_pricing_policy("standard", markup_factor=1.3)
    assert policy.markup_factor == 1.3
    assert policy.min_profit_floor == 1400


def test_resolve_pricing_policy_unknown_preset():
    with pytest.raises(InvalidInputError):
        resolve_pricing_policy("clearance")


def test_pricing_policy_rejects_markdown():
    with pytest.raises(InvalidInputError):
        PricingPolicy(markup_factor=0.9, min_profit_floor=100)


@pytest.mark.parametrize(
    "selling_price,expected",
    [
        (7000, True),  # exactly -30%
        (6999, False),
        (10000, True),
        (20000, True),  # exactly +100%
        (20001, False),
    ],
)
def test_validate_price_range_boundaries(selling_price, expected):
    check = validate_price_range(selling_price, 10000)

    assert check.valid is expected
    assert check.min == pytest.approx(7000)
    assert check.max == pytest.approx(20000)


def test_validate_price_range_message():
    assert validate_price_range(10000, 10000).message is None

    check = validate_price_range(5000, 10000)
    assert "$7,000.00" in check.message
    assert "$20,000.00" in check.message


def test_pricing_is_deterministic():
    assert compute_selling_price(18425) == compute_selling_price(18425)
    assert validate_price_range(6999, 10000) == validate_price_range(6999, 10000)
