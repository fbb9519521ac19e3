"""Unit tests for lead scoring and tiering"""

import pytest
from datetime import datetime, timedelta, timezone
from trailer_desk.domain.lead_scoring import (
    LeadScoreWeights,
    assess_lead,
    calculate_days_in_stage,
    calculate_lead_score,
    calculate_response_time,
    determine_priority,
    get_lead_temperature,
    recalculate_lead_scores,
    suggest_next_action,
)
from trailer_desk.domain.models import LeadProfile

NOW = datetime(2026, 3, 2, 15, 0, tzinfo=timezone.utc)


def days_ago(days: float) -> datetime:
    return NOW - timedelta(days=days)


def test_calculate_lead_score_hot_lead():
    """Applied, active, specific trailer, financing, full contact info, brand new"""
    profile = LeadProfile(
        customer_id="c1",
        applied=True,
        email="buyer@example.com",
        phone="555-0100",
        stock_number="TR-1042",
        financing_type="finance",
        last_activity_at=days_ago(2),
        created_at=NOW - timedelta(hours=1),
    )

    factors = calculate_lead_score(profile, NOW)

    assert factors.has_applied_credit == 30
    assert factors.has_recent_activity == 20
    assert factors.has_specific_trailer == 15
    assert factors.needs_financing == 10
    assert factors.has_complete_info == 5
    assert factors.has_email == 3
    assert factors.recently_created == 5
    assert factors.total == 88


def test_calculate_lead_score_empty_profile():
    factors = calculate_lead_score(LeadProfile(customer_id="c2", created_at=days_ago(60)), NOW)

    assert factors.total == 0


def test_calculate_lead_score_clamps_at_zero():
    """Penalties cannot push a score below zero"""
    profile = LeadProfile(customer_id="c3", email="x@example.com", last_activity_at=days_ago(20), created_at=days_ago(40))

    factors = calculate_lead_score(profile, NOW)

    assert factors.no_recent_activity == -10
    assert factors.total == 0


def test_calculate_lead_score_clamps_at_hundred():
    weights = LeadScoreWeights(applied_credit=500)
    profile = LeadProfile(customer_id="c4", has_applied_credit=True)

    assert calculate_lead_score(profile, NOW, weights).total == 100


@pytest.mark.parametrize(
    "days,recent,cooling,stale",
    [
        (0, 20, 0, 0),
        (7, 20, 0, 0),
        (8, 0, 0, 0),
        (14, 0, 0, 0),
        (15, 0, -10, 0),
        (30, 0, -10, 0),
        (31, 0, 0, -15),
        (90, 0, 0, -15),
    ],
)
def test_activity_windows(days, recent, cooling, stale):
    profile = LeadProfile(customer_id="c5", last_activity_at=days_ago(days), created_at=days_ago(120))

    factors = calculate_lead_score(profile, NOW)

    assert factors.has_recent_activity == recent
    assert factors.no_recent_activity == cooling
    assert factors.stale_lead == stale


def test_naive_timestamps_are_treated_as_utc():
    profile = LeadProfile(customer_id="c6", last_activity_at=datetime(2026, 3, 1, 15, 0))

    assert calculate_lead_score(profile, NOW).has_recent_activity == 20


def test_cash_buyers_get_no_financing_points():
    profile = LeadProfile(customer_id="c7", financing_type="cash")

    assert calculate_lead_score(profile, NOW).needs_financing == 0


@pytest.mark.parametrize(
    "score,temperature",
    [(100, "hot"), (70, "hot"), (69, "warm"), (40, "warm"), (39, "cold"), (20, "cold"), (19, "dead"), (0, "dead")],
)
def test_get_lead_temperature_thresholds(score, temperature):
    assert get_lead_temperature(score) == temperature


def test_determine_priority_applied_but_stale_is_urgent():
    """A credit application outranks a low score"""
    profile = LeadProfile(customer_id="c8", applied=True, last_activity_at=days_ago(45), created_at=days_ago(60))
    assessment = assess_lead(profile, NOW)

    assert assessment.score == 15
    assert assessment.temperature == "dead"
    assert assessment.priority == "urgent"


def test_determine_priority_bands():
    old = LeadProfile(customer_id="c9", created_at=days_ago(10))
    new = LeadProfile(customer_id="c10", created_at=NOW - timedelta(hours=3))

    assert determine_priority(old, 80, NOW) == "urgent"
    assert determine_priority(old, 60, NOW) == "high"
    assert determine_priority(new, 10, NOW) == "high"
    assert determine_priority(old, 45, NOW) == "medium"
    assert determine_priority(old, 10, NOW) == "low"


def test_determine_priority_closed_deals_are_low():
    won = LeadProfile(customer_id="c11", applied=True, status="won")

    assert determine_priority(won, 95, NOW) == "low"


def test_calculate_days_in_stage():
    assert calculate_days_in_stage(LeadProfile(customer_id="a", status_changed_at=days_ago(3), created_at=days_ago(30)), NOW) == 3
    assert calculate_days_in_stage(LeadProfile(customer_id="b", created_at=days_ago(10)), NOW) == 10
    assert calculate_days_in_stage(LeadProfile(customer_id="c"), NOW) == 0
    assert calculate_days_in_stage(LeadProfile(customer_id="d", status_changed_at=NOW + timedelta(days=2)), NOW) == 0


def test_calculate_response_time():
    created = datetime(2026, 3, 2, 10, 0, tzinfo=timezone.utc)

    assert calculate_response_time(created, datetime(2026, 3, 2, 10, 45, 30, tzinfo=timezone.utc)) == 45
    assert calculate_response_time(created, None) is None


def test_suggest_next_action():
    assert suggest_next_action(LeadProfile(customer_id="a", applied=True), NOW).startswith("Follow up on credit")
    assert "check-in" in suggest_next_action(LeadProfile(customer_id="b", last_activity_at=days_ago(10)), NOW)
    assert "trailer details" in suggest_next_action(LeadProfile(customer_id="c", stock_number="TR-9"), NOW)
    assert "contact information" in suggest_next_action(LeadProfile(customer_id="d", email="x@example.com"), NOW)
    assert "initial contact" in suggest_next_action(
        LeadProfile(customer_id="e", email="x@example.com", phone="555-0100"), NOW
    )


def test_recalculate_lead_scores_keeps_order():
    profiles = [
        LeadProfile(customer_id="first", applied=True, created_at=days_ago(5)),
        LeadProfile(customer_id="second", created_at=days_ago(5)),
    ]

    assessments = recalculate_lead_scores(profiles, NOW)

    assert [a.customer_id for a in assessments] == ["first", "second"]
    assert assessments[0].score == 30
    assert assessments[1].score == 0


def test_assess_lead_is_deterministic():
    profile = LeadProfile(customer_id="c12", email="x@example.com", phone="555", last_activity_at=days_ago(1))

    assert assess_lead(profile, NOW) == assess_lead(profile, NOW)
