"""Lead scoring engine - scores customers 0-100 and buckets them for follow-up"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional

from trailer_desk.domain.models import LeadAssessment, LeadProfile, LeadScoreFactors
from trailer_desk.utils.date_utils import hours_between, whole_days_between, whole_minutes_between


@dataclass(frozen=True)
class LeadScoreWeights:
    """
    Points added (or removed) by each scoring rule.

    - applied_credit:     submitted a credit application (strongest signal)
    - recent_activity:    call, email or meeting within RECENT_ACTIVITY_DAYS
    - cooling_activity:   last activity between COOLING_AFTER_DAYS and STALE_AFTER_DAYS
    - stale_activity:     last activity more than STALE_AFTER_DAYS ago
    - specific_trailer:   asked about a stock number
    - needs_financing:    finance or rent-to-own buyer (more engaged than cash)
    - complete_contact:   both email and phone on file
    - email_on_file:      email on file (stacks with complete_contact)
    - new_lead:           created within NEW_LEAD_HOURS
    """

    applied_credit: int = 30
    recent_activity: int = 20
    cooling_activity: int = -10
    stale_activity: int = -15
    specific_trailer: int = 15
    needs_financing: int = 10
    complete_contact: int = 5
    email_on_file: int = 3
    new_lead: int = 5


LEAD_SCORE_WEIGHTS = LeadScoreWeights()

RECENT_ACTIVITY_DAYS = 7
COOLING_AFTER_DAYS = 14
STALE_AFTER_DAYS = 30
NEW_LEAD_HOURS = 24

MIN_SCORE = 0
MAX_SCORE = 100

FINANCING_TYPES = {"finance", "rto"}
CLOSED_STATUSES = {"won", "lost", "dead"}

# (minimum score, temperature), checked top-down
TEMPERATURE_THRESHOLDS = (
    (70, "hot"),
    (40, "warm"),
    (20, "cold"),
)
DEAD_TEMPERATURE = "dead"

URGENT_SCORE = 80
HIGH_SCORE = 60
MEDIUM_SCORE = 40


def _is_new_lead(profile: LeadProfile, now: datetime) -> bool:
    return profile.created_at is not None and hours_between(profile.created_at, now) <= NEW_LEAD_HOURS


def calculate_lead_score(
    profile: LeadProfile,
    now: datetime,
    weights: LeadScoreWeights = LEAD_SCORE_WEIGHTS,
) -> LeadScoreFactors:
    """
    Score a lead from 0 (dead) to 100 (buy now).

    Each rule adds its weight from the table above; the sum is clamped to
    0-100. The returned factors show which rules fired, with `total` holding
    the final score.
    """
    applied_credit = weights.applied_credit if profile.has_applied else 0

    recent = cooling = stale = 0
    if profile.last_activity_at is not None:
        days_since_activity = whole_days_between(profile.last_activity_at, now)
        if days_since_activity <= RECENT_ACTIVITY_DAYS:
            recent = weights.recent_activity
        elif days_since_activity > STALE_AFTER_DAYS:
            stale = weights.stale_activity
        elif days_since_activity > COOLING_AFTER_DAYS:
            cooling = weights.cooling_activity

    specific_trailer = weights.specific_trailer if profile.stock_number else 0
    needs_financing = weights.needs_financing if (profile.financing_type or "").lower() in FINANCING_TYPES else 0
    complete_contact = weights.complete_contact if profile.email and profile.phone else 0
    email_on_file = weights.email_on_file if profile.email else 0
    new_lead = weights.new_lead if _is_new_lead(profile, now) else 0

    raw = (
        applied_credit
        + recent
        + cooling
        + stale
        + specific_trailer
        + needs_financing
        + complete_contact
        + email_on_file
        + new_lead
    )
    score = max(MIN_SCORE, min(MAX_SCORE, raw))

    return LeadScoreFactors(
        has_applied_credit=applied_credit,
        has_recent_activity=recent,
        has_specific_trailer=specific_trailer,
        needs_financing=needs_financing,
        has_complete_info=complete_contact,
        has_email=email_on_file,
        recently_created=new_lead,
        no_recent_activity=cooling,
        stale_lead=stale,
        total=score,
    )


def get_lead_temperature(score: int) -> str:
    for minimum, temperature in TEMPERATURE_THRESHOLDS:
        if score >= minimum:
            return temperature
    return DEAD_TEMPERATURE


def determine_priority(profile: LeadProfile, score: int, now: datetime) -> str:
    """
    Follow-up priority from score and pipeline state.

    Priority is not a pure function of score: a credit application makes a
    lead urgent however long it has sat, a brand-new lead is at least high,
    and closed deals (won, lost, dead) drop to low.
    """
    if (profile.status or "").lower() in CLOSED_STATUSES:
        return "low"

    if profile.has_applied or score >= URGENT_SCORE:
        return "urgent"

    if score >= HIGH_SCORE or _is_new_lead(profile, now):
        return "high"

    if score >= MEDIUM_SCORE:
        return "medium"

    return "low"


def calculate_days_in_stage(profile: LeadProfile, now: datetime) -> int:
    """Whole days since the status last changed, falling back to creation"""
    since = profile.status_changed_at or profile.created_at
    if since is None:
        return 0
    return max(0, whole_days_between(since, now))


def calculate_response_time(created_at: datetime, first_activity_at: Optional[datetime]) -> Optional[int]:
    """Minutes from lead creation to first recorded activity"""
    if first_activity_at is None:
        return None
    return whole_minutes_between(created_at, first_activity_at)


def suggest_next_action(profile: LeadProfile, now: datetime) -> str:
    if profile.has_applied:
        return "Follow up on credit application immediately"

    if profile.last_activity_at is not None and whole_days_between(profile.last_activity_at, now) > RECENT_ACTIVITY_DAYS:
        return "It's been a while - send a check-in message"

    if profile.stock_number:
        return "Send trailer details and pricing"

    if not profile.email or not profile.phone:
        return "Get complete contact information"

    return "Make initial contact and qualify lead"


def assess_lead(profile: LeadProfile, now: datetime) -> LeadAssessment:
    """Main entry point: score, temperature, priority and stage age for one customer"""
    factors = calculate_lead_score(profile, now)
    score = factors.total

    return LeadAssessment(
        customer_id=profile.customer_id,
        score=score,
        temperature=get_lead_temperature(score),
        priority=determine_priority(profile, score, now),
        days_in_stage=calculate_days_in_stage(profile, now),
        factors=factors,
    )


def recalculate_lead_scores(profiles: Iterable[LeadProfile], now: datetime) -> List[LeadAssessment]:
    """Assess a batch of customers against the same clock"""
    return [assess_lead(profile, now) for profile in profiles]
