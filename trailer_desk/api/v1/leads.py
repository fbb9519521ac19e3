"""POST /v1/leads/* - lead scoring for one customer or the whole book"""

import time
import logging
from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from trailer_desk.api.v1.schemas import (
    LeadScoreFactorsSchema,
    LeadScoreRequest,
    LeadScoreResponse,
    RecalculationResponse,
)
from trailer_desk.api.dependencies import get_clock, get_request_id
from trailer_desk.config import settings
from trailer_desk.domain.lead_scoring import assess_lead, suggest_next_action
from trailer_desk.domain.models import LeadProfile, RecalculationStats
from trailer_desk.infrastructure.database.session import get_db
from trailer_desk.infrastructure.database.repositories import CustomerRepository
from trailer_desk.infrastructure.observability.logging import log_recalculation
from trailer_desk.infrastructure.observability.metrics import (
    lead_recalculation_counter,
    lead_recalculation_duration_histogram,
    lead_temperature_counter,
)

router = APIRouter()


def run_lead_recalculation(
    db: Session,
    now: datetime,
    request_id: str = "batch",
    progress_interval: int = 50,
) -> RecalculationStats:
    """
    Recompute score, temperature, priority and stage age for every customer.

    Each customer is committed on its own so one bad record does not undo
    the rest; failures are rolled back, logged, counted and skipped. Records
    changed by someone else mid-run can be overwritten.
    """
    start_time = time.time()
    repo = CustomerRepository(db)
    customers = repo.list_all()
    total = len(customers)

    logging.info(
        f"Starting lead score recalculation for {total} customers",
        extra={"request_id": request_id, "step": "lead_recalculation_start"},
    )

    updated = 0
    errors = 0
    # Rows loaded above stay usable across the per-record commits
    expire_on_commit = db.expire_on_commit
    db.expire_on_commit = False
    try:
        for customer in customers:
            customer_id = customer.id
            try:
                assessment = assess_lead(repo.to_profile(customer), now)
                repo.save_assessment(customer, assessment)
                db.commit()
            except Exception:
                db.rollback()
                errors += 1
                lead_recalculation_counter.labels(outcome="error").inc()
                logging.exception(
                    f"Error recalculating lead score for customer {customer_id}",
                    extra={"request_id": request_id, "customer_id": str(customer_id)},
                )
                continue

            updated += 1
            lead_recalculation_counter.labels(outcome="updated").inc()
            lead_temperature_counter.labels(temperature=assessment.temperature).inc()

            if progress_interval > 0 and updated % progress_interval == 0:
                logging.info(
                    f"Processed {updated}/{total} customers",
                    extra={"request_id": request_id, "step": "lead_recalculation_progress"},
                )
    finally:
        db.expire_on_commit = expire_on_commit

    duration = time.time() - start_time
    lead_recalculation_duration_histogram.observe(duration)
    log_recalculation(request_id, total, updated, errors, round(duration, 2))

    return RecalculationStats(
        total=total,
        updated=updated,
        errors=errors,
        duration_seconds=round(duration, 2),
    )


@router.post("/leads/score", response_model=LeadScoreResponse)
def score_lead(
    request_body: LeadScoreRequest,
    now: datetime = Depends(get_clock),
):
    """Score a single customer attribute bag without touching the store"""
    profile = LeadProfile(
        customer_id=request_body.customer_id,
        applied=request_body.applied,
        has_applied_credit=request_body.has_applied_credit,
        email=request_body.email,
        phone=request_body.phone,
        stock_number=request_body.stock_number,
        financing_type=request_body.financing_type,
        status=request_body.status,
        last_activity_at=request_body.last_activity_at,
        created_at=request_body.created_at,
        status_changed_at=request_body.status_changed_at,
    )
    assessment = assess_lead(profile, now)
    factors = assessment.factors

    return LeadScoreResponse(
        customer_id=assessment.customer_id,
        score=assessment.score,
        temperature=assessment.temperature,
        priority=assessment.priority,
        days_in_stage=assessment.days_in_stage,
        next_action=suggest_next_action(profile, now),
        factors=LeadScoreFactorsSchema(
            has_applied_credit=factors.has_applied_credit,
            has_recent_activity=factors.has_recent_activity,
            has_specific_trailer=factors.has_specific_trailer,
            needs_financing=factors.needs_financing,
            has_complete_info=factors.has_complete_info,
            has_email=factors.has_email,
            recently_created=factors.recently_created,
            no_recent_activity=factors.no_recent_activity,
            stale_lead=factors.stale_lead,
            total=factors.total,
        ),
    )


@router.post("/leads/recalculate", response_model=RecalculationResponse)
def recalculate_leads(
    db: Session = Depends(get_db),
    now: datetime = Depends(get_clock),
    request_id: str = Depends(get_request_id),
):
    """
    Batch recalculation over every customer.

    Can be called manually or from a scheduler. Per-customer failures are
    reported in `errors`; only a failure to load customers fails the request.
    """
    try:
        stats = run_lead_recalculation(
            db,
            now,
            request_id=request_id,
            progress_interval=settings.lead_recalc_progress_interval,
        )
    except Exception as e:
        db.rollback()
        logging.error(f"Fatal error in lead score recalculation: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Lead score recalculation failed")

    return RecalculationResponse(
        success=True,
        total=stats.total,
        updated=stats.updated,
        errors=stats.errors,
        duration_seconds=stats.duration_seconds,
    )
