"""Data access layer for CRM customers"""

from typing import List

from sqlalchemy.orm import Session

from trailer_desk.domain.exceptions import LeadRecordError
from trailer_desk.domain.models import LeadAssessment, LeadProfile
from trailer_desk.infrastructure.database.models import Customer


class CustomerRepository:
    """Repository for customer lead records"""

    def __init__(self, db: Session):
        self.db = db

    def list_all(self) -> List[Customer]:
        """Every customer, oldest first, for batch recalculation"""
        return self.db.query(Customer).order_by(Customer.created_at.asc(), Customer.id.asc()).all()

    def save_assessment(self, customer: Customer, assessment: LeadAssessment) -> Customer:
        """Write computed score and tiers back to the record"""
        customer.lead_score = assessment.score
        customer.temperature = assessment.temperature
        customer.priority = assessment.priority
        customer.days_in_stage = assessment.days_in_stage
        self.db.flush()
        return customer

    @staticmethod
    def to_profile(customer: Customer) -> LeadProfile:
        """Map an ORM row to the scoring input"""
        if customer.id is None:
            raise LeadRecordError("Customer has no id")

        return LeadProfile(
            customer_id=str(customer.id),
            applied=bool(customer.applied),
            has_applied_credit=bool(customer.has_applied_credit),
            email=customer.email,
            phone=customer.phone,
            stock_number=customer.stock_number,
            financing_type=customer.financing_type,
            status=customer.status,
            last_activity_at=customer.last_activity_at,
            created_at=customer.created_at,
            status_changed_at=customer.status_changed_at,
        )
