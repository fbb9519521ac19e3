"""SQLAlchemy ORM models for the customer columns lead scoring reads and writes"""

import uuid

from sqlalchemy import Boolean, Column, DateTime, Integer, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func
from sqlalchemy.types import Uuid

Base = declarative_base()


class Customer(Base):
    """CRM customer / lead record"""

    __tablename__ = "customer"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    first_name = Column(Text, nullable=True)
    last_name = Column(Text, nullable=True)
    email = Column(Text, nullable=True)
    phone = Column(Text, nullable=True)
    applied = Column(Boolean, nullable=False, default=False)
    has_applied_credit = Column(Boolean, nullable=False, default=False)
    stock_number = Column(Text, nullable=True)
    financing_type = Column(Text, nullable=True)  # cash | finance | rto
    status = Column(Text, nullable=False, default="new", index=True)
    status_changed_at = Column(DateTime(timezone=True), nullable=True)
    last_activity_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=func.now())

    # Written back by the lead recalculation job
    lead_score = Column(Integer, nullable=True)
    temperature = Column(Text, nullable=True)
    priority = Column(Text, nullable=True)
    days_in_stage = Column(Integer, nullable=True)
