"""Domain models - immutable value objects passed in and out of the calculators"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional, Union


@dataclass(frozen=True)
class FinanceResult:
    """Traditional loan quote"""

    principal: float
    monthly_payment: float
    total_paid: float
    total_interest: float
    taxes: float


class AprSolveStatus(str, Enum):
    CONVERGED = "converged"
    MAX_ITERATIONS_EXCEEDED = "max_iterations_exceeded"
    STALLED = "stalled"  # non-finite value or vanishing derivative
    DEGENERATE = "degenerate"  # zero principal, term or payment


@dataclass(frozen=True)
class AprSolution:
    """Result of solving for the APR that produces a target payment"""

    apr: float
    status: AprSolveStatus
    iterations: int

    @property
    def converged(self) -> bool:
        return self.status == AprSolveStatus.CONVERGED


@dataclass(frozen=True)
class FinanceMatrixRow:
    """Monthly payments for one term across several down payments"""

    term_months: int
    payments: List[float]


@dataclass(frozen=True)
class CashSettlement:
    """Outright cash purchase breakdown"""

    base_price: float
    added_options: float
    subtotal: float
    taxes: float
    fees: float
    total_cash: float


@dataclass(frozen=True)
class CashDiscount:
    original_price: float
    discount: float
    discounted_price: float


@dataclass(frozen=True)
class RTOQuote:
    """Rent-to-own quote: higher monthly payments, low down, early buyout option"""

    rto_price: float
    down: float
    monthly_rent: float
    monthly_tax: float
    monthly_total: float
    due_at_signing: float
    buyout_fee: float
    total_paid: float
    doc_fee: float


@dataclass(frozen=True)
class RTOMatrixRow:
    """One RTO term: the monthly total and lifetime cost for each down payment"""

    term_months: int
    monthly_total: float
    totals_paid: List[float]


@dataclass(frozen=True)
class RTOComparison:
    rto_total_cost: float
    finance_total_cost: float
    difference: float
    rto_is_more_expensive: bool


@dataclass(frozen=True)
class NumericCost:
    """Wholesale cost known as a positive amount"""

    amount: float


@dataclass(frozen=True)
class PlaceholderCost:
    """Cost missing or given as text such as "Call for Price" """

    reason: str


Cost = Union[NumericCost, PlaceholderCost]


class PricingStatus(str, Enum):
    PRICED = "PRICED"
    ASK_FOR_PRICING = "ASK_FOR_PRICING"


@dataclass(frozen=True)
class PricingResult:
    price: Optional[float]
    pricing_status: PricingStatus


@dataclass(frozen=True)
class PriceRangeCheck:
    """Outcome of the listed-price guardrail"""

    valid: bool
    min: float
    max: float
    message: Optional[str] = None


@dataclass(frozen=True)
class LeadProfile:
    """Customer attributes the lead scoring policy reads"""

    customer_id: str
    applied: bool = False
    has_applied_credit: bool = False
    email: Optional[str] = None
    phone: Optional[str] = None
    stock_number: Optional[str] = None
    financing_type: Optional[str] = None  # "cash", "finance" or "rto"
    status: Optional[str] = None
    last_activity_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    status_changed_at: Optional[datetime] = None

    @property
    def has_applied(self) -> bool:
        return self.applied or self.has_applied_credit


@dataclass(frozen=True)
class LeadScoreFactors:
    """Points contributed by each scoring rule"""

    has_applied_credit: int = 0
    has_recent_activity: int = 0
    has_specific_trailer: int = 0
    needs_financing: int = 0
    has_complete_info: int = 0
    has_email: int = 0
    recently_created: int = 0
    no_recent_activity: int = 0
    stale_lead: int = 0
    total: int = 0


@dataclass(frozen=True)
class LeadAssessment:
    """Score and tiers recomputed for a single customer"""

    customer_id: str
    score: int
    temperature: str
    priority: str
    days_in_stage: int
    factors: LeadScoreFactors = field(default_factory=LeadScoreFactors)


@dataclass(frozen=True)
class RecalculationStats:
    total: int
    updated: int
    errors: int
    duration_seconds: float
