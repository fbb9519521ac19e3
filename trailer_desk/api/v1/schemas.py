"""Pydantic schemas for API request/response validation"""

from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, Field

from trailer_desk.domain.amortization import MAX_TERM_MONTHS


class FinanceQuoteRequest(BaseModel):
    """Request body for POST /v1/finance/quote"""

    price: float = Field(..., description="Unit selling price")
    down: float = Field(0, description="Down payment")
    tax_percent: float = Field(0, description="Sales tax percentage, e.g. 7 for 7%")
    fees: float = Field(0, description="Doc, title and registration fees")
    apr_percent: float = Field(..., description="Annual percentage rate")
    term_months: int = Field(..., ge=0, le=MAX_TERM_MONTHS, description="Loan term in months")


class FinanceQuoteResponse(BaseModel):
    principal: float
    monthly_payment: float
    total_paid: float
    total_interest: float
    taxes: float


class MonthlyPaymentRequest(BaseModel):
    """Request body for POST /v1/finance/payment"""

    principal: float
    apr_percent: float
    term_months: int = Field(..., ge=0, le=MAX_TERM_MONTHS)


class MonthlyPaymentResponse(BaseModel):
    monthly_payment: float


class SolveAprRequest(BaseModel):
    """Request body for POST /v1/finance/solve-apr"""

    principal: float
    target_payment: float = Field(..., description="Desired monthly payment")
    term_months: int = Field(..., ge=0, le=MAX_TERM_MONTHS)
    initial_guess_apr: float = Field(8.0, description="Starting APR for the solver")


class SolveAprResponse(BaseModel):
    apr: float
    converged: bool
    status: str
    iterations: int


class FinanceMatrixRequest(BaseModel):
    """Request body for POST /v1/finance/matrix"""

    price: float
    tax_percent: float = 0
    fees: float = 0
    apr_percent: float
    terms: List[int] = Field(default_factory=lambda: [24, 36, 48, 60])
    down_payments: List[float] = Field(default_factory=lambda: [0, 1000, 2500, 5000])


class FinanceMatrixRowSchema(BaseModel):
    term_months: int
    payments: List[float]


class FinanceMatrixResponse(BaseModel):
    apr_percent: float
    down_payments: List[float]
    rows: List[FinanceMatrixRowSchema]


class CashQuoteRequest(BaseModel):
    """Request body for POST /v1/cash/quote"""

    price: float
    tax_percent: float = 0
    fees: float = 0
    added_options: float = 0


class CashQuoteResponse(BaseModel):
    base_price: float
    added_options: float
    subtotal: float
    taxes: float
    fees: float
    total_cash: float
    out_the_door: float = Field(..., description="Price plus tax plus fees, before options")


class CashDiscountRequest(BaseModel):
    """Request body for POST /v1/cash/discount"""

    price: float
    discount_percent: float


class CashDiscountResponse(BaseModel):
    original_price: float
    discount: float
    discounted_price: float


class RTOQuoteRequest(BaseModel):
    """Request body for POST /v1/rto/quote"""

    price: float
    down: float = 0
    tax_percent: float = 0
    term_months: int = Field(..., ge=0)
    base_markup: float = 1400
    monthly_factor: float = 0.035
    min_down: float = 200
    doc_fee: float = 99
    buyout_fee: float = 250
    # Optional finance quote to compare against
    finance_monthly: Optional[float] = None
    finance_term: Optional[int] = Field(None, ge=0)
    finance_down: float = 0


class RTOComparisonSchema(BaseModel):
    rto_total_cost: float
    finance_total_cost: float
    difference: float
    rto_is_more_expensive: bool


class RTOQuoteResponse(BaseModel):
    rto_price: float
    down: float
    monthly_rent: float
    monthly_tax: float
    monthly_total: float
    due_at_signing: float
    buyout_fee: float
    total_paid: float
    doc_fee: float
    comparison: Optional[RTOComparisonSchema] = None


class RTOMatrixRequest(BaseModel):
    """Request body for POST /v1/rto/matrix"""

    price: float
    tax_percent: float = 0
    terms: List[int] = Field(default_factory=lambda: [24, 36, 48])
    down_payments: List[float] = Field(default_factory=lambda: [0, 1000, 2500, 5000])
    base_markup: float = 1400
    monthly_factor: float = 0.035


class RTOMatrixRowSchema(BaseModel):
    term_months: int
    monthly_total: float
    totals_paid: List[float]


class RTOMatrixResponse(BaseModel):
    down_payments: List[float]
    rows: List[RTOMatrixRowSchema]


class SellingPriceRequest(BaseModel):
    """Request body for POST /v1/pricing/selling-price"""

    cost: Union[float, str, None] = Field(..., description="Wholesale cost or text such as 'Call for Price'")


class SellingPriceResponse(BaseModel):
    price: Optional[float] = None
    pricing_status: str


class PriceRangeRequest(BaseModel):
    """Request body for POST /v1/pricing/validate-range"""

    selling_price: float
    listed_price: float


class PriceRangeResponse(BaseModel):
    valid: bool
    min: float
    max: float
    message: Optional[str] = None


class LeadScoreRequest(BaseModel):
    """Request body for POST /v1/leads/score"""

    customer_id: str = Field(..., min_length=1)
    applied: bool = False
    has_applied_credit: bool = False
    email: Optional[str] = None
    phone: Optional[str] = None
    stock_number: Optional[str] = None
    financing_type: Optional[str] = None
    status: Optional[str] = None
    last_activity_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    status_changed_at: Optional[datetime] = None


class LeadScoreFactorsSchema(BaseModel):
    has_applied_credit: int
    has_recent_activity: int
    has_specific_trailer: int
    needs_financing: int
    has_complete_info: int
    has_email: int
    recently_created: int
    no_recent_activity: int
    stale_lead: int
    total: int


class LeadScoreResponse(BaseModel):
    customer_id: str
    score: int
    temperature: str
    priority: str
    days_in_stage: int
    next_action: str
    factors: LeadScoreFactorsSchema


class RecalculationResponse(BaseModel):
    """Response for POST /v1/leads/recalculate"""

    success: bool
    total: int
    updated: int
    errors: int
    duration_seconds: float
