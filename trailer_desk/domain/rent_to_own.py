"""Rent-to-own (RTO) quotes"""

from typing import Iterable, List

from trailer_desk.domain.amortization import DEFAULT_DOWN_PAYMENTS
from trailer_desk.domain.exceptions import InvalidInputError
from trailer_desk.domain.models import RTOComparison, RTOMatrixRow, RTOQuote
from trailer_desk.domain.validation import non_negative_amount, require_term

DEFAULT_BASE_MARKUP = 1400.0
DEFAULT_MONTHLY_FACTOR = 0.035  # 3.5% of the RTO price per month
DEFAULT_MIN_DOWN = 200.0
DEFAULT_DOC_FEE = 99.0
DEFAULT_BUYOUT_FEE = 250.0

RTO_TERMS = (24, 36, 48)


def calculate_rto(
    price: float,
    down: float,
    tax_percent: float,
    term_months: int,
    base_markup: float = DEFAULT_BASE_MARKUP,
    monthly_factor: float = DEFAULT_MONTHLY_FACTOR,
    min_down: float = DEFAULT_MIN_DOWN,
    doc_fee: float = DEFAULT_DOC_FEE,
    buyout_fee: float = DEFAULT_BUYOUT_FEE,
) -> RTOQuote:
    """
    Build a rent-to-own quote.

    Rent is a flat share of the marked-up price and is taxed monthly. The
    customer brings at least min_down plus the doc fee and first month.

    Example:
        $8,600 trailer, 7% tax, 36 months
        → RTO price $10,000, rent $350, tax $24.50, $374.50/mo
    """
    price = non_negative_amount("price", price)
    down = non_negative_amount("down", down)
    tax_percent = non_negative_amount("tax_percent", tax_percent)
    term_months = require_term("term_months", term_months)
    base_markup = non_negative_amount("base_markup", base_markup)
    monthly_factor = non_negative_amount("monthly_factor", monthly_factor)
    min_down = non_negative_amount("min_down", min_down)
    doc_fee = non_negative_amount("doc_fee", doc_fee)
    buyout_fee = non_negative_amount("buyout_fee", buyout_fee)

    rto_price = price + base_markup
    down = max(down, min_down)

    monthly_rent = rto_price * monthly_factor
    monthly_tax = monthly_rent * (tax_percent / 100)
    monthly_total = monthly_rent + monthly_tax

    return RTOQuote(
        rto_price=rto_price,
        down=down,
        monthly_rent=monthly_rent,
        monthly_tax=monthly_tax,
        monthly_total=monthly_total,
        due_at_signing=down + doc_fee + monthly_total,
        buyout_fee=buyout_fee,
        total_paid=monthly_total * term_months + down + doc_fee,
        doc_fee=doc_fee,
    )


def calculate_rto_monthly(
    price: float,
    tax_percent: float,
    base_markup: float = DEFAULT_BASE_MARKUP,
    monthly_factor: float = DEFAULT_MONTHLY_FACTOR,
) -> float:
    """Monthly total only, for RTO payment grids"""
    price = non_negative_amount("price", price)
    tax_percent = non_negative_amount("tax_percent", tax_percent)
    base_markup = non_negative_amount("base_markup", base_markup)
    monthly_factor = non_negative_amount("monthly_factor", monthly_factor)

    monthly_rent = (price + base_markup) * monthly_factor
    return monthly_rent + monthly_rent * (tax_percent / 100)


def build_rto_matrix(
    price: float,
    tax_percent: float,
    terms: Iterable[int] = RTO_TERMS,
    down_payments: Iterable[float] = DEFAULT_DOWN_PAYMENTS,
    base_markup: float = DEFAULT_BASE_MARKUP,
    monthly_factor: float = DEFAULT_MONTHLY_FACTOR,
) -> List[RTOMatrixRow]:
    """
    RTO grid: one row per term, with the lifetime cost for each down payment.

    Rent does not depend on the down payment, so each row carries a single
    monthly total. Only the fixed RTO terms (24, 36, 48) are offered.
    """
    unique_terms = sorted({require_term("term_months", t) for t in terms})
    for term in unique_terms:
        if term not in RTO_TERMS:
            raise InvalidInputError(f"RTO terms are fixed at {RTO_TERMS}, got {term}")

    downs = list(down_payments)
    monthly_total = calculate_rto_monthly(price, tax_percent, base_markup, monthly_factor)

    return [
        RTOMatrixRow(
            term_months=term,
            monthly_total=monthly_total,
            totals_paid=[
                calculate_rto(
                    price, down, tax_percent, term, base_markup=base_markup, monthly_factor=monthly_factor
                ).total_paid
                for down in downs
            ],
        )
        for term in unique_terms
    ]


def compare_rto_vs_finance(
    rto_quote: RTOQuote,
    finance_monthly: float,
    finance_term: int,
    finance_down: float,
) -> RTOComparison:
    """Lifetime cost of an RTO quote against a finance payment"""
    finance_monthly = non_negative_amount("finance_monthly", finance_monthly)
    finance_term = require_term("finance_term", finance_term)
    finance_down = non_negative_amount("finance_down", finance_down)

    rto_total_cost = rto_quote.total_paid
    finance_total_cost = finance_monthly * finance_term + finance_down

    return RTOComparison(
        rto_total_cost=rto_total_cost,
        finance_total_cost=finance_total_cost,
        difference=abs(rto_total_cost - finance_total_cost),
        rto_is_more_expensive=rto_total_cost > finance_total_cost,
    )
