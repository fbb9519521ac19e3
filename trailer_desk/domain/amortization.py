"""Amortization engine - fixed-rate loan payments and APR solving"""

import math
from typing import Iterable, List

from trailer_desk.domain.models import (
    AprSolution,
    AprSolveStatus,
    FinanceMatrixRow,
    FinanceResult,
)
from trailer_desk.domain.exceptions import InvalidInputError
from trailer_desk.domain.validation import non_negative_amount, require_finite, require_term

DEFAULT_APR_GUESS = 8.0
MIN_APR_GUESS = 0.0001  # Newton needs a non-zero rate to start from
MAX_APR_ITERATIONS = 30
APR_TOLERANCE = 1e-6
MIN_DERIVATIVE = 1e-12

DEFAULT_FINANCE_TERMS = (24, 36, 48, 60)
DEFAULT_DOWN_PAYMENTS = (0, 1000, 2500, 5000)
MAX_TERM_MONTHS = 140


def _monthly_rate(apr_percent: float) -> float:
    return apr_percent / 100 / 12


def _annuity_payment(principal: float, monthly_rate: float, term_months: int) -> float:
    """P * r / (1 - (1+r)^-n), or P / n when the rate is too small to register"""
    # expm1/log1p keep 1 - (1+r)^-n accurate for rates where (1+r)^n rounds to 1
    discount = -math.expm1(-term_months * math.log1p(monthly_rate))
    if discount == 0:
        return principal / term_months

    payment = principal * monthly_rate / discount
    if not math.isfinite(payment):
        raise InvalidInputError(f"Payment overflows at a monthly rate of {monthly_rate!r}")
    return payment


def calculate_finance(
    price: float,
    down: float,
    tax_percent: float,
    fees: float,
    apr_percent: float,
    term_months: int,
) -> FinanceResult:
    """
    Quote a traditional fixed-rate loan.

    Taxes are charged on the price and financed together with fees:
        principal = max(0, price - down + taxes + fees)

    A fully covered purchase (principal 0) or a zero term has no payment;
    the buyer pays down + fees up front.

    Example:
        price $20,000, $2,000 down, 7% tax, $500 fees, 9.5% APR, 60 months
        → principal $19,900, payment ≈ $418/mo
    """
    price = non_negative_amount("price", price)
    down = non_negative_amount("down", down)
    tax_percent = non_negative_amount("tax_percent", tax_percent)
    fees = non_negative_amount("fees", fees)
    apr_percent = non_negative_amount("apr_percent", apr_percent)
    term_months = require_term("term_months", term_months, MAX_TERM_MONTHS)

    taxes = price * (tax_percent / 100)
    principal = max(0.0, price - down + taxes + fees)

    if principal == 0 or term_months == 0:
        return FinanceResult(
            principal=0.0,
            monthly_payment=0.0,
            total_paid=down + fees,
            total_interest=0.0,
            taxes=taxes,
        )

    monthly_payment = _annuity_payment(principal, _monthly_rate(apr_percent), term_months)

    total_paid = monthly_payment * term_months + down
    # Clamp absorbs floating-point noise at 0% APR
    total_interest = max(0.0, total_paid - down - price - fees)

    return FinanceResult(
        principal=principal,
        monthly_payment=monthly_payment,
        total_paid=total_paid,
        total_interest=total_interest,
        taxes=taxes,
    )


def calculate_monthly_payment(principal: float, apr_percent: float, term_months: int) -> float:
    """Payment for an already-known principal, used by payment grids"""
    principal = non_negative_amount("principal", principal)
    apr_percent = non_negative_amount("apr_percent", apr_percent)
    term_months = require_term("term_months", term_months, MAX_TERM_MONTHS)

    if principal == 0 or term_months == 0:
        return 0.0

    return _annuity_payment(principal, _monthly_rate(apr_percent), term_months)


def _payment_rate_derivative(principal: float, monthly_rate: float, term_months: int, growth: float) -> float:
    """d(payment)/dr = P * (g(g-1) - r*n*(1+r)^(n-1)) / (g-1)^2 with g = (1+r)^n"""
    growth_prime = term_months * (1 + monthly_rate) ** (term_months - 1)
    return principal * (growth * (growth - 1) - monthly_rate * growth_prime) / (growth - 1) ** 2


def solve_apr(
    principal: float,
    target_payment: float,
    term_months: int,
    initial_guess_apr: float = DEFAULT_APR_GUESS,
) -> AprSolution:
    """
    Find the APR whose monthly payment matches target_payment.

    Newton-Raphson on f(apr) = target - payment(apr). The derivative is taken
    with respect to the monthly rate, so each step is scaled back to an annual
    percentage (x 12 x 100). APR is clamped at zero after every step.

    Stops when:
    - the APR moves less than 1e-6 between iterations (CONVERGED)
    - f or f' is non-finite or |f'| < 1e-12 (STALLED)
    - 30 iterations pass (MAX_ITERATIONS_EXCEEDED)

    The best guess is always returned; callers should check `converged`
    before showing the rate to a customer.
    """
    principal = non_negative_amount("principal", principal)
    target_payment = non_negative_amount("target_payment", target_payment)
    term_months = require_term("term_months", term_months, MAX_TERM_MONTHS)
    initial_guess_apr = require_finite("initial_guess_apr", initial_guess_apr)

    if principal == 0 or term_months == 0 or target_payment == 0:
        return AprSolution(apr=0.0, status=AprSolveStatus.DEGENERATE, iterations=0)

    apr = max(MIN_APR_GUESS, initial_guess_apr)

    for iteration in range(1, MAX_APR_ITERATIONS + 1):
        if apr < MIN_APR_GUESS:
            # Below the floor (1+r)^n - 1 loses too much precision for f'.
            # No non-negative rate gives a payment below straight-line P/n.
            if target_payment <= principal / term_months:
                return AprSolution(apr=0.0, status=AprSolveStatus.CONVERGED, iterations=iteration)
            apr = MIN_APR_GUESS

        monthly_rate = _monthly_rate(apr)
        try:
            growth = (1 + monthly_rate) ** term_months
            f = target_payment - (principal * monthly_rate * growth) / (growth - 1)
            df = -_payment_rate_derivative(principal, monthly_rate, term_months, growth)
        except (OverflowError, ZeroDivisionError):
            return AprSolution(apr=apr, status=AprSolveStatus.STALLED, iterations=iteration)

        if not math.isfinite(f) or not math.isfinite(df) or abs(df) < MIN_DERIVATIVE:
            return AprSolution(apr=apr, status=AprSolveStatus.STALLED, iterations=iteration)

        next_apr = apr - (f / df) * 12 * 100
        if not math.isfinite(next_apr):
            return AprSolution(apr=apr, status=AprSolveStatus.STALLED, iterations=iteration)

        if abs(next_apr - apr) < APR_TOLERANCE:
            return AprSolution(apr=max(0.0, next_apr), status=AprSolveStatus.CONVERGED, iterations=iteration)

        apr = max(0.0, next_apr)

    return AprSolution(apr=apr, status=AprSolveStatus.MAX_ITERATIONS_EXCEEDED, iterations=MAX_APR_ITERATIONS)


def build_finance_matrix(
    price: float,
    tax_percent: float,
    fees: float,
    apr_percent: float,
    terms: Iterable[int] = DEFAULT_FINANCE_TERMS,
    down_payments: Iterable[float] = DEFAULT_DOWN_PAYMENTS,
) -> List[FinanceMatrixRow]:
    """
    Monthly payment grid: one row per term, one column per down payment.

    Terms are deduplicated and sorted; each must be 1-140 months.
    """
    unique_terms = sorted({require_term("term_months", t) for t in terms})
    for term in unique_terms:
        if not 1 <= term <= MAX_TERM_MONTHS:
            raise InvalidInputError(f"term_months must be between 1 and {MAX_TERM_MONTHS}, got {term}")

    downs = list(down_payments)

    return [
        FinanceMatrixRow(
            term_months=term,
            payments=[
                calculate_finance(price, down, tax_percent, fees, apr_percent, term).monthly_payment
                for down in downs
            ],
        )
        for term in unique_terms
    ]
