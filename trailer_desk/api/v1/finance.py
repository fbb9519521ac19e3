"""POST /v1/finance/* - loan quotes, payment grids and APR solving"""

import logging
from fastapi import APIRouter, Depends, HTTPException

from trailer_desk.api.v1.schemas import (
    FinanceMatrixRequest,
    FinanceMatrixResponse,
    FinanceMatrixRowSchema,
    FinanceQuoteRequest,
    FinanceQuoteResponse,
    MonthlyPaymentRequest,
    MonthlyPaymentResponse,
    SolveAprRequest,
    SolveAprResponse,
)
from trailer_desk.api.dependencies import get_request_id
from trailer_desk.domain.amortization import (
    build_finance_matrix,
    calculate_finance,
    calculate_monthly_payment,
    solve_apr,
)
from trailer_desk.domain.exceptions import InvalidInputError
from trailer_desk.infrastructure.observability.logging import log_apr_solve
from trailer_desk.infrastructure.observability.metrics import apr_solve_counter, record_calculation

router = APIRouter()


@router.post("/finance/quote", response_model=FinanceQuoteResponse)
def create_finance_quote(
    request_body: FinanceQuoteRequest,
    request_id: str = Depends(get_request_id),
):
    """Monthly payment, total paid and interest for a traditional loan"""
    try:
        result = calculate_finance(
            price=request_body.price,
            down=request_body.down,
            tax_percent=request_body.tax_percent,
            fees=request_body.fees,
            apr_percent=request_body.apr_percent,
            term_months=request_body.term_months,
        )
    except InvalidInputError as e:
        logging.warning(f"Invalid finance input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    record_calculation("finance")
    return FinanceQuoteResponse(
        principal=result.principal,
        monthly_payment=result.monthly_payment,
        total_paid=result.total_paid,
        total_interest=result.total_interest,
        taxes=result.taxes,
    )


@router.post("/finance/payment", response_model=MonthlyPaymentResponse)
def create_monthly_payment(
    request_body: MonthlyPaymentRequest,
    request_id: str = Depends(get_request_id),
):
    try:
        payment = calculate_monthly_payment(
            request_body.principal,
            request_body.apr_percent,
            request_body.term_months,
        )
    except InvalidInputError as e:
        logging.warning(f"Invalid payment input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    record_calculation("payment")
    return MonthlyPaymentResponse(monthly_payment=payment)


@router.post("/finance/solve-apr", response_model=SolveAprResponse)
def create_apr_solution(
    request_body: SolveAprRequest,
    request_id: str = Depends(get_request_id),
):
    """
    Solve for the APR that yields the requested monthly payment.

    Always returns 200 with the best estimate; `converged` tells the caller
    whether the rate can be shown as-is.
    """
    try:
        solution = solve_apr(
            request_body.principal,
            request_body.target_payment,
            request_body.term_months,
            request_body.initial_guess_apr,
        )
    except InvalidInputError as e:
        logging.warning(f"Invalid APR solve input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    apr_solve_counter.labels(status=solution.status.value).inc()
    log_apr_solve(request_id, solution.status.value, solution.iterations, solution.apr)

    return SolveAprResponse(
        apr=solution.apr,
        converged=solution.converged,
        status=solution.status.value,
        iterations=solution.iterations,
    )


@router.post("/finance/matrix", response_model=FinanceMatrixResponse)
def create_finance_matrix(
    request_body: FinanceMatrixRequest,
    request_id: str = Depends(get_request_id),
):
    """Payment grid across terms and down payments at a single APR"""
    try:
        rows = build_finance_matrix(
            price=request_body.price,
            tax_percent=request_body.tax_percent,
            fees=request_body.fees,
            apr_percent=request_body.apr_percent,
            terms=request_body.terms,
            down_payments=request_body.down_payments,
        )
    except InvalidInputError as e:
        logging.warning(f"Invalid finance matrix input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    record_calculation("matrix")
    return FinanceMatrixResponse(
        apr_percent=request_body.apr_percent,
        down_payments=request_body.down_payments,
        rows=[FinanceMatrixRowSchema(term_months=row.term_months, payments=row.payments) for row in rows],
    )
