"""POST /v1/cash/* and /v1/rto/* - cash settlement and rent-to-own quotes"""

import logging
from fastapi import APIRouter, Depends, HTTPException

from trailer_desk.api.v1.schemas import (
    CashDiscountRequest,
    CashDiscountResponse,
    CashQuoteRequest,
    CashQuoteResponse,
    RTOComparisonSchema,
    RTOMatrixRequest,
    RTOMatrixResponse,
    RTOMatrixRowSchema,
    RTOQuoteRequest,
    RTOQuoteResponse,
)
from trailer_desk.api.dependencies import get_request_id
from trailer_desk.domain.cash import calculate_cash, calculate_cash_discount, calculate_out_the_door
from trailer_desk.domain.exceptions import InvalidInputError
from trailer_desk.domain.rent_to_own import build_rto_matrix, calculate_rto, compare_rto_vs_finance
from trailer_desk.infrastructure.observability.metrics import record_calculation

router = APIRouter()


@router.post("/cash/quote", response_model=CashQuoteResponse)
def create_cash_quote(
    request_body: CashQuoteRequest,
    request_id: str = Depends(get_request_id),
):
    try:
        settlement = calculate_cash(
            price=request_body.price,
            tax_percent=request_body.tax_percent,
            fees=request_body.fees,
            added_options=request_body.added_options,
        )
        out_the_door = calculate_out_the_door(request_body.price, request_body.tax_percent, request_body.fees)
    except InvalidInputError as e:
        logging.warning(f"Invalid cash input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    record_calculation("cash")
    return CashQuoteResponse(
        base_price=settlement.base_price,
        added_options=settlement.added_options,
        subtotal=settlement.subtotal,
        taxes=settlement.taxes,
        fees=settlement.fees,
        total_cash=settlement.total_cash,
        out_the_door=out_the_door,
    )


@router.post("/cash/discount", response_model=CashDiscountResponse)
def create_cash_discount(
    request_body: CashDiscountRequest,
    request_id: str = Depends(get_request_id),
):
    try:
        discount = calculate_cash_discount(request_body.price, request_body.discount_percent)
    except InvalidInputError as e:
        logging.warning(f"Invalid discount input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    record_calculation("cash_discount")
    return CashDiscountResponse(
        original_price=discount.original_price,
        discount=discount.discount,
        discounted_price=discount.discounted_price,
    )


@router.post("/rto/quote", response_model=RTOQuoteResponse)
def create_rto_quote(
    request_body: RTOQuoteRequest,
    request_id: str = Depends(get_request_id),
):
    """
    Rent-to-own quote, optionally compared with a finance payment.

    The comparison is included only when both finance_monthly and
    finance_term are supplied.
    """
    try:
        quote = calculate_rto(
            price=request_body.price,
            down=request_body.down,
            tax_percent=request_body.tax_percent,
            term_months=request_body.term_months,
            base_markup=request_body.base_markup,
            monthly_factor=request_body.monthly_factor,
            min_down=request_body.min_down,
            doc_fee=request_body.doc_fee,
            buyout_fee=request_body.buyout_fee,
        )

        comparison = None
        if request_body.finance_monthly is not None and request_body.finance_term is not None:
            result = compare_rto_vs_finance(
                quote,
                request_body.finance_monthly,
                request_body.finance_term,
                request_body.finance_down,
            )
            comparison = RTOComparisonSchema(
                rto_total_cost=result.rto_total_cost,
                finance_total_cost=result.finance_total_cost,
                difference=result.difference,
                rto_is_more_expensive=result.rto_is_more_expensive,
            )
    except InvalidInputError as e:
        logging.warning(f"Invalid RTO input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    record_calculation("rto")
    return RTOQuoteResponse(
        rto_price=quote.rto_price,
        down=quote.down,
        monthly_rent=quote.monthly_rent,
        monthly_tax=quote.monthly_tax,
        monthly_total=quote.monthly_total,
        due_at_signing=quote.due_at_signing,
        buyout_fee=quote.buyout_fee,
        total_paid=quote.total_paid,
        doc_fee=quote.doc_fee,
        comparison=comparison,
    )


@router.post("/rto/matrix", response_model=RTOMatrixResponse)
def create_rto_matrix(
    request_body: RTOMatrixRequest,
    request_id: str = Depends(get_request_id),
):
    """RTO grid across the fixed terms and several down payments"""
    try:
        rows = build_rto_matrix(
            price=request_body.price,
            tax_percent=request_body.tax_percent,
            terms=request_body.terms,
            down_payments=request_body.down_payments,
            base_markup=request_body.base_markup,
            monthly_factor=request_body.monthly_factor,
        )
    except InvalidInputError as e:
        logging.warning(f"Invalid RTO matrix input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    record_calculation("rto_matrix")
    return RTOMatrixResponse(
        down_payments=request_body.down_payments,
        rows=[
            RTOMatrixRowSchema(
                term_months=row.term_months,
                monthly_total=row.monthly_total,
                totals_paid=row.totals_paid,
            )
            for row in rows
        ],
    )
