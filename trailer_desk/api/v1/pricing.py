"""POST /v1/pricing/* - selling price from cost and the listed-price guardrail"""

import logging
from fastapi import APIRouter, Depends, HTTPException

from trailer_desk.api.v1.schemas import (
    PriceRangeRequest,
    PriceRangeResponse,
    SellingPriceRequest,
    SellingPriceResponse,
)
from trailer_desk.api.dependencies import get_pricing_policy, get_request_id
from trailer_desk.domain.exceptions import InvalidInputError
from trailer_desk.domain.pricing import PricingPolicy, compute_selling_price, validate_price_range
from trailer_desk.infrastructure.observability.metrics import record_price_range_check, record_pricing

router = APIRouter()


@router.post("/pricing/selling-price", response_model=SellingPriceResponse)
def create_selling_price(
    request_body: SellingPriceRequest,
    policy: PricingPolicy = Depends(get_pricing_policy),
):
    """
    Selling price for a wholesale cost.

    Textual or missing costs are not errors: they come back as
    ASK_FOR_PRICING with no price.
    """
    result = compute_selling_price(request_body.cost, policy)
    record_pricing(result.pricing_status.value)

    return SellingPriceResponse(price=result.price, pricing_status=result.pricing_status.value)


@router.post("/pricing/validate-range", response_model=PriceRangeResponse)
def check_price_range(
    request_body: PriceRangeRequest,
    request_id: str = Depends(get_request_id),
):
    try:
        check = validate_price_range(request_body.selling_price, request_body.listed_price)
    except InvalidInputError as e:
        logging.warning(f"Invalid price range input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    record_price_range_check(check.valid)
    return PriceRangeResponse(valid=check.valid, min=check.min, max=check.max, message=check.message)
