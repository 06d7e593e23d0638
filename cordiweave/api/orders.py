from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException

from cordiweave.api.dependencies import (
    get_calculator,
    get_product_catalog,
    get_shipping_catalog,
)
from cordiweave.core.contracts import CalculateTotalsRequestValidator
from cordiweave.pricing.calculator import OrderTotalsCalculator
from cordiweave.pricing.catalog import ProductCatalog, ShippingCatalog

router = APIRouter()

_request_contract = CalculateTotalsRequestValidator()


@router.get("/shipping-options")
def shipping_options(shipping: ShippingCatalog = Depends(get_shipping_catalog)):
    return {
        "success": True,
        "data": [option.model_dump(mode="json") for option in shipping.options()],
    }


@router.post("/calculate-totals")
def calculate_totals(
    body: Dict[str, Any] = Body(...),
    calculator: OrderTotalsCalculator = Depends(get_calculator),
    products: ProductCatalog = Depends(get_product_catalog),
    shipping: ShippingCatalog = Depends(get_shipping_catalog),
):
    # Shape only; cart semantics are the calculator's
    problem = _request_contract.first_error_message(body)
    if problem:
        raise HTTPException(status_code=422, detail=f"Validation failed: {problem}")

    quote = calculator.quote(
        body["items"],
        body["shipping_method"],
        products.price_of,
        shipping.get,
    )
    return {"success": True, "data": quote.to_payload()}
