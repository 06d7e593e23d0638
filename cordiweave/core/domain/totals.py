"""
OrderTotals: Checkout pricing results

Immutable models produced by the order totals calculator. Computed fresh on
every pricing request and never mutated afterwards.

Invariants checked on construction:
- every money field carries exactly two fraction digits
- total == round2(subtotal + tax + shipping)

The tax invariant (tax == round2(subtotal * tax_rate)) depends on the
configured rate and is enforced by the calculator, not by the model.
"""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field, model_validator

from cordiweave.core.domain.cart import ProductId
from cordiweave.core.domain.shipping import ShippingOption
from cordiweave.core.math.money import MONEY_FRACTION_DIGITS, format_money, round2


def _has_two_decimals(value: Decimal) -> bool:
    return value.is_finite() and value.as_tuple().exponent == -MONEY_FRACTION_DIGITS


# =============================================================================
# LINE BREAKDOWN
# =============================================================================


class OrderLineBreakdown(BaseModel):
    """
    Display line for one cart item.

    line_total is unit_price * quantity exactly as computed; it is NOT rounded
    and does not take part in rounding of the subtotal.
    """

    product_id: ProductId
    unit_price: Decimal = Field(..., ge=0)
    quantity: int = Field(..., gt=0)
    line_total: Decimal = Field(..., ge=0)

    model_config = {"frozen": True}

    def to_payload(self) -> dict[str, Any]:
        return {
            "product_id": self.product_id,
            "price": format_money(self.unit_price),
            "quantity": self.quantity,
            "total": format_money(self.line_total),
        }


# =============================================================================
# ORDER TOTALS
# =============================================================================


class OrderTotals(BaseModel):
    """
    Subtotal, tax, shipping fee and grand total of a cart.

    Immutable model (frozen=True).
    """

    subtotal: Decimal = Field(..., ge=0, description="round2(sum of price * quantity)")
    tax: Decimal = Field(..., ge=0, description="round2(subtotal * tax_rate)")
    shipping: Decimal = Field(..., ge=0, description="Shipping option fee")
    total: Decimal = Field(..., ge=0, description="round2(subtotal + tax + shipping)")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_invariants(self) -> "OrderTotals":
        """Two-decimal fields and total additivity"""
        for name in ("subtotal", "tax", "shipping", "total"):
            value = getattr(self, name)
            if not _has_two_decimals(value):
                raise ValueError(f"{name} must have exactly 2 fraction digits, got {value}")

        expected = round2(self.subtotal + self.tax + self.shipping)
        if self.total != expected:
            raise ValueError(
                f"total {self.total} != round2(subtotal + tax + shipping) = {expected}"
            )
        return self

    def to_breakdown(self) -> dict[str, str]:
        """Serialized breakdown as returned by the calculate-totals endpoint."""
        return {
            "subtotal": format_money(self.subtotal),
            "tax": format_money(self.tax),
            "shipping": format_money(self.shipping),
            "total": format_money(self.total),
        }


class OrderQuote(BaseModel):
    """
    Totals plus the data that explains them: lines and the selected method.
    """

    items: tuple[OrderLineBreakdown, ...]
    shipping_option: ShippingOption
    totals: OrderTotals

    model_config = {"frozen": True}

    def to_payload(self) -> dict[str, Any]:
        return {
            "items": [line.to_payload() for line in self.items],
            "shipping_method": self.shipping_option.id,
            "breakdown": self.totals.to_breakdown(),
        }
