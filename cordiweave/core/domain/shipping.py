"""
ShippingOption: Shipping rate reference data

Read-only data supplied by the shipping-configuration collaborator. Immutable
for the duration of a calculation.
"""

from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from cordiweave.core.math.money import to_money


class ShippingOption(BaseModel):
    """
    A selectable shipping method with a flat fee.

    price is a two-decimal currency amount; it is passed through to the order
    totals unmodified, so values with more than two fraction digits are
    rejected here rather than rounded later.

    Immutable model (frozen=True).
    """

    id: str = Field(..., min_length=1, description="Method identifier (e.g. 'standard')")
    name: str = Field(..., min_length=1, description="Display name")
    price: Decimal = Field(..., ge=0, description="Flat fee (PHP, 2 decimals)")
    carrier: str = Field(..., min_length=1, description="Carrier name")
    description: str = Field("", description="Delivery window shown at checkout")

    model_config = {"frozen": True}

    @field_validator("price", mode="before")
    @classmethod
    def validate_price(cls, v):
        """Normalize to 2 decimals without rounding"""
        try:
            return to_money(v)
        except TypeError as exc:
            raise ValueError(str(exc)) from exc
