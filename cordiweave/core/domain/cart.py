"""
Cart: Checkout line items

Transient value objects built per pricing request. Not persisted.
"""

from typing import Annotated, Union

from pydantic import BaseModel, Field, StrictInt, StringConstraints

# Products are keyed by integer primary key in the catalog; string slugs/ids
# are accepted for collaborators that use them.
ProductId = Union[int, str]


class CartLineItem(BaseModel):
    """
    One line of a cart: a product and how many units of it.

    quantity is a strict positive int: bools, floats and numeric strings are
    rejected instead of coerced.

    Immutable model (frozen=True).
    """

    product_id: Union[StrictInt, Annotated[str, StringConstraints(min_length=1)]] = Field(
        ..., description="Catalog identifier of the product"
    )
    quantity: StrictInt = Field(..., gt=0, description="Number of units (>= 1)")

    model_config = {"frozen": True}
