"""
Product and shipping lookup collaborators.

The calculator treats lookups as black boxes: a callable that takes a key and
returns the value, or None / raises KeyError when the key does not resolve.
Persistence lives outside this package; the in-memory implementations here
back the HTTP app in local runs and in tests.
"""

from decimal import Decimal
from typing import Callable, Iterable, Mapping, Optional, Protocol, Union

from cordiweave.core.domain.cart import ProductId
from cordiweave.core.domain.shipping import ShippingOption
from cordiweave.core.math.money import to_decimal

PriceLookup = Callable[[ProductId], Optional[Union[Decimal, int, str]]]
ShippingLookup = Callable[[str], Optional[ShippingOption]]


class ProductCatalog(Protocol):
    """Source of current unit prices (Product.price, decimal(10,2))."""

    def price_of(self, product_id: ProductId) -> Optional[Decimal]: ...


class ShippingCatalog(Protocol):
    """Source of the selectable shipping options."""

    def get(self, shipping_method_id: str) -> Optional[ShippingOption]: ...

    def options(self) -> list[ShippingOption]: ...


# =============================================================================
# DEFAULT SHIPPING OPTIONS
# =============================================================================

DEFAULT_SHIPPING_OPTIONS: tuple[ShippingOption, ...] = (
    ShippingOption(
        id="standard",
        name="Standard Shipping",
        description="5-7 business days",
        price=Decimal("150.00"),
        carrier="LBC Express",
    ),
    ShippingOption(
        id="express",
        name="Express Shipping",
        description="2-3 business days",
        price=Decimal("300.00"),
        carrier="LBC Express",
    ),
    ShippingOption(
        id="premium",
        name="Premium Shipping",
        description="1-2 business days",
        price=Decimal("500.00"),
        carrier="LBC Express",
    ),
)


# =============================================================================
# IN-MEMORY IMPLEMENTATIONS
# =============================================================================


class InMemoryProductCatalog:
    """Product prices held in a dict keyed by product id."""

    def __init__(self, prices: Optional[Mapping[ProductId, Union[Decimal, int, str]]] = None):
        self._prices: dict[ProductId, Decimal] = {
            product_id: to_decimal(price) for product_id, price in (prices or {}).items()
        }

    def price_of(self, product_id: ProductId) -> Optional[Decimal]:
        return self._prices.get(product_id)

    def set_price(self, product_id: ProductId, price: Union[Decimal, int, str]) -> None:
        self._prices[product_id] = to_decimal(price)

    def remove(self, product_id: ProductId) -> None:
        self._prices.pop(product_id, None)

    def __call__(self, product_id: ProductId) -> Optional[Decimal]:
        return self.price_of(product_id)


class StaticShippingCatalog:
    """Fixed list of shipping options, in display order."""

    def __init__(self, options: Iterable[ShippingOption] = DEFAULT_SHIPPING_OPTIONS):
        self._options: dict[str, ShippingOption] = {}
        for option in options:
            if option.id in self._options:
                raise ValueError(f"Duplicate shipping option id: {option.id!r}")
            self._options[option.id] = option

    def get(self, shipping_method_id: str) -> Optional[ShippingOption]:
        return self._options.get(shipping_method_id)

    def options(self) -> list[ShippingOption]:
        return list(self._options.values())

    def __call__(self, shipping_method_id: str) -> Optional[ShippingOption]:
        return self.get(shipping_method_id)
