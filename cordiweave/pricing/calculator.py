"""Order Totals Calculator: checkout pricing

Computes subtotal, VAT, shipping fee and grand total of a cart:

    subtotal = round2(sum(unit_price * quantity))   # lines NOT rounded first
    tax      = round2(subtotal * tax_rate)          # 12% VAT
    shipping = shipping_option.price                # passed through
    total    = round2(subtotal + tax + shipping)

round2 is round-half-up to two places (cordiweave.core.math.money), so a cart
of 3 x 3.335 has subtotal 10.01.

Validation order and failure semantics:
1. Cart shape (non-empty, positive int quantities) -> InvalidCartError
2. Shipping method resolves -> UnknownShippingMethodError
3. Every product has a price -> ProductNotFoundError
4. Totals fit the decimal context precision -> InvalidCartError
Any failure aborts the whole computation; no partial totals are returned.

Lookups are injected and called at most once per distinct key per
computation. The calculator itself does no I/O.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Final, Optional, Union

from pydantic import ValidationError

from cordiweave.core.domain.cart import CartLineItem, ProductId
from cordiweave.core.domain.shipping import ShippingOption
from cordiweave.core.domain.totals import OrderLineBreakdown, OrderQuote, OrderTotals
from cordiweave.core.errors import (
    CordiWeaveError,
    InvalidCartError,
    ProductNotFoundError,
    UnknownShippingMethodError,
)
from cordiweave.core.math.money import round2, to_decimal
from cordiweave.pricing.catalog import PriceLookup, ShippingLookup


CartInput = Sequence[Union[CartLineItem, Mapping[str, Any]]]


# =============================================================================
# CONSTANTS
# =============================================================================

# Philippine VAT
TAX_RATE: Final[Decimal] = Decimal("0.12")


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class PricingConfig:
    """Configuration of the order totals calculator."""

    tax_rate: Decimal = TAX_RATE

    def __post_init__(self):
        if not isinstance(self.tax_rate, Decimal):
            raise ValueError(f"tax_rate must be a Decimal, got {type(self.tax_rate).__name__}")
        if not self.tax_rate.is_finite() or not (Decimal(0) <= self.tax_rate < Decimal(1)):
            raise ValueError(f"tax_rate must be in [0, 1), got {self.tax_rate}")


# =============================================================================
# PURE HELPERS
# =============================================================================


def calculate_subtotal(lines: Sequence[OrderLineBreakdown]) -> Decimal:
    """Aggregate of unrounded line totals, rounded once."""
    return round2(sum((line.line_total for line in lines), Decimal(0)))


def calculate_tax(subtotal: Decimal, tax_rate: Decimal = TAX_RATE) -> Decimal:
    """
    tax = round2(subtotal * tax_rate)

    Examples:
        >>> calculate_tax(Decimal("1000.00"))
        Decimal('120.00')
        >>> calculate_tax(Decimal("99.99"))
        Decimal('12.00')
    """
    return round2(subtotal * tax_rate)


def calculate_total(subtotal: Decimal, tax: Decimal, shipping: Decimal) -> Decimal:
    """total = round2(subtotal + tax + shipping)"""
    return round2(subtotal + tax + shipping)


# =============================================================================
# CALCULATOR
# =============================================================================


class OrderTotalsCalculator:
    """Order totals for a cart and a shipping method.

    Stateless between calls: every call builds its own lookup cache and
    returns a fresh immutable result, so one instance can serve concurrent
    requests.
    """

    def __init__(
        self,
        config: Optional[PricingConfig] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.config = config or PricingConfig()
        self._logger = logger if logger is not None else logging.getLogger(__name__)

    def quote(
        self,
        items: CartInput,
        shipping_method_id: str,
        price_lookup: PriceLookup,
        shipping_lookup: ShippingLookup,
    ) -> OrderQuote:
        """Full quote: line breakdown, selected shipping option and totals.

        Args:
            items: Cart lines (CartLineItem or mappings with product_id/quantity)
            shipping_method_id: Selected shipping method id
            price_lookup: product_id -> unit price (None/KeyError if unknown)
            shipping_lookup: method id -> ShippingOption (None/KeyError if unknown)

        Returns:
            OrderQuote

        Raises:
            InvalidCartError, UnknownShippingMethodError, ProductNotFoundError
            ValueError: If a collaborator returns an invalid price or option
        """
        try:
            cart = self._normalize_items(items)
            shipping_option = self._resolve_shipping(shipping_method_id, shipping_lookup)
            lines = self._price_lines(cart, price_lookup)
            totals = self._totals(lines, shipping_option)
        except CordiWeaveError as exc:
            self._logger.info("Pricing rejected (%s): %s", exc.error_code, exc.message)
            raise
        except (TypeError, ValueError) as exc:
            self._logger.error("Pricing failed on collaborator data: %s", exc)
            raise

        self._logger.debug(
            "Priced cart: %d lines, shipping=%s, subtotal=%s tax=%s shipping=%s total=%s",
            len(lines), shipping_option.id,
            totals.subtotal, totals.tax, totals.shipping, totals.total,
        )
        return OrderQuote(items=tuple(lines), shipping_option=shipping_option, totals=totals)

    def compute_totals(
        self,
        items: CartInput,
        shipping_method_id: str,
        price_lookup: PriceLookup,
        shipping_lookup: ShippingLookup,
    ) -> OrderTotals:
        """Totals only; see quote()."""
        return self.quote(items, shipping_method_id, price_lookup, shipping_lookup).totals

    # -------------------------------------------------------------------------
    # Steps
    # -------------------------------------------------------------------------

    @staticmethod
    def _normalize_items(items: CartInput) -> list[CartLineItem]:
        if items is None or isinstance(items, (str, bytes, Mapping)) or not isinstance(items, Sequence):
            raise InvalidCartError("Cart items must be a list of line items")
        if len(items) == 0:
            raise InvalidCartError("Cart must contain at least one item")

        cart = []
        for index, item in enumerate(items):
            if isinstance(item, CartLineItem):
                cart.append(item)
                continue
            try:
                cart.append(CartLineItem.model_validate(item))
            except ValidationError as exc:
                first = exc.errors()[0]
                field = ".".join(str(p) for p in first["loc"]) or "item"
                raise InvalidCartError(
                    f"Invalid cart item at position {index}: {field}: {first['msg']}"
                ) from exc
        return cart

    @staticmethod
    def _resolve_shipping(shipping_method_id: str, shipping_lookup: ShippingLookup) -> ShippingOption:
        if not isinstance(shipping_method_id, str) or not shipping_method_id:
            raise UnknownShippingMethodError(str(shipping_method_id))

        try:
            option = shipping_lookup(shipping_method_id)
        except KeyError:
            option = None

        if option is None:
            raise UnknownShippingMethodError(shipping_method_id)
        if not isinstance(option, ShippingOption):
            option = ShippingOption.model_validate(option)
        return option

    def _totals(self, lines: list[OrderLineBreakdown], shipping_option: ShippingOption) -> OrderTotals:
        try:
            subtotal = calculate_subtotal(lines)
            tax = calculate_tax(subtotal, self.config.tax_rate)
            shipping = shipping_option.price
            total = calculate_total(subtotal, tax, shipping)
            return OrderTotals(subtotal=subtotal, tax=tax, shipping=shipping, total=total)
        except ValueError as exc:
            # Sums beyond the decimal context precision cannot be rounded exactly
            raise InvalidCartError(f"Cart total is out of range: {exc}") from exc

    @staticmethod
    def _price_lines(cart: list[CartLineItem], price_lookup: PriceLookup) -> list[OrderLineBreakdown]:
        # One lookup per distinct product id
        prices: dict[ProductId, Decimal] = {}
        lines = []

        for item in cart:
            if item.product_id not in prices:
                try:
                    raw = price_lookup(item.product_id)
                except KeyError:
                    raw = None
                if raw is None:
                    raise ProductNotFoundError(item.product_id)

                try:
                    price = to_decimal(raw)
                except (TypeError, ValueError) as exc:
                    raise ValueError(
                        f"Invalid unit price {raw!r} for product {item.product_id!r}"
                    ) from exc
                if price < 0:
                    raise ValueError(f"Negative unit price {price} for product {item.product_id!r}")
                prices[item.product_id] = price

            unit_price = prices[item.product_id]
            lines.append(
                OrderLineBreakdown(
                    product_id=item.product_id,
                    unit_price=unit_price,
                    quantity=item.quantity,
                    line_total=unit_price * item.quantity,
                )
            )
        return lines


# =============================================================================
# CONVENIENCE
# =============================================================================

_DEFAULT_CALCULATOR = OrderTotalsCalculator()


def compute_totals(
    items: CartInput,
    shipping_method_id: str,
    price_lookup: PriceLookup,
    shipping_lookup: ShippingLookup,
) -> OrderTotals:
    """Order totals with the default 12% VAT configuration."""
    return _DEFAULT_CALCULATOR.compute_totals(items, shipping_method_id, price_lookup, shipping_lookup)


def quote_order(
    items: CartInput,
    shipping_method_id: str,
    price_lookup: PriceLookup,
    shipping_lookup: ShippingLookup,
) -> OrderQuote:
    """Full quote with the default 12% VAT configuration."""
    return _DEFAULT_CALCULATOR.quote(items, shipping_method_id, price_lookup, shipping_lookup)
