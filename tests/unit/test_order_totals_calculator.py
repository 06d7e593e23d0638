"""
Tests for the Order Totals Calculator

Checked properties:
1. subtotal = round2(sum(price * quantity)), lines not rounded first
2. tax = round2(subtotal * 0.12)
3. shipping = selected option price, passed through
4. total = round2(subtotal + tax + shipping)
5. Error order: cart shape, then shipping method, then product prices
6. At most one lookup per distinct key per computation
7. Determinism: identical inputs give identical results
"""

import logging
from collections import Counter
from decimal import Decimal

import pytest

from cordiweave.core.domain import CartLineItem, OrderQuote, OrderTotals, ShippingOption
from cordiweave.core.errors import (
    InvalidCartError,
    ProductNotFoundError,
    UnknownShippingMethodError,
)
from cordiweave.pricing import (
    TAX_RATE,
    InMemoryProductCatalog,
    OrderTotalsCalculator,
    PricingConfig,
    StaticShippingCatalog,
    calculate_tax,
    compute_totals,
    quote_order,
)


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def products():
    return InMemoryProductCatalog(
        {
            1: "1500.00",
            2: "3.335",
            3: "99.99",
            4: "0.10",
            5: "1000.00",
        }
    )


@pytest.fixture
def shipping():
    return StaticShippingCatalog()


@pytest.fixture
def calculator():
    return OrderTotalsCalculator()


class CountingLookup:
    """Wraps a lookup and counts calls per key."""

    def __init__(self, lookup):
        self._lookup = lookup
        self.calls = Counter()

    def __call__(self, key):
        self.calls[key] += 1
        return self._lookup(key)


# =============================================================================
# TESTS: Totals
# =============================================================================


class TestOrderTotals:
    def test_simple_order(self, calculator, products, shipping):
        totals = calculator.compute_totals(
            [{"product_id": 1, "quantity": 2}], "standard", products, shipping
        )
        assert totals == OrderTotals(
            subtotal=Decimal("3000.00"),
            tax=Decimal("360.00"),
            shipping=Decimal("150.00"),
            total=Decimal("3510.00"),
        )

    def test_half_up_subtotal(self, calculator, products, shipping):
        # 3 * 3.335 = 10.005 -> 10.01
        totals = calculator.compute_totals(
            [{"product_id": 2, "quantity": 3}], "standard", products, shipping
        )
        assert totals.subtotal == Decimal("10.01")
        assert totals.tax == Decimal("1.20")
        assert totals.total == Decimal("161.21")

    def test_lines_not_rounded_before_summing(self, calculator, products, shipping):
        # Rounding each 3.335 line first would give 10.02
        items = [{"product_id": 2, "quantity": 1}] * 3
        totals = calculator.compute_totals(items, "standard", products, shipping)
        assert totals.subtotal == Decimal("10.01")

    def test_tax_rounding(self, calculator, products, shipping):
        totals = calculator.compute_totals(
            [{"product_id": 3, "quantity": 1}], "express", products, shipping
        )
        assert totals.subtotal == Decimal("99.99")
        assert totals.tax == Decimal("12.00")
        assert totals.shipping == Decimal("300.00")
        assert totals.total == Decimal("411.99")

    def test_tax_of_round_amount(self, calculator, products, shipping):
        totals = calculator.compute_totals(
            [{"product_id": 5, "quantity": 1}], "premium", products, shipping
        )
        assert totals.tax == Decimal("120.00")
        assert totals.total == Decimal("1620.00")

    def test_mixed_cart(self, calculator, products, shipping):
        items = [
            {"product_id": 1, "quantity": 1},
            {"product_id": 4, "quantity": 7},
            {"product_id": 3, "quantity": 2},
        ]
        totals = calculator.compute_totals(items, "standard", products, shipping)
        # 1500 + 0.70 + 199.98
        assert totals.subtotal == Decimal("1700.68")
        assert totals.tax == Decimal("204.08")
        assert totals.total == Decimal("2054.76")

    def test_invariants_over_quantities(self, calculator, products, shipping):
        for quantity in range(1, 31):
            for product_id in (2, 3, 4):
                totals = calculator.compute_totals(
                    [{"product_id": product_id, "quantity": quantity}],
                    "standard",
                    products,
                    shipping,
                )
                assert totals.tax == calculate_tax(totals.subtotal)
                assert totals.total == (totals.subtotal + totals.tax + totals.shipping)
                for field in ("subtotal", "tax", "shipping", "total"):
                    assert getattr(totals, field).as_tuple().exponent == -2

    def test_shipping_passed_through(self, calculator, products):
        custom = StaticShippingCatalog(
            [ShippingOption(id="pickup", name="Store Pickup", price="0", carrier="CordiWeave")]
        )
        totals = calculator.compute_totals(
            [{"product_id": 1, "quantity": 1}], "pickup", products, custom
        )
        assert totals.shipping == Decimal("0.00")
        assert totals.total == Decimal("1680.00")

    def test_cart_line_items_accepted(self, calculator, products, shipping):
        totals = calculator.compute_totals(
            [CartLineItem(product_id=1, quantity=2)], "standard", products, shipping
        )
        assert totals.total == Decimal("3510.00")

    def test_float_price_from_lookup(self, calculator, shipping):
        totals = calculator.compute_totals(
            [{"product_id": 1, "quantity": 2}], "standard", lambda _: 1500.0, shipping
        )
        assert totals.subtotal == Decimal("3000.00")

    def test_mapping_shipping_option_from_lookup(self, calculator, products):
        def lookup(method_id):
            return {"id": method_id, "name": "Standard", "price": "150.00", "carrier": "LBC Express"}

        totals = calculator.compute_totals(
            [{"product_id": 1, "quantity": 2}], "standard", products, lookup
        )
        assert totals.shipping == Decimal("150.00")

    def test_negative_price_rejected(self, calculator, shipping):
        with pytest.raises(ValueError):
            calculator.compute_totals(
                [{"product_id": 1, "quantity": 1}], "standard", lambda _: "-1.00", shipping
            )


# =============================================================================
# TESTS: Quote
# =============================================================================


class TestQuote:
    def test_quote_contents(self, calculator, products, shipping):
        quote = calculator.quote(
            [{"product_id": 2, "quantity": 3}, {"product_id": 1, "quantity": 1}],
            "express",
            products,
            shipping,
        )
        assert isinstance(quote, OrderQuote)
        assert quote.shipping_option.id == "express"
        assert [line.product_id for line in quote.items] == [2, 1]
        assert quote.items[0].line_total == Decimal("10.005")
        assert quote.items[1].unit_price == Decimal("1500.00")

    def test_payload(self, calculator, products, shipping):
        quote = calculator.quote(
            [{"product_id": 1, "quantity": 2}], "standard", products, shipping
        )
        assert quote.to_payload() == {
            "items": [
                {"product_id": 1, "price": "1500.00", "quantity": 2, "total": "3000.00"}
            ],
            "shipping_method": "standard",
            "breakdown": {
                "subtotal": "3000.00",
                "tax": "360.00",
                "shipping": "150.00",
                "total": "3510.00",
            },
        }

    def test_module_level_helpers(self, products, shipping):
        items = [{"product_id": 1, "quantity": 2}]
        assert compute_totals(items, "standard", products, shipping).total == Decimal("3510.00")
        assert quote_order(items, "standard", products, shipping).totals.total == Decimal("3510.00")


# =============================================================================
# TESTS: Errors
# =============================================================================


class TestInvalidCart:
    def test_empty_cart(self, calculator, products, shipping):
        with pytest.raises(InvalidCartError):
            calculator.compute_totals([], "standard", products, shipping)

    @pytest.mark.parametrize("items", [None, {"product_id": 1, "quantity": 1}, "items", 42])
    def test_not_a_list(self, calculator, products, shipping, items):
        with pytest.raises(InvalidCartError):
            calculator.compute_totals(items, "standard", products, shipping)

    @pytest.mark.parametrize("quantity", [0, -1, 1.5, "2", True, None])
    def test_bad_quantity(self, calculator, products, shipping, quantity):
        with pytest.raises(InvalidCartError) as exc_info:
            calculator.compute_totals(
                [{"product_id": 1, "quantity": quantity}], "standard", products, shipping
            )
        assert "position 0" in exc_info.value.message
        assert exc_info.value.error_code == "invalid_cart"

    def test_missing_product_id(self, calculator, products, shipping):
        with pytest.raises(InvalidCartError):
            calculator.compute_totals([{"quantity": 1}], "standard", products, shipping)

    def test_bad_line_reports_position(self, calculator, products, shipping):
        items = [{"product_id": 1, "quantity": 1}, {"product_id": 2, "quantity": 0}]
        with pytest.raises(InvalidCartError) as exc_info:
            calculator.compute_totals(items, "standard", products, shipping)
        assert "position 1" in exc_info.value.message


class TestUnknownShippingMethod:
    def test_unknown_method(self, calculator, products, shipping):
        with pytest.raises(UnknownShippingMethodError) as exc_info:
            calculator.compute_totals(
                [{"product_id": 1, "quantity": 1}], "teleport", products, shipping
            )
        assert exc_info.value.shipping_method_id == "teleport"
        assert exc_info.value.error_code == "unknown_shipping_method"

    def test_lookup_raising_key_error(self, calculator, products):
        with pytest.raises(UnknownShippingMethodError):
            calculator.compute_totals(
                [{"product_id": 1, "quantity": 1}], "standard", products, {}.__getitem__
            )

    @pytest.mark.parametrize("method_id", ["", None, 1])
    def test_invalid_method_id(self, calculator, products, shipping, method_id):
        with pytest.raises(UnknownShippingMethodError):
            calculator.compute_totals(
                [{"product_id": 1, "quantity": 1}], method_id, products, shipping
            )


class TestProductNotFound:
    def test_unknown_product(self, calculator, products, shipping):
        with pytest.raises(ProductNotFoundError) as exc_info:
            calculator.compute_totals(
                [{"product_id": 1, "quantity": 1}, {"product_id": 999, "quantity": 1}],
                "standard",
                products,
                shipping,
            )
        assert exc_info.value.product_id == 999
        assert exc_info.value.error_code == "product_not_found"

    def test_lookup_raising_key_error(self, calculator, shipping):
        prices = {1: Decimal("1500.00")}
        with pytest.raises(ProductNotFoundError):
            calculator.compute_totals(
                [{"product_id": 2, "quantity": 1}], "standard", prices.__getitem__, shipping
            )

    def test_removed_product(self, calculator, products, shipping):
        products.remove(1)
        with pytest.raises(ProductNotFoundError):
            calculator.compute_totals(
                [{"product_id": 1, "quantity": 1}], "standard", products, shipping
            )


class TestOutOfRangeTotals:
    def test_huge_subtotal(self, calculator, shipping):
        # 1e20 * 1e9 cannot carry two fraction digits in a 28-digit context
        with pytest.raises(InvalidCartError) as exc_info:
            calculator.compute_totals(
                [{"product_id": 1, "quantity": 10**9}],
                "standard",
                lambda _: Decimal("1e20"),
                shipping,
            )
        assert "out of range" in exc_info.value.message

    def test_huge_quantity(self, calculator, products, shipping):
        with pytest.raises(InvalidCartError):
            calculator.compute_totals(
                [{"product_id": 1, "quantity": 10**30}], "standard", products, shipping
            )

    def test_large_but_representable(self, calculator, products, shipping):
        totals = calculator.compute_totals(
            [{"product_id": 5, "quantity": 10**12}], "standard", products, shipping
        )
        assert totals.subtotal == Decimal("1000000000000000.00")
        assert totals.tax == Decimal("120000000000000.00")


class TestCollaboratorFaults:
    @pytest.mark.parametrize("price", ["abc", object(), "NaN"])
    def test_malformed_price_names_product(self, calculator, shipping, price):
        with pytest.raises(ValueError) as exc_info:
            calculator.compute_totals(
                [{"product_id": 7, "quantity": 1}], "standard", lambda _: price, shipping
            )
        assert "product 7" in str(exc_info.value)

    def test_fault_logged_as_error(self, shipping, caplog):
        calculator = OrderTotalsCalculator(logger=logging.getLogger("tests.pricing.faults"))
        with caplog.at_level(logging.ERROR, logger="tests.pricing.faults"):
            with pytest.raises(ValueError):
                calculator.compute_totals(
                    [{"product_id": 7, "quantity": 1}], "standard", lambda _: "abc", shipping
                )
        assert [r.levelno for r in caplog.records] == [logging.ERROR]
        assert "product 7" in caplog.text


class TestValidationOrder:
    def test_cart_checked_before_shipping(self, calculator, products, shipping):
        with pytest.raises(InvalidCartError):
            calculator.compute_totals([], "teleport", products, shipping)

    def test_shipping_checked_before_products(self, calculator, products, shipping):
        with pytest.raises(UnknownShippingMethodError):
            calculator.compute_totals(
                [{"product_id": 999, "quantity": 1}], "teleport", products, shipping
            )

    def test_no_price_lookup_for_invalid_shipping(self, calculator, products, shipping):
        price_lookup = CountingLookup(products)
        with pytest.raises(UnknownShippingMethodError):
            calculator.compute_totals(
                [{"product_id": 1, "quantity": 1}], "teleport", price_lookup, shipping
            )
        assert sum(price_lookup.calls.values()) == 0


# =============================================================================
# TESTS: Lookups, determinism, configuration
# =============================================================================


class TestLookups:
    def test_one_lookup_per_distinct_key(self, calculator, products, shipping):
        price_lookup = CountingLookup(products)
        shipping_lookup = CountingLookup(shipping)
        items = [
            {"product_id": 1, "quantity": 1},
            {"product_id": 2, "quantity": 2},
            {"product_id": 1, "quantity": 3},
        ]
        calculator.compute_totals(items, "standard", price_lookup, shipping_lookup)

        assert price_lookup.calls == Counter({1: 1, 2: 1})
        assert shipping_lookup.calls == Counter({"standard": 1})

    def test_cache_not_shared_between_calls(self, calculator, products, shipping):
        items = [{"product_id": 1, "quantity": 1}]
        first = calculator.compute_totals(items, "standard", products, shipping)
        products.set_price(1, "2000.00")
        second = calculator.compute_totals(items, "standard", products, shipping)

        assert first.subtotal == Decimal("1500.00")
        assert second.subtotal == Decimal("2000.00")


class TestDeterminism:
    def test_identical_inputs_identical_results(self, calculator, products, shipping):
        items = [{"product_id": 2, "quantity": 3}, {"product_id": 3, "quantity": 2}]
        first = calculator.quote(items, "premium", products, shipping)
        second = calculator.quote(items, "premium", products, shipping)
        assert first == second
        assert first.to_payload() == second.to_payload()


class TestPricingConfig:
    def test_default_rate(self):
        assert PricingConfig().tax_rate == TAX_RATE == Decimal("0.12")

    def test_custom_rate(self, products, shipping):
        calculator = OrderTotalsCalculator(PricingConfig(tax_rate=Decimal("0")))
        totals = calculator.compute_totals(
            [{"product_id": 1, "quantity": 2}], "standard", products, shipping
        )
        assert totals.tax == Decimal("0.00")
        assert totals.total == Decimal("3150.00")

    @pytest.mark.parametrize("rate", [Decimal("1"), Decimal("1.5"), Decimal("-0.01"), Decimal("NaN")])
    def test_out_of_range_rate_rejected(self, rate):
        with pytest.raises(ValueError):
            PricingConfig(tax_rate=rate)

    def test_float_rate_rejected(self):
        with pytest.raises(ValueError):
            PricingConfig(tax_rate=0.12)


class TestLogging:
    def test_rejection_logged(self, products, shipping, caplog):
        logger = logging.getLogger("tests.pricing")
        calculator = OrderTotalsCalculator(logger=logger)

        with caplog.at_level(logging.INFO, logger="tests.pricing"):
            with pytest.raises(UnknownShippingMethodError):
                calculator.compute_totals(
                    [{"product_id": 1, "quantity": 1}], "teleport", products, shipping
                )

        assert "unknown_shipping_method" in caplog.text
