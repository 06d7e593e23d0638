"""
Error taxonomy for pricing and donation computations.

Every error is a locally recoverable validation failure. None is retried and
none leaves a partial result behind: either a complete result is returned or
one of these is raised.
"""


class CordiWeaveError(Exception):
    """Base class for domain errors surfaced to the caller."""

    error_code: str = "cordiweave_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidCartError(CordiWeaveError):
    """Cart is empty or a line item has a non-positive / non-integer quantity."""

    error_code = "invalid_cart"


class UnknownShippingMethodError(CordiWeaveError):
    """Shipping method id does not resolve to a shipping option."""

    error_code = "unknown_shipping_method"

    def __init__(self, shipping_method_id: str):
        super().__init__(f"Unknown shipping method: {shipping_method_id!r}")
        self.shipping_method_id = shipping_method_id


class ProductNotFoundError(CordiWeaveError):
    """A referenced product has no current unit price (deleted / out of catalog)."""

    error_code = "product_not_found"

    def __init__(self, product_id):
        super().__init__(f"Product not found: {product_id!r}")
        self.product_id = product_id


class InvalidAmountError(CordiWeaveError):
    """Donation amount is non-positive, malformed or has more than 2 fraction digits."""

    error_code = "invalid_amount"


class DonationNotCompletedError(CordiWeaveError):
    """Allocation requested for a donation whose payment is not completed."""

    error_code = "donation_not_completed"

    def __init__(self, donation_id, status: str):
        super().__init__(
            f"Donation {donation_id!r} has status {status!r}; "
            f"allocation is only reported for completed donations"
        )
        self.donation_id = donation_id
        self.status = status
