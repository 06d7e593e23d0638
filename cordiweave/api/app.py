from typing import Optional

from fastapi import FastAPI

from cordiweave.api import donations, orders
from cordiweave.api.errors import register_exception_handlers
from cordiweave.config import Settings, configure_logging, get_settings
from cordiweave.donations.allocation import DonationAllocationReporter
from cordiweave.donations.receipt import DonationRepository, InMemoryDonationRepository
from cordiweave.pricing.calculator import OrderTotalsCalculator
from cordiweave.pricing.catalog import (
    InMemoryProductCatalog,
    ProductCatalog,
    ShippingCatalog,
    StaticShippingCatalog,
)


def create_app(
    settings: Optional[Settings] = None,
    product_catalog: Optional[ProductCatalog] = None,
    shipping_catalog: Optional[ShippingCatalog] = None,
    donation_repository: Optional[DonationRepository] = None,
) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title=settings.app_name)

    app.state.settings = settings
    app.state.calculator = OrderTotalsCalculator(settings.pricing_config())
    app.state.allocation_reporter = DonationAllocationReporter()
    app.state.product_catalog = product_catalog if product_catalog is not None else InMemoryProductCatalog()
    app.state.shipping_catalog = shipping_catalog if shipping_catalog is not None else StaticShippingCatalog()
    app.state.donation_repository = (
        donation_repository if donation_repository is not None else InMemoryDonationRepository()
    )

    register_exception_handlers(app)

    app.include_router(orders.router, prefix=f"{settings.api_prefix}/orders", tags=["Orders"])
    app.include_router(donations.router, prefix=f"{settings.api_prefix}/donations", tags=["Donations"])

    @app.get("/health")
    def health():
        return {"status": "ok", "env": settings.env}

    return app
