from fastapi import Request

from cordiweave.donations.allocation import DonationAllocationReporter
from cordiweave.donations.receipt import DonationRepository
from cordiweave.pricing.calculator import OrderTotalsCalculator
from cordiweave.pricing.catalog import ProductCatalog, ShippingCatalog


def get_calculator(request: Request) -> OrderTotalsCalculator:
    return request.app.state.calculator


def get_product_catalog(request: Request) -> ProductCatalog:
    return request.app.state.product_catalog


def get_shipping_catalog(request: Request) -> ShippingCatalog:
    return request.app.state.shipping_catalog


def get_donation_repository(request: Request) -> DonationRepository:
    return request.app.state.donation_repository


def get_allocation_reporter(request: Request) -> DonationAllocationReporter:
    return request.app.state.allocation_reporter
