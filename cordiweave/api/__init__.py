"""HTTP surface of the pricing and donation core (FastAPI)."""

from .app import create_app

__all__ = ["create_app"]
