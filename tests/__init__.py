"""
Test suite for cordiweave-core

Contains:
- tests/unit/          : Unit tests for currency math, domain models, pricing and donations
- tests/integration/   : HTTP tests of the FastAPI surface
"""
