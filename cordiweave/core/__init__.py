"""
Core domain models, currency primitives, contracts and errors.

This package holds the building blocks that are independent of external
systems (databases, payment providers, HTTP frameworks).
"""
