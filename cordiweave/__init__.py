"""
CordiWeave core: checkout pricing and donation transparency for the
CordiWeave weaving marketplace.
"""

__version__ = "0.3.0"
