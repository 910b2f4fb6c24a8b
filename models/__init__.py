"""
Data models for PrintLoop.

This module contains dataclasses for:
- PrintOptionsCatalog: Pricing parameters (rates, multipliers, fees)
- PrintConfig / DocumentMeta: Inputs to a quote
- PriceQuote / PageSelection: Outputs of the pricing code
- Order / FrozenOrder: A user's order in the session and at submission

Catalogs, quotes and frozen orders are immutable and safe to share
between threads.
"""

from .print_options import (
    PaperSize,
    Orientation,
    ColorType,
    Duplex,
    PrintOptionsCatalog,
    default_catalog,
    resolve_catalog,
)
from .print_job import PrintConfig, DocumentMeta, PageSelection, PriceQuote
from .order import Order, FrozenOrder

__all__ = [
    # Catalog models
    "PaperSize",
    "Orientation",
    "ColorType",
    "Duplex",
    "PrintOptionsCatalog",
    "default_catalog",
    "resolve_catalog",
    # Job models
    "PrintConfig",
    "DocumentMeta",
    "PageSelection",
    "PriceQuote",
    # Order models
    "Order",
    "FrozenOrder",
]
