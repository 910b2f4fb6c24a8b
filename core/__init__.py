"""
Core module for PrintLoop.

Contains fundamental infrastructure components:
- exceptions: Custom exception hierarchy (pricing warnings, catalog and
  submission errors)
"""

from .exceptions import (
    PrintLoopError,
    PricingWarning,
    InvalidPageRangeToken,
    UnknownCatalogValue,
    MissingPageCount,
    CatalogUnavailableError,
    OrderValidationError,
)

__all__ = [
    "PrintLoopError",
    "PricingWarning",
    "InvalidPageRangeToken",
    "UnknownCatalogValue",
    "MissingPageCount",
    "CatalogUnavailableError",
    "OrderValidationError",
]
