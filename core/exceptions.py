"""
Custom exceptions for PrintLoop.

Exception Hierarchy:
    PrintLoopError (base)
    ├── PricingWarning            - Non-fatal pricing condition (recorded, never raised out of the engine)
    │   ├── InvalidPageRangeToken - One malformed page-range token (skipped)
    │   ├── UnknownCatalogValue   - Option value missing from the catalog (default applies)
    │   └── MissingPageCount      - Page count unknown or zero (quote is provisional)
    ├── CatalogUnavailableError   - Catalog fetch failed (defaults stay in force)
    └── OrderValidationError      - Order rejected at submission (shown to the user)

Usage:
    PricingWarning subclasses are raised and caught inside the pricing code.
    Their messages end up in PriceQuote.warnings.
    OrderValidationError is the only error a route turns into a rejection.
"""

from typing import Optional, Dict, Any, List


class PrintLoopError(Exception):
    """
    Base exception for all PrintLoop errors.

    Carries a human-readable message and an optional details dict for logs.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# PRICING WARNINGS - caught inside the engine, the quote is still produced
# =============================================================================

class PricingWarning(PrintLoopError):
    """
    A condition that degrades a quote without blocking it.

    The short ``message`` (without details) is what gets attached to the quote.
    """


class InvalidPageRangeToken(PricingWarning):
    """A single page-range token could not be used and was skipped."""

    def __init__(self, token: str, reason: str):
        message = f"Skipped page range token '{token}': {reason}"
        super().__init__(message, {"token": token, "reason": reason})
        self.token = token
        self.reason = reason


class UnknownCatalogValue(PricingWarning):
    """
    A print option value is not present in the active catalog.

    The engine falls back to the default rate or a 1.0 multiplier.
    """

    def __init__(self, field: str, value: Any):
        message = f"Unknown {field} '{value}', using default pricing"
        super().__init__(message, {"field": field, "value": value})
        self.field = field
        self.value = value


class MissingPageCount(PricingWarning):
    """
    The document page count is unknown or not positive.

    The UI should show "pricing pending" instead of a price.
    """

    def __init__(self, page_count: Any = None):
        message = "Page count unavailable, pricing pending"
        super().__init__(message, {"page_count": page_count})
        self.page_count = page_count


# =============================================================================
# RUNTIME ERRORS
# =============================================================================

class CatalogUnavailableError(PrintLoopError):
    """
    The print options catalog could not be fetched from the backend.

    Never reaches a route: the catalog service logs it and keeps the
    previous catalog (or the built-in defaults).
    """

    def __init__(self, url: str, reason: str):
        message = f"Print options catalog unavailable: {reason}"
        details = {
            "url": url,
            "resolution": "Built-in default catalog stays in force until the backend responds",
        }
        super().__init__(message, details)
        self.url = url
        self.reason = reason


class OrderValidationError(PrintLoopError):
    """
    An order failed hard validation at submission.

    Attributes:
        problems: Every problem found, in the order they were detected
    """

    def __init__(self, problems: List[str]):
        if len(problems) == 1:
            message = f"Order cannot be submitted: {problems[0]}"
        else:
            message = f"Order cannot be submitted ({len(problems)} problems): " + "; ".join(problems)
        super().__init__(message)
        self.problems = list(problems)
