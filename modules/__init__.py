"""Helper modules for the PrintLoop application."""

__all__ = [
    "order_validator",
    "page_range",
    "pdf_analyzer",
    "pricing",
]
