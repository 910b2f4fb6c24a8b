"""
Order data models.

These models represent a user's print order as it flows through the
application: upload -> options -> review -> submit.

Thread Safety:
    - Regular Order class for session storage (mutable)
    - Use Order.freeze() to create an immutable snapshot for submission
"""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Dict, Any, Optional

from models.print_job import DocumentMeta, PrintConfig, PriceQuote


@dataclass
class Order:
    """
    A print order in progress.

    Lifecycle:
        1. Created on /upload with file info and page count
        2. Updated on /options with print options and a fresh quote
        3. Re-priced and frozen on /submit

    The quote stored here is for display only; /submit always re-prices.
    """

    job_name: str = ""
    """User-provided job name."""

    original_filename: str = ""
    """Original upload filename (sanitized)."""

    stored_filename: str = ""
    """Unique filename on disk (with timestamp prefix)."""

    stored_path: str = ""
    """Full path to stored file."""

    uploaded_at: str = ""
    """Upload timestamp (YYYYmmddHHMMSS, UTC)."""

    document: DocumentMeta = field(default_factory=DocumentMeta)
    """Page count and dimensions from PDF analysis."""

    config: Optional[PrintConfig] = None
    """Print options, once chosen."""

    quote: Optional[PriceQuote] = None
    """Latest advisory quote."""

    @property
    def page_count(self) -> Optional[int]:
        return self.document.page_count

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for session storage."""
        data = {
            "job_name": self.job_name,
            "original_filename": self.original_filename,
            "stored_filename": self.stored_filename,
            "stored_path": self.stored_path,
            "uploaded_at": self.uploaded_at,
            "document": self.document.to_dict(),
        }

        if self.config:
            data["config"] = self.config.to_dict()

        if self.quote:
            data["quote"] = self.quote.to_dict()

        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Order":
        """
        Create Order from dictionary (e.g., from session).

        Args:
            data: Dictionary from session['order']

        Returns:
            Order instance
        """
        order = cls(
            job_name=data.get("job_name", ""),
            original_filename=data.get("original_filename", ""),
            stored_filename=data.get("stored_filename", ""),
            stored_path=data.get("stored_path", ""),
            uploaded_at=data.get("uploaded_at", ""),
            document=DocumentMeta.from_dict(data.get("document", {})),
        )

        if "config" in data:
            order.config = PrintConfig.from_dict(data["config"])

        if "quote" in data:
            order.quote = PriceQuote.from_dict(data["quote"])

        return order

    def freeze(self) -> "FrozenOrder":
        """
        Create an immutable snapshot of this order for submission.

        Returns:
            FrozenOrder instance (immutable)
        """
        return FrozenOrder(
            job_name=self.job_name,
            original_filename=self.original_filename,
            stored_filename=self.stored_filename,
            stored_path=self.stored_path,
            uploaded_at=self.uploaded_at,
            page_count=self.document.page_count,
            config=deepcopy(self.config.to_dict()) if self.config else {},
            quote=deepcopy(self.quote.to_dict()) if self.quote else {},
        )


@dataclass(frozen=True)
class FrozenOrder:
    """
    Immutable snapshot of an order at submission.

    Config and quote are stored in their wire (camelCase) form so the
    snapshot can be sent to the backend as-is.
    """

    job_name: str
    original_filename: str
    stored_filename: str
    stored_path: str
    uploaded_at: str
    page_count: Optional[int]
    config: Dict[str, Any] = field(default_factory=dict)
    quote: Dict[str, Any] = field(default_factory=dict)

    @property
    def copies(self) -> int:
        return self.config.get("copies", 0)

    @property
    def color_type(self) -> str:
        return self.config.get("colorType", "")

    @property
    def total_price(self) -> Optional[float]:
        return self.quote.get("totalPrice")
