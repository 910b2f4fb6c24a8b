"""
Print job models: what the user chose, what the document is, what it costs.

PrintConfig keeps enumerated options as the raw submitted strings. Values
outside the catalog are tolerated here and degrade inside the pricing engine;
hard rejection happens only at submission.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Any, FrozenSet, Optional, Tuple

from models.print_options import ColorType, Duplex, Orientation, PaperSize

ALL_PAGES = "all"
CUSTOM_PAGES = "custom"

MAX_PAGE_COUNT = 10_000
"""Largest page count accepted as a real document; anything above is unknown."""

_TRUTHY = {"1", "true", "on", "yes", "y"}


def _as_int(value: Any, default: Optional[int]) -> Optional[int]:
    if value is None or value == "" or isinstance(value, bool):
        return default
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        # OverflowError: "1e400" and JSON 1e400 both parse to infinity
        return default


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in _TRUTHY


def is_page_count(value: Any) -> bool:
    """True for a whole number of pages in 1..MAX_PAGE_COUNT."""
    return isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= MAX_PAGE_COUNT


def _pick(data: Dict[str, Any], camel: str, snake: str, default: Any = None) -> Any:
    """Read a key in either camelCase (JSON) or snake_case (session/form) form."""
    if camel in data:
        return data[camel]
    return data.get(snake, default)


@dataclass
class PrintConfig:
    """
    User's print options for one job.

    Captured on the /options page or posted to /api/price.
    """

    paper_size: str = PaperSize.A4.value
    orientation: str = Orientation.PORTRAIT.value
    copies: int = 1
    page_range: str = ALL_PAGES
    """Either "all" or a custom range such as "1-5, 8, 10-12"."""

    staple: bool = False
    color_type: str = ColorType.BLACK_WHITE.value
    resolution: int = 300
    """DPI. Display only unless the catalog prices resolutions."""

    duplex: str = Duplex.SINGLE_SIDED.value

    @property
    def prints_all_pages(self) -> bool:
        return not self.page_range or self.page_range.strip().lower() == ALL_PAGES

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the backend's camelCase shape."""
        return {
            "paperSize": self.paper_size,
            "orientation": self.orientation,
            "copies": self.copies,
            "pageRange": self.page_range,
            "staple": self.staple,
            "colorType": self.color_type,
            "resolution": self.resolution,
            "duplex": self.duplex,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PrintConfig":
        """
        Create from JSON, a form or the session.

        The kiosk form sends ``pageRange=custom`` with the actual range in
        ``customPageRange``; that pair is folded into ``page_range`` here.
        """
        defaults = cls()

        page_range = _pick(data, "pageRange", "page_range", ALL_PAGES)
        page_range = str(page_range).strip() if page_range is not None else ALL_PAGES
        if page_range.lower() == CUSTOM_PAGES:
            page_range = str(_pick(data, "customPageRange", "custom_page_range", "") or "").strip()
        if not page_range:
            page_range = ALL_PAGES

        return cls(
            paper_size=str(_pick(data, "paperSize", "paper_size", defaults.paper_size)),
            orientation=str(data.get("orientation") or defaults.orientation),
            copies=_as_int(data.get("copies"), defaults.copies),
            page_range=page_range,
            staple=_as_bool(data.get("staple")),
            color_type=str(_pick(data, "colorType", "color_type", defaults.color_type)),
            resolution=_as_int(data.get("resolution"), defaults.resolution),
            duplex=str(data.get("duplex") or defaults.duplex),
        )


@dataclass
class DocumentMeta:
    """
    Metadata derived from the uploaded file.

    ``page_count`` is untrusted: None, anything below 1 or above
    MAX_PAGE_COUNT means unknown.
    """

    page_count: Optional[int] = None
    file_name: str = ""
    size_kb: float = 0.0
    width_in: float = 0.0
    height_in: float = 0.0
    error: str = ""
    """Analysis failure message, empty when the file was read cleanly."""

    @property
    def has_page_count(self) -> bool:
        return is_page_count(self.page_count)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pageCount": self.page_count,
            "fileName": self.file_name,
            "sizeKb": self.size_kb,
            "widthIn": self.width_in,
            "heightIn": self.height_in,
            "error": self.error,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DocumentMeta":
        return cls(
            page_count=_as_int(_pick(data, "pageCount", "page_count"), None),
            file_name=str(_pick(data, "fileName", "file_name", "") or ""),
            size_kb=float(_pick(data, "sizeKb", "size_kb", 0.0) or 0.0),
            width_in=float(_pick(data, "widthIn", "width_in", 0.0) or 0.0),
            height_in=float(_pick(data, "heightIn", "height_in", 0.0) or 0.0),
            error=str(data.get("error") or ""),
        )


@dataclass(frozen=True)
class PageSelection:
    """
    Result of parsing a page range against a document.

    The selection is held as merged intervals, so its size does not depend
    on the document's page count.
    """

    count: int
    ranges: Tuple[Tuple[int, int], ...] = ()
    """Sorted, non-overlapping inclusive (first, last) page intervals."""

    fell_back: bool = False
    """True when nothing in the range was usable and every page was selected."""

    skipped_tokens: Tuple[str, ...] = ()

    @property
    def pages(self) -> FrozenSet[int]:
        """Every selected page number (materialized on each call)."""
        return frozenset(page for first, last in self.ranges for page in range(first, last + 1))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "count": self.count,
            "ranges": [list(r) for r in self.ranges],
            "pages": sorted(self.pages),
            "fellBack": self.fell_back,
            "skippedTokens": list(self.skipped_tokens),
        }


@dataclass(frozen=True)
class PriceQuote:
    """
    Advisory price for one job.

    ``total_price`` is None while the quote is provisional (page count
    unknown), so the UI can show "pricing pending" instead of a free job.
    The backend recomputes the price at checkout and is the authority.
    """

    price_per_page: float
    total_pages: int
    staple_fee: float
    total_price: Optional[float]
    provisional: bool = False
    warnings: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_final(self) -> bool:
        return not self.provisional and self.total_price is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pricePerPage": self.price_per_page,
            "totalPages": self.total_pages,
            "stapleFee": self.staple_fee,
            "totalPrice": self.total_price,
            "provisional": self.provisional,
            "warnings": list(self.warnings),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PriceQuote":
        return cls(
            price_per_page=float(data.get("pricePerPage", 0.0)),
            total_pages=int(data.get("totalPages", 0)),
            staple_fee=float(data.get("stapleFee", 0.0)),
            total_price=data.get("totalPrice"),
            provisional=bool(data.get("provisional", False)),
            warnings=tuple(data.get("warnings", ())),
        )
