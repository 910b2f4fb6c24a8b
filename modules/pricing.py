"""Print job pricing engine."""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Callable, List, Optional

from core.exceptions import MissingPageCount, UnknownCatalogValue
from logging_config import get_logger
from models.print_job import PrintConfig, PriceQuote, is_page_count
from models.print_options import (
    DEFAULT_COLOR_RATES,
    DEFAULT_MULTIPLIER,
    DEFAULT_STAPLE_FEE,
    FALLBACK_COLOR_TYPE,
    STAPLING_SERVICE,
    ColorType,
    PrintOptionsCatalog,
    coerce_option,
    resolve_catalog,
)
from modules.page_range import parse_page_range

_CENT = Decimal("0.01")


def round2(value: float) -> float:
    """Round half-up to the nearest 0.01."""
    return float(Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP))


class PricingEngine:
    """
    Deterministic quote for one print configuration and page count.

    rate  = color rate × paper multiplier × duplex multiplier [× resolution multiplier]
    total = round2(rate × billed pages × copies + staple fee)

    Never raises for bad input. Anything it had to work around is listed in
    ``PriceQuote.warnings``.
    """

    def __init__(self) -> None:
        self.logger = get_logger(__name__)

    def compute_price(
        self,
        config: PrintConfig,
        page_count: Optional[int],
        catalog: Optional[PrintOptionsCatalog] = None,
    ) -> PriceQuote:
        catalog = catalog if catalog is not None else resolve_catalog(None)
        warnings: List[str] = []

        rate = self._base_rate(config.color_type, catalog, warnings)
        rate *= self._multiplier(catalog.paper_size_option, config.paper_size, warnings)
        # Duplex changes the rate only; billed pages never depend on it
        rate *= self._multiplier(catalog.duplex_option, config.duplex, warnings)
        rate *= self._resolution_multiplier(config.resolution, catalog)

        copies = self._clamp_copies(config.copies, catalog.max_copies, warnings)
        staple_fee = self._staple_fee(catalog) if config.staple else 0.0

        if not is_page_count(page_count):
            warnings.append(MissingPageCount(page_count).message)
            self.logger.debug(f"Provisional quote: page_count={page_count!r}")
            return PriceQuote(
                price_per_page=rate,
                total_pages=0,
                staple_fee=staple_fee,
                total_price=None,
                provisional=True,
                warnings=tuple(warnings),
            )

        billed_pages = self._billed_pages(config, page_count, warnings)
        total = round2(rate * billed_pages * copies + staple_fee)

        self.logger.debug(
            f"Quote: rate={rate} pages={billed_pages}/{page_count} copies={copies} "
            f"staple_fee={staple_fee} total={total}"
        )

        return PriceQuote(
            price_per_page=rate,
            total_pages=billed_pages,
            staple_fee=staple_fee,
            total_price=total,
            provisional=False,
            warnings=tuple(warnings),
        )

    @staticmethod
    def _base_rate(color_type: Any, catalog: PrintOptionsCatalog, warnings: List[str]) -> float:
        try:
            cost = catalog.color_type_option(color_type).cost_per_page
            if cost > 0:
                return cost
        except UnknownCatalogValue as e:
            warnings.append(e.message)

        known = coerce_option(ColorType, color_type)
        return DEFAULT_COLOR_RATES[known if known is not None else FALLBACK_COLOR_TYPE]

    @staticmethod
    def _multiplier(lookup: Callable[[Any], Any], value: Any, warnings: List[str]) -> float:
        try:
            multiplier = lookup(value).cost_multiplier
        except UnknownCatalogValue as e:
            warnings.append(e.message)
            return DEFAULT_MULTIPLIER
        # zero or negative multipliers are treated as missing data
        return multiplier if multiplier > 0 else DEFAULT_MULTIPLIER

    @staticmethod
    def _resolution_multiplier(resolution: Any, catalog: PrintOptionsCatalog) -> float:
        option = catalog.resolution_option(resolution)
        if option is None or option.cost_multiplier is None or option.cost_multiplier <= 0:
            return DEFAULT_MULTIPLIER
        return option.cost_multiplier

    @staticmethod
    def _staple_fee(catalog: PrintOptionsCatalog) -> float:
        service = catalog.find_service(STAPLING_SERVICE)
        if service is None or service.cost <= 0:
            return DEFAULT_STAPLE_FEE
        return service.cost

    @staticmethod
    def _clamp_copies(copies: Any, max_copies: int, warnings: List[str]) -> int:
        try:
            requested = int(copies)
        except (TypeError, ValueError, OverflowError):
            warnings.append(f"Invalid copies '{copies}', using 1")
            return 1

        clamped = min(max(requested, 1), max_copies)
        if clamped != requested:
            warnings.append(f"Copies adjusted from {requested} to {clamped}")
        return clamped

    def _billed_pages(self, config: PrintConfig, page_count: int, warnings: List[str]) -> int:
        if config.prints_all_pages:
            return page_count

        selection = parse_page_range(config.page_range, page_count)
        if selection.fell_back:
            warnings.append(f"Could not parse page range '{config.page_range}', defaulting to all pages")
        elif selection.skipped_tokens:
            warnings.append("Ignored page range entries: " + ", ".join(selection.skipped_tokens))
        return selection.count


_default_engine = PricingEngine()


def compute_price(
    config: PrintConfig,
    page_count: Optional[int],
    catalog: Optional[PrintOptionsCatalog] = None,
) -> PriceQuote:
    """Price ``config`` for a document of ``page_count`` pages."""
    return _default_engine.compute_price(config, page_count, catalog)
