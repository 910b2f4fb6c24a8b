"""Hard validation of an order at submission, and the backend job payload."""

from __future__ import annotations

from typing import Any, Dict, List

from core.exceptions import OrderValidationError, UnknownCatalogValue
from logging_config import get_logger
from models.order import FrozenOrder
from models.print_job import MAX_PAGE_COUNT, DocumentMeta, PrintConfig, PriceQuote
from models.print_options import (
    MAX_RESOLUTION_DPI,
    MIN_RESOLUTION_DPI,
    RESOLUTION_STEP_DPI,
    PrintOptionsCatalog,
)
from modules.page_range import parse_page_range

logger = get_logger(__name__)


def collect_problems(
    config: PrintConfig,
    document: DocumentMeta,
    catalog: PrintOptionsCatalog,
) -> List[str]:
    """
    Every reason the order would be rejected, in display order.

    Unlike the quote engine nothing is clamped or defaulted here.
    """
    problems: List[str] = []

    if not document.has_page_count:
        if isinstance(document.page_count, int) and document.page_count > MAX_PAGE_COUNT:
            problems.append(f"documents over {MAX_PAGE_COUNT} pages cannot be printed here")
        else:
            problems.append("the document page count is unknown")

    if not isinstance(config.copies, int) or not 1 <= config.copies <= catalog.max_copies:
        problems.append(f"copies must be between 1 and {catalog.max_copies}")

    for lookup, value in (
        (catalog.paper_size_option, config.paper_size),
        (catalog.orientation_option, config.orientation),
        (catalog.color_type_option, config.color_type),
        (catalog.duplex_option, config.duplex),
    ):
        try:
            lookup(value)
        except UnknownCatalogValue as e:
            problems.append(f"{e.field} '{e.value}' is not offered")

    resolution = config.resolution
    if (
        not isinstance(resolution, int)
        or not MIN_RESOLUTION_DPI <= resolution <= MAX_RESOLUTION_DPI
        or resolution % RESOLUTION_STEP_DPI
    ):
        problems.append(
            f"resolution must be {MIN_RESOLUTION_DPI}-{MAX_RESOLUTION_DPI} DPI "
            f"in steps of {RESOLUTION_STEP_DPI}"
        )

    if not config.prints_all_pages and document.has_page_count:
        selection = parse_page_range(config.page_range, document.page_count)
        if selection.fell_back:
            problems.append(f"page range '{config.page_range}' could not be read")
        elif selection.skipped_tokens:
            problems.append("page range has invalid entries: " + ", ".join(selection.skipped_tokens))

    return problems


def validate_order(
    config: PrintConfig,
    document: DocumentMeta,
    catalog: PrintOptionsCatalog,
) -> None:
    """
    Reject an order that cannot be printed as configured.

    Raises:
        OrderValidationError: Listing every problem found
    """
    problems = collect_problems(config, document, catalog)
    if problems:
        logger.info(f"Order rejected: {problems}")
        raise OrderValidationError(problems)


def build_job_request(order: FrozenOrder, quote: PriceQuote) -> Dict[str, Any]:
    """
    Backend print job request for a validated order.

    File bytes are not part of this payload; the stored file is referenced
    by name.
    """
    request: Dict[str, Any] = dict(order.config)
    request.update({
        "jobName": order.job_name,
        "fileName": order.stored_filename,
        "pageCount": order.page_count,
        "totalPages": quote.total_pages,
        "estimatedCost": quote.total_price,
    })
    return request
