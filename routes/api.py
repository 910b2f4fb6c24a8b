"""
API routes (JSON endpoints).

Handles:
- /api/print-options - Active print options catalog
- /api/price         - Quote for a set of print options and a page count
- /api/page-range    - Preview which pages a range selects
- /health            - Health check endpoint
"""

from typing import Any, Optional

from flask import (
    Blueprint,
    current_app,
    jsonify,
    request,
)

from logging_config import get_logger
from models.print_job import MAX_PAGE_COUNT, PrintConfig
from modules.page_range import parse_page_range


# Module logger
logger = get_logger(__name__)

api_bp = Blueprint("api", __name__)


def _page_count(value: Any) -> Optional[int]:
    """Untrusted page count: anything that is not a whole number is unknown."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


def _json_body():
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else None


@api_bp.route("/api/print-options", methods=["GET"])
def print_options():
    """Return the catalog in force, in the backend's PrintOptions shape."""
    snapshot = current_app.config["CATALOG_SERVICE"].get_snapshot()
    data = snapshot.catalog.to_dict()
    data["source"] = snapshot.source
    return jsonify(data)


@api_bp.route("/api/price", methods=["POST"])
def price():
    """
    Quote a print job.

    Body: {pageCount, paperSize, orientation, copies, pageRange, staple,
    colorType, resolution, duplex}. Response is the quote plus ``price``
    (same as ``totalPrice``; null while pricing is pending).
    """
    body = _json_body()
    if body is None:
        return jsonify({"error": "Request body must be a JSON object"}), 400

    config = PrintConfig.from_dict(body)
    page_count = _page_count(body.get("pageCount"))
    if page_count is not None and page_count > MAX_PAGE_COUNT:
        return jsonify({"error": f"pageCount must not exceed {MAX_PAGE_COUNT}"}), 400

    catalog = current_app.config["CATALOG_SERVICE"].get_catalog()
    quote = current_app.config["PRICING_ENGINE"].compute_price(config, page_count, catalog)

    logger.debug(f"API quote: pages={page_count} total={quote.total_price} warnings={len(quote.warnings)}")

    data = quote.to_dict()
    data["price"] = quote.total_price
    return jsonify(data)


@api_bp.route("/api/page-range", methods=["POST"])
def page_range():
    """Body: {pageRange, totalPages}. Returns the selected pages."""
    body = _json_body()
    if body is None:
        return jsonify({"error": "Request body must be a JSON object"}), 400

    total_pages = _page_count(body.get("totalPages"))
    if total_pages is None or not 1 <= total_pages <= MAX_PAGE_COUNT:
        return jsonify({"error": f"totalPages must be a whole number from 1 to {MAX_PAGE_COUNT}"}), 400

    range_text = body.get("pageRange")
    selection = parse_page_range(str(range_text) if range_text is not None else None, total_pages)
    return jsonify(selection.to_dict())


@api_bp.route("/health", methods=["GET"])
def health():
    """Health check with catalog source and age."""
    catalog_service = current_app.config.get("CATALOG_SERVICE")
    snapshot = catalog_service.get_snapshot()

    return jsonify({
        "status": "healthy",
        "catalog": snapshot.describe(),
        "catalog_refresh_running": catalog_service.is_running,
    })
