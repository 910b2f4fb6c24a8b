"""
Order submission route.

The server-side authority for price: the order is validated strictly and
re-priced with the active catalog, whatever the review page showed.
"""

from flask import (
    Blueprint,
    current_app,
    flash,
    redirect,
    session,
    url_for,
)

from core.exceptions import OrderValidationError
from logging_config import get_logger
from models.order import Order
from modules.order_validator import build_job_request, validate_order


# Module logger
logger = get_logger(__name__)

submit_bp = Blueprint("submit", __name__)


@submit_bp.route("/submit", methods=["POST"])
def submit():
    """
    Validate, re-price and freeze the order.

    1. Reject the order outright if any option is invalid
    2. Recompute the quote with the catalog in force now
    3. Freeze the order and build the backend job request
    4. Redirect to the confirmation page
    """
    order_dict = session.get("order")

    if not order_dict or "config" not in order_dict:
        flash("Please choose print options before submitting.", "error")
        return redirect(url_for("options.options"))

    order = Order.from_dict(order_dict)
    catalog = current_app.config["CATALOG_SERVICE"].get_catalog()
    engine = current_app.config["PRICING_ENGINE"]

    try:
        validate_order(order.config, order.document, catalog)
    except OrderValidationError as e:
        flash(e.message, "error")
        return redirect(url_for("review.review"))

    quote = engine.compute_price(order.config, order.page_count, catalog)

    shown = order.quote.total_price if order.quote else None
    if shown != quote.total_price:
        logger.info(f"Price changed at submission: {shown} -> {quote.total_price}")
        flash("Prices were updated since your review. The total below is final.", "info")

    order.quote = quote
    frozen_order = order.freeze()
    job_request = build_job_request(frozen_order, quote)

    logger.info(
        f"Order submitted: {frozen_order.job_name} "
        f"({frozen_order.copies} copies, total {frozen_order.total_price})"
    )

    session["submission"] = job_request
    session.pop("order", None)
    session.modified = True

    return redirect(url_for("confirmation.confirmation"))
