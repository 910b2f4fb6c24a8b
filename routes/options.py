"""
Print options route.

Handles paper size, color, duplex, copies, page range, stapling and
resolution. Every POST produces a fresh advisory quote.
"""

from flask import (
    Blueprint,
    current_app,
    flash,
    redirect,
    render_template,
    request,
    session,
    url_for,
)

from logging_config import get_logger
from models.order import Order
from models.print_job import ALL_PAGES, CUSTOM_PAGES, PrintConfig


# Module logger
logger = get_logger(__name__)

options_bp = Blueprint("options", __name__)


@options_bp.route("/options", methods=["GET", "POST"])
def options():
    """
    Handle print option selection.

    GET: Display the options form with the active catalog
    POST: Quote the chosen options, store them, redirect to review

    Odd values are not rejected here: the quote degrades and lists what it
    adjusted. Hard validation happens on /submit.
    """
    order_dict = session.get("order")
    if not order_dict:
        flash("Please upload a document before choosing print options.", "warning")
        return redirect(url_for("upload.upload"))

    order = Order.from_dict(order_dict)
    catalog = current_app.config["CATALOG_SERVICE"].get_catalog()

    if request.method == "POST":
        config = PrintConfig.from_dict(request.form.to_dict())
        engine = current_app.config["PRICING_ENGINE"]
        quote = engine.compute_price(config, order.page_count, catalog)

        order.config = config
        order.quote = quote
        session["order"] = order.to_dict()
        session.modified = True

        for warning in quote.warnings:
            flash(warning, "warning")

        logger.info(
            f"Options saved: {config.copies} x {config.color_type} {config.paper_size}, "
            f"range={config.page_range!r}, total={quote.total_price}"
        )
        return redirect(url_for("review.review"))

    config = order.config or PrintConfig()
    custom_range = "" if config.prints_all_pages else config.page_range

    return render_template(
        "options.html",
        order=order,
        print_config=config,
        page_range_mode=ALL_PAGES if config.prints_all_pages else CUSTOM_PAGES,
        custom_page_range=custom_range,
    )
