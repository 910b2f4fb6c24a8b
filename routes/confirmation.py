"""
Confirmation route.

Displays the submitted job request and its final price.
"""

from flask import (
    Blueprint,
    current_app,
    flash,
    redirect,
    render_template,
    session,
    url_for,
)

from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

confirmation_bp = Blueprint("confirmation", __name__)


@confirmation_bp.route("/confirmation", methods=["GET"])
def confirmation():
    """Display the last submitted order."""
    submission = session.get("submission")

    if not submission:
        flash("Submit an order to see the confirmation page.", "warning")
        return redirect(url_for("upload.upload"))

    return render_template("confirmation.html", submission=submission)


@confirmation_bp.route("/start-over", methods=["POST"])
def start_over():
    """
    Clear the session and start a new order.

    Also refetches the catalog so the next quote uses current prices.
    """
    session.pop("order", None)
    session.pop("submission", None)

    catalog_service = current_app.config.get("CATALOG_SERVICE")
    if catalog_service and catalog_service.refresh_now():
        logger.info("Catalog refreshed for new order")

    flash("Session cleared. Start a new order.", "success")
    return redirect(url_for("upload.upload"))
