"""
Order review route.

Displays the order summary and quote before submission.
"""

from flask import (
    Blueprint,
    flash,
    redirect,
    render_template,
    session,
    url_for,
)

from models.order import Order


review_bp = Blueprint("review", __name__)


@review_bp.route("/review", methods=["GET"])
def review():
    """Display order review page."""
    order_dict = session.get("order")

    if not order_dict or "config" not in order_dict:
        flash("Please choose print options before review.", "warning")
        return redirect(url_for("options.options"))

    return render_template("review.html", order=Order.from_dict(order_dict))
