"""
Main routes.

The kiosk flow starts at the upload page.
"""

from flask import Blueprint, redirect, url_for

main_bp = Blueprint("main", __name__)


@main_bp.route("/")
def index():
    """Redirect root to the upload page."""
    return redirect(url_for("upload.upload"))
