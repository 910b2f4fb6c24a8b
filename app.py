"""
PrintLoop - Flask Application Entry Point.

A slim app factory that:
1. Loads configuration and sets up logging
2. Starts the catalog service (background refresh thread, optional)
3. Creates the pricing engine and PDF analyzer
4. Registers route blueprints
5. Sets up template filters and error handlers

ARCHITECTURE:
    Main Thread
    ├── Flask request handling (quotes are computed inline, no I/O)
    └── Cleanup on shutdown

    Catalog Thread (background, only when PRINTLOOP_CATALOG_URL is set)
    └── Periodic catalog fetch, newest fetch always wins
"""

from __future__ import annotations

import atexit
import logging
import os

from flask import Flask, flash, jsonify, redirect, request, url_for
from werkzeug.exceptions import NotFound, RequestEntityTooLarge

from logging_config import setup_logging, get_logger
from modules.pdf_analyzer import PDFAnalyzer
from modules.pricing import PricingEngine
from routes import register_blueprints
from services.catalog_service import CatalogService


# Module logger (configured after setup_logging)
logger = get_logger(__name__)


def create_app(config_object: str = "config.Config") -> Flask:
    """
    Application factory - creates and configures Flask app.

    Args:
        config_object: Import path of the config class to load

    Returns:
        Configured Flask application
    """
    app = Flask(__name__)
    app.config.from_object(config_object)

    log_level = logging.DEBUG if app.config.get("DEBUG") else logging.INFO
    root_logger = setup_logging(
        log_level=log_level,
        enable_file_logging=app.config.get("ENVIRONMENT") == "production" and not app.testing,
    )
    app.logger.handlers = root_logger.handlers
    app.logger.setLevel(log_level)

    logger.info(f"Starting PrintLoop in {app.config.get('ENVIRONMENT')} mode")

    os.makedirs(app.config["UPLOAD_FOLDER"], exist_ok=True)

    # =========================================================================
    # SERVICES
    # =========================================================================

    catalog_service = CatalogService(
        catalog_url=app.config.get("CATALOG_URL", ""),
        refresh_interval_seconds=app.config.get("CATALOG_REFRESH_SECONDS", 300.0),
        timeout_seconds=app.config.get("CATALOG_TIMEOUT_SECONDS", 10.0),
    )
    catalog_service.start()
    app.config["CATALOG_SERVICE"] = catalog_service

    app.config["PRICING_ENGINE"] = PricingEngine()
    app.config["PDF_ANALYZER"] = PDFAnalyzer()

    def cleanup():
        logger.info("Shutting down...")
        catalog_service.stop()

    atexit.register(cleanup)

    register_blueprints(app)

    # =========================================================================
    # TEMPLATE HELPERS
    # =========================================================================

    @app.template_filter("currency")
    def format_currency(value):
        """Format an amount for display; None means the price is pending."""
        if value is None:
            return "Pricing pending"
        return f"{app.config.get('CURRENCY_SYMBOL', '')}{value:,.2f}"

    @app.context_processor
    def inject_catalog():
        snapshot = catalog_service.get_snapshot()
        return {
            "catalog": snapshot.catalog,
            "catalog_is_default": snapshot.is_default,
        }

    # =========================================================================
    # ERROR HANDLERS
    # =========================================================================

    @app.errorhandler(RequestEntityTooLarge)
    def handle_file_too_large(e):
        max_mb = app.config.get("MAX_CONTENT_LENGTH", 16 * 1024 * 1024) / (1024 * 1024)
        flash(f"File too large. Maximum upload size is {max_mb:.0f} MB.", "error")
        return redirect(url_for("upload.upload"))

    @app.errorhandler(NotFound)
    def handle_not_found(e):
        if request.path.startswith("/api/"):
            return jsonify({"error": "Not found"}), 404
        flash("Page not found.", "warning")
        return redirect(url_for("upload.upload"))

    @app.errorhandler(500)
    def handle_server_error(e):
        logger.error(f"500 error: {e}", exc_info=True)
        if request.path.startswith("/api/"):
            return jsonify({"error": "Internal server error"}), 500
        flash("An unexpected error occurred. Please try again.", "error")
        return redirect(url_for("upload.upload"))

    logger.info("Application initialized successfully")
    return app


if __name__ == "__main__":
    app = create_app()
    app.run(debug=app.config.get("DEBUG", False))
