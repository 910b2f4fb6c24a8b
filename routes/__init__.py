"""
Flask route blueprints for PrintLoop.

This module contains all route handlers organized by step:
- main: Root redirect
- upload: Document upload and page counting
- options: Print options and live quote
- review: Order review
- submit: Validation and authoritative re-pricing
- confirmation: Submitted order display
- api: JSON endpoints (catalog, price, page range, health)

Each blueprint is registered with the Flask app in create_app().
"""

from .main import main_bp
from .upload import upload_bp
from .options import options_bp
from .review import review_bp
from .submit import submit_bp
from .confirmation import confirmation_bp
from .api import api_bp

__all__ = [
    "main_bp",
    "upload_bp",
    "options_bp",
    "review_bp",
    "submit_bp",
    "confirmation_bp",
    "api_bp",
]


def register_blueprints(app):
    """
    Register all blueprints with the Flask app.

    Args:
        app: Flask application instance
    """
    app.register_blueprint(main_bp)
    app.register_blueprint(upload_bp)
    app.register_blueprint(options_bp)
    app.register_blueprint(review_bp)
    app.register_blueprint(submit_bp)
    app.register_blueprint(confirmation_bp)
    app.register_blueprint(api_bp)
