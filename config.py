"""
Configuration for PrintLoop.

Values come from the environment (a .env file is loaded first). With no
PRINTLOOP_CATALOG_URL the built-in default print options catalog is used.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env before the Config class reads os.environ
load_dotenv(override=True)

BASE_DIR = Path(__file__).resolve().parent


class Config:
    """Default configuration for the Flask application."""

    # Flask settings
    SECRET_KEY = os.environ.get("FLASK_SECRET_KEY", "dev-secret-key")
    UPLOAD_FOLDER = os.environ.get(
        "UPLOAD_FOLDER", str(BASE_DIR / "static" / "uploads")
    )
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16 MB uploads
    SESSION_COOKIE_NAME = "printloop_session"
    ENVIRONMENT = os.environ.get("FLASK_ENV", "development")

    DEBUG = os.environ.get("FLASK_DEBUG", "1") == "1"
    TESTING = False

    # ==========================================================================
    # Print options catalog
    # ==========================================================================
    # CATALOG_URL: backend endpoint returning the PrintOptions JSON
    #   (paperSizes, colorTypes, duplexOptions, additionalServices, maxCopies).
    #   Empty = never fetch, price with the built-in defaults
    #   (color 25/page, black & white 10/page, stapling 0.05, multipliers 1.0).
    #
    # CATALOG_REFRESH_SECONDS: how often the background thread refetches.
    # CATALOG_TIMEOUT_SECONDS: HTTP timeout per fetch.
    # ==========================================================================
    CATALOG_URL = os.environ.get("PRINTLOOP_CATALOG_URL", "")
    CATALOG_REFRESH_SECONDS = float(
        os.environ.get("PRINTLOOP_CATALOG_REFRESH_SECONDS", "300")
    )
    CATALOG_TIMEOUT_SECONDS = float(
        os.environ.get("PRINTLOOP_CATALOG_TIMEOUT_SECONDS", "10")
    )

    # Display only; prices are plain numbers everywhere else
    CURRENCY_SYMBOL = os.environ.get("PRINTLOOP_CURRENCY_SYMBOL", "₦")


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    TESTING = False
    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    PERMANENT_SESSION_LIFETIME = 3600  # 1 hour


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    TESTING = False


class TestingConfig(Config):
    """Testing configuration: no catalog fetches, no file logging."""
    DEBUG = False
    TESTING = True
    CATALOG_URL = ""
    SECRET_KEY = "test-secret-key"
