"""
Services layer for PrintLoop.

- CatalogService: Background print options catalog refresh

Thread Model:
    Main Thread (Flask)
    └── CatalogService thread (periodic refresh, last write wins)
"""

from .catalog_service import CatalogService

__all__ = [
    "CatalogService",
]
