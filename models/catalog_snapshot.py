"""
Catalog snapshot model.

A snapshot pairs the catalog in force with where and when it came from.
The catalog service replaces the snapshot on every successful fetch; readers
hold on to whichever snapshot they got.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from models.print_options import PrintOptionsCatalog, default_catalog

SOURCE_DEFAULT = "default"
SOURCE_BACKEND = "backend"


@dataclass(frozen=True)
class CatalogSnapshot:
    """
    Point-in-time catalog.

    ``generation`` orders fetches by when they were *started*, so a result
    from an older fetch can be recognised and dropped.
    """

    catalog: PrintOptionsCatalog
    source: str
    """SOURCE_BACKEND or SOURCE_DEFAULT."""

    generation: int = 0
    fetched_at: Optional[datetime] = None

    @property
    def is_default(self) -> bool:
        return self.source == SOURCE_DEFAULT

    @property
    def age_seconds(self) -> Optional[float]:
        """Seconds since the fetch, None for the built-in defaults."""
        if self.fetched_at is None:
            return None
        return (datetime.now(timezone.utc) - self.fetched_at).total_seconds()

    def is_stale(self, max_age_seconds: float) -> bool:
        age = self.age_seconds
        return age is None or age > max_age_seconds

    def describe(self) -> Dict[str, Any]:
        """Summary for the health endpoint."""
        age = self.age_seconds
        return {
            "source": self.source,
            "generation": self.generation,
            "age_seconds": round(age, 1) if age is not None else None,
        }

    @classmethod
    def create_default(cls) -> "CatalogSnapshot":
        """Snapshot used before (or instead of) the first backend fetch."""
        return cls(catalog=default_catalog(), source=SOURCE_DEFAULT)
