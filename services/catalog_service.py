"""
Print options catalog service with background refresh thread.

This service keeps the pricing catalog fresh from the backend
``print-jobs/options`` endpoint. It runs a background thread that
refetches the catalog every ``refresh_interval_seconds``.

LAST WRITE WINS:
    - Every fetch is stamped with a generation number when it STARTS
    - A result is published only if its generation is newer than the
      published one, so a slow fetch never overwrites a newer catalog

DEGRADED MODE:
    - No URL configured, or backend unreachable: the built-in default
      catalog (or the last good one) stays in force
    - Fetch errors are logged, never raised to callers

Usage:
    # At app startup
    catalog_service = CatalogService(catalog_url, refresh_interval_seconds=300)
    catalog_service.start()

    # In routes
    catalog = catalog_service.get_catalog()

    # At app shutdown
    catalog_service.stop()
"""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Any, Optional

import requests

from core.exceptions import CatalogUnavailableError
from logging_config import get_logger, set_thread_name
from models.catalog_snapshot import CatalogSnapshot, SOURCE_BACKEND
from models.print_options import PrintOptionsCatalog

# Module logger
logger = get_logger(__name__)


class CatalogService:
    """
    Background service for catalog refresh.

    Attributes:
        catalog_url: Backend endpoint returning the PrintOptions JSON
        refresh_interval_seconds: Time between refreshes
        is_running: Whether the background thread is active
    """

    def __init__(
        self,
        catalog_url: str = "",
        refresh_interval_seconds: float = 300.0,
        timeout_seconds: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize catalog service.

        Args:
            catalog_url: Backend catalog endpoint; empty means defaults only
            refresh_interval_seconds: Seconds between refreshes
            timeout_seconds: HTTP timeout per fetch
            session: Optional requests session (injected in tests)
        """
        self.catalog_url = catalog_url
        self._refresh_interval = refresh_interval_seconds
        self._timeout = timeout_seconds
        self._session = session or requests.Session()

        # Thread control
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self._is_running = False

        # Published snapshot (atomic reference) and generation bookkeeping
        self._current_snapshot: CatalogSnapshot = CatalogSnapshot.create_default()
        self._generation_lock = threading.Lock()
        self._last_generation = 0

        self._consecutive_failures = 0

        logger.info(
            f"CatalogService initialized (url: {catalog_url or 'none, defaults only'}, "
            f"refresh interval: {refresh_interval_seconds}s)"
        )

    @property
    def is_running(self) -> bool:
        return self._is_running

    @property
    def refresh_interval_seconds(self) -> float:
        return self._refresh_interval

    def start(self) -> None:
        """
        Start the background refresh thread.

        Does nothing when no catalog URL is configured or the thread is
        already running.
        """
        if not self.catalog_url:
            logger.info("No catalog URL configured - using default print options catalog")
            return

        if self._is_running:
            logger.warning("CatalogService already running")
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._refresh_loop,
            name="Catalog",
            daemon=True,
        )
        self._is_running = True
        self._thread.start()

        logger.info("Catalog refresh thread started")

    def stop(self) -> None:
        """Signal the refresh thread to stop and wait for it."""
        if not self._is_running:
            return

        self._stop_event.set()

        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)
            if self._thread.is_alive():
                logger.warning("Catalog thread did not stop cleanly")

        self._is_running = False
        self._thread = None

        logger.info("Catalog refresh thread stopped")

    def get_snapshot(self) -> CatalogSnapshot:
        """Current snapshot (never None, may be the defaults)."""
        return self._current_snapshot

    def get_catalog(self) -> PrintOptionsCatalog:
        """Catalog to price with right now."""
        return self._current_snapshot.catalog

    def refresh_now(self) -> bool:
        """
        Fetch the catalog in the calling thread.

        Returns:
            True if a new catalog was published, False otherwise
        """
        if not self.catalog_url:
            return False
        logger.info("Forcing catalog refresh...")
        return self._do_refresh()

    def _refresh_loop(self) -> None:
        """Fetch immediately, then every refresh interval until stopped."""
        set_thread_name("Catalog")

        self._do_refresh()

        while not self._stop_event.is_set():
            if self._stop_event.wait(timeout=self._refresh_interval):
                break
            self._do_refresh()

        logger.info("Catalog refresh loop exiting")

    def _next_generation(self) -> int:
        with self._generation_lock:
            self._last_generation += 1
            return self._last_generation

    def _publish(self, snapshot: CatalogSnapshot) -> bool:
        """
        Swap in ``snapshot`` unless a newer generation is already published.

        Returns:
            True if published, False if discarded as stale
        """
        with self._generation_lock:
            current = self._current_snapshot
            if snapshot.generation <= current.generation:
                logger.debug(
                    f"Discarding catalog generation {snapshot.generation} "
                    f"(generation {current.generation} already published)"
                )
                return False
            self._current_snapshot = snapshot
            return True

    def _do_refresh(self) -> bool:
        generation = self._next_generation()
        logger.debug(f"Refreshing catalog (generation {generation})...")

        try:
            catalog = self._fetch()
        except CatalogUnavailableError as e:
            self._consecutive_failures += 1

            if self._consecutive_failures == 1:
                logger.warning(f"Catalog refresh failed: {e}")
            elif self._consecutive_failures <= 3:
                logger.error(f"Catalog refresh failed ({self._consecutive_failures} consecutive): {e}")
            elif self._consecutive_failures % 5 == 0:
                logger.error(
                    f"Catalog refresh still failing ({self._consecutive_failures} consecutive): {e}"
                )
            return False

        if self._consecutive_failures > 0:
            logger.info(f"Catalog refresh recovered after {self._consecutive_failures} failures")
        self._consecutive_failures = 0

        snapshot = CatalogSnapshot(
            catalog=catalog,
            source=SOURCE_BACKEND,
            generation=generation,
            fetched_at=datetime.now(timezone.utc),
        )
        published = self._publish(snapshot)
        if published:
            logger.debug(
                f"Catalog refreshed: {len(catalog.color_types)} color types, "
                f"{len(catalog.paper_sizes)} paper sizes, max copies {catalog.max_copies}"
            )
        return published

    def _fetch(self) -> PrintOptionsCatalog:
        """
        GET the catalog and parse it.

        Raises:
            CatalogUnavailableError: On any transport, HTTP or payload error
        """
        try:
            response = self._session.get(self.catalog_url, timeout=self._timeout)
            response.raise_for_status()
            payload = _unwrap(response.json())
            return PrintOptionsCatalog.from_dict(payload)
        except requests.RequestException as e:
            raise CatalogUnavailableError(self.catalog_url, str(e)) from e
        except (ValueError, TypeError) as e:
            raise CatalogUnavailableError(self.catalog_url, f"invalid catalog payload: {e}") from e


def _unwrap(payload: Any) -> Any:
    """The backend wraps results in ``response`` or ``data`` on some routes."""
    if isinstance(payload, dict):
        for key in ("response", "data"):
            inner = payload.get(key)
            if isinstance(inner, dict):
                return inner
    return payload
