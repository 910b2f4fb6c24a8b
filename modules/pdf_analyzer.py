"""PDF analyzer: page count and first-page size for pricing."""

from __future__ import annotations

from pathlib import Path

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from logging_config import get_logger
from models.print_job import DocumentMeta

logger = get_logger(__name__)


class PDFAnalyzer:
    """Extract minimal metadata, resilient to malformed PDFs."""

    def analyze(self, pdf_path: str | Path) -> DocumentMeta:
        path = Path(pdf_path)
        meta = DocumentMeta(
            file_name=path.name,
            size_kb=round(path.stat().st_size / 1024, 2) if path.exists() else 0.0,
        )

        try:
            reader = PdfReader(str(path))
            meta.page_count = len(reader.pages)
            if reader.pages:
                page = reader.pages[0]
                meta.width_in = round(float(page.mediabox.width) / 72, 2)
                meta.height_in = round(float(page.mediabox.height) / 72, 2)
        except (PdfReadError, OSError, ValueError) as exc:
            # Unknown page count leaves the quote provisional
            logger.warning(f"PDF analysis failed for {path.name}: {exc}")
            meta.page_count = None
            meta.error = f"PDF analysis failed: {exc}"

        return meta
