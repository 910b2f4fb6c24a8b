"""Page range parsing for billing (and later, page extraction)."""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from core.exceptions import InvalidPageRangeToken
from logging_config import get_logger
from models.print_job import ALL_PAGES, PageSelection

logger = get_logger(__name__)

# "N" or "A-B", whitespace allowed around the dash. At most nine digits per
# number, which keeps int() well inside the integer string limit.
_TOKEN_PATTERN = re.compile(r"^([0-9]{1,9})(?:\s*-\s*([0-9]{1,9}))?$")


def parse_page_range(range_text: Optional[str], total_pages: int) -> PageSelection:
    """
    Resolve a page range string into the set of selected pages.

    Grammar: comma-separated tokens, each a page ``N`` or a range ``A-B``.
    Values outside ``1..total_pages`` are clamped. A reversed range
    (``A > B``) or a token that is not a number is skipped on its own.
    Duplicates count once.

    If no token is usable the whole document is selected and
    ``fell_back`` is set so the caller can tell the user.

    Cost depends on the length of ``range_text`` only, not on
    ``total_pages``.

    Args:
        range_text: Range string, "all", or None/empty
        total_pages: Page count of the document

    Returns:
        PageSelection with the page count and merged page intervals (1-based)
    """
    if not total_pages or total_pages < 1:
        return PageSelection(count=0)

    whole_document = ((1, total_pages),)
    text = (range_text or "").strip()

    if text.lower() == ALL_PAGES:
        return PageSelection(count=total_pages, ranges=whole_document)

    intervals: List[Tuple[int, int]] = []
    skipped = []

    for raw_token in text.split(","):
        token = raw_token.strip()
        if not token:
            continue
        try:
            intervals.append(_parse_token(token, total_pages))
        except InvalidPageRangeToken as e:
            logger.debug(e.message)
            skipped.append(token)

    if not intervals:
        logger.info(f"Could not parse page range {range_text!r}, defaulting to all {total_pages} pages")
        return PageSelection(
            count=total_pages,
            ranges=whole_document,
            fell_back=True,
            skipped_tokens=tuple(skipped),
        )

    merged = _merge(intervals)
    return PageSelection(
        count=sum(last - first + 1 for first, last in merged),
        ranges=merged,
        skipped_tokens=tuple(skipped),
    )


def _parse_token(token: str, total_pages: int) -> Tuple[int, int]:
    """Return the clamped inclusive bounds for one token."""
    match = _TOKEN_PATTERN.match(token)
    if not match:
        raise InvalidPageRangeToken(token, "not a page number or range")

    start = int(match.group(1))
    end = int(match.group(2)) if match.group(2) is not None else start

    if start > end:
        raise InvalidPageRangeToken(token, "range start is after range end")

    return _clamp(start, total_pages), _clamp(end, total_pages)


def _clamp(page: int, total_pages: int) -> int:
    return min(max(page, 1), total_pages)


def _merge(intervals: List[Tuple[int, int]]) -> Tuple[Tuple[int, int], ...]:
    """Sort and join overlapping or adjacent intervals."""
    merged: List[Tuple[int, int]] = []
    for first, last in sorted(intervals):
        if merged and first <= merged[-1][1] + 1:
            merged[-1] = (merged[-1][0], max(merged[-1][1], last))
        else:
            merged.append((first, last))
    return tuple(merged)
