"""
Page range parsing.

Turns a user-written expression such as "1, 3-5" into sorted,
zero-based page indices bounded by the document length. Malformed
tokens are dropped silently; an empty result is a normal outcome.
"""
import logging
import re
from typing import List, Optional

logger = logging.getLogger(__name__)

_TOKEN_SPLIT = re.compile(r",|\s+")
_LEADING_INT = re.compile(r"^[+-]?\d+")


def _parse_int(value: str) -> Optional[int]:
    """Parse a leading integer ("3", "3p"); None when there is none."""
    match = _LEADING_INT.match(value.strip())
    if not match:
        return None
    return int(match.group())


def parse_page_range(range_expr: Optional[str], total_pages: int) -> List[int]:
    """
    Parse a 1-based page range expression into 0-based page indices.

    Args:
        range_expr: Expression like "1, 3-5" (commas and/or whitespace)
        total_pages: Number of pages in the document

    Returns:
        Sorted, unique indices with 0 <= i < total_pages
    """
    if not range_expr or total_pages <= 0:
        return []

    pages = set()
    for part in _TOKEN_SPLIT.split(range_expr):
        token = part.strip()
        if not token:
            continue

        if "-" in token:
            bounds = token.split("-")
            start = _parse_int(bounds[0])
            end = _parse_int(bounds[1])
            if start is None or end is None:
                logger.debug(f"Skipping malformed range token: {token!r}")
                continue
            first = max(1, min(start, end))
            last = min(total_pages, max(start, end))
            pages.update(range(first - 1, last))
        else:
            page = _parse_int(token)
            if page is None or not 1 <= page <= total_pages:
                logger.debug(f"Skipping out-of-bounds page token: {token!r}")
                continue
            pages.add(page - 1)

    return sorted(pages)
