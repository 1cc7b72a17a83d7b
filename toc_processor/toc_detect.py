from __future__ import annotations

from dataclasses import dataclass
from typing import List
import logging
import re

from .toc_parse import trailing_digits_start

logger = logging.getLogger(__name__)


TOC_KEYWORDS = [
    "table of contents",
    "contents",
]

# Classifier thresholds
MIN_TOC_LINES = 3
PAGE_NUMBER_RATIO = 0.5
MIN_CHAPTER_LINES = 2

_CHAPTER_LIKE_RE = re.compile(r"chapter|section|part", re.IGNORECASE)


@dataclass
class TocLineStats:
    """Line counts behind the is-it-a-TOC decision."""
    total: int
    page_numbered: int
    chapter_like: int

    @property
    def page_ratio(self) -> float:
        return self.page_numbered / self.total if self.total else 0.0

    @property
    def looks_like_toc(self) -> bool:
        if self.total < MIN_TOC_LINES:
            return False
        return self.page_ratio > PAGE_NUMBER_RATIO or self.chapter_like >= MIN_CHAPTER_LINES


def _ends_in_page_number(line: str) -> bool:
    """Whitespace, then ASCII digits, then optional trailing whitespace."""
    s = line.rstrip()
    start = trailing_digits_start(s)
    return 0 < start < len(s) and s[start - 1].isspace()


def toc_line_stats(text: str) -> TocLineStats:
    lines = [ln for ln in text.split("\n") if ln.strip()]
    page_numbered = sum(1 for ln in lines if _ends_in_page_number(ln))
    chapter_like = sum(1 for ln in lines if _CHAPTER_LIKE_RE.search(ln))
    return TocLineStats(total=len(lines), page_numbered=page_numbered, chapter_like=chapter_like)


def is_toc_text(text: str) -> bool:
    """
    Heuristic: most lines end in a page number, or at least two lines
    mention a chapter/section/part. Needs three non-blank lines.
    """
    stats = toc_line_stats(text)
    verdict = stats.looks_like_toc
    logger.debug(
        "TOC check: %d lines, %d page-numbered, %d chapter-like -> %s",
        stats.total, stats.page_numbered, stats.chapter_like, verdict,
    )
    return verdict


def find_toc_pages(pages_text: List[str], max_pages: int = 8) -> List[int]:
    """
    Find likely TOC pages near the front of the document.
    Returns page indices (0-based).
    """
    candidates = []
    n = min(len(pages_text), max_pages)
    for i in range(n):
        low = pages_text[i].lower()
        if any(k in low for k in TOC_KEYWORDS) or is_toc_text(pages_text[i]):
            candidates.append(i)
    return candidates
