from __future__ import annotations

from typing import List, Optional, Tuple
import logging
import re
import sys

from .models import TocEntry, ProcessedToc
from .section_tree import build_forest

logger = logging.getLogger(__name__)

# Digits are ASCII only; whitespace is whatever str.isspace() accepts
_CHAPTER_RE = re.compile(r"^chapter\s+[0-9]+", re.IGNORECASE)
_SECTION_NUM_RE = re.compile(r"^([0-9]+(\.[0-9]+)*)")

_ASCII_DIGITS = "0123456789"
# 0 means no limit (interpreters before 3.11)
_MAX_INT_DIGITS = getattr(sys, "get_int_max_str_digits", lambda: 0)()


def trailing_digits_start(s: str) -> int:
    """
    Index where the run of ASCII digits ending ``s`` begins, or len(s)
    when ``s`` does not end in a digit. Callers rstrip first.
    """
    i = len(s)
    while i > 0 and s[i - 1] in _ASCII_DIGITS:
        i -= 1
    return i


def _split_page_number(line: str) -> Tuple[str, Optional[int]]:
    """
    'Climate Risk 45' -> ('Climate Risk', 45). Lines without a trailing
    number, or with one too long to convert, come back unchanged with
    no page.
    """
    s = line.rstrip()
    start = trailing_digits_start(s)
    digits = s[start:]
    if not digits:
        return line, None
    if _MAX_INT_DIGITS and len(digits) > _MAX_INT_DIGITS:
        return line, None
    return s[:start].strip(), int(digits)


def parse_toc_line(raw_line: str, index: int) -> TocEntry:
    """
    Derive one entry from a single TOC line.

    Level comes from, in order:
      - 'Chapter N' at the start -> level 1
      - otherwise indentation of the raw line, two spaces per level
    and a leading section number ('2', '2.3', '2.3.1') then overrides
    either with dot count + 1.
    """
    line = raw_line.strip()
    title, page = _split_page_number(line)

    if _CHAPTER_RE.match(title):
        level = 1
    else:
        leading = len(raw_line) - len(raw_line.lstrip())
        level = leading // 2 + 1
        title = title.lstrip()

    mnum = _SECTION_NUM_RE.match(title)
    if mnum:
        level = mnum.group(1).count(".") + 1
        title = title.strip()

    return TocEntry(id=f"toc-{index}", title=title, level=level, page_number=page)


def process_toc_text(toc_text: str) -> ProcessedToc:
    """
    Parse raw table-of-contents text into a forest plus a flat list.

    Blank lines are dropped; ids are 'toc-<n>' over the remaining lines
    and restart on every call. Never raises.
    """
    raw_lines: List[str] = [ln for ln in toc_text.split("\n") if ln.strip()]

    flat_entries = [parse_toc_line(ln, i) for i, ln in enumerate(raw_lines)]
    entries = build_forest(flat_entries)

    logger.debug("Parsed %d TOC line(s) into %d root(s)", len(flat_entries), len(entries))
    return ProcessedToc(entries=entries, flat_entries=flat_entries)
