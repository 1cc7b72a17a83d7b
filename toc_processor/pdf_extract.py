from __future__ import annotations

from typing import List
import logging

from .models import TocEntry, ProcessedToc

logger = logging.getLogger(__name__)


def sample_toc() -> ProcessedToc:
    """
    Fixed two-chapter outline returned by the PDF placeholder.
    Built fresh on each call.
    """
    ch1 = TocEntry(id="toc-1", title="Chapter 1: Introduction", level=1, page_number=1)
    s11 = TocEntry(id="toc-2", title="Section 1.1", level=2, page_number=2)
    s12 = TocEntry(id="toc-3", title="Section 1.2", level=2, page_number=5)
    ch2 = TocEntry(id="toc-4", title="Chapter 2: Methodology", level=1, page_number=10)
    ch1.children = [s11, s12]

    flat: List[TocEntry] = [ch1, s11, s12, ch2]
    return ProcessedToc(entries=[ch1, ch2], flat_entries=flat)


SAMPLE_TOC = sample_toc()


async def extract_toc_from_pdf(pdf_content: bytes) -> ProcessedToc:
    """
    Placeholder for real PDF text extraction.

    The content is not parsed; every call resolves to a copy of
    SAMPLE_TOC. A real backend would extract the TOC page text and feed
    it to process_toc_text.
    """
    logger.debug("PDF TOC extraction stub called (%s); returning sample outline", type(pdf_content).__name__)
    return sample_toc()
