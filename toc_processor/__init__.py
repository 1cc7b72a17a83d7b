from .models import ProcessedToc, TocEntry
from .pdf_extract import SAMPLE_TOC, extract_toc_from_pdf
from .toc_detect import find_toc_pages, is_toc_text
from .toc_parse import process_toc_text

__all__ = [
    "process_toc_text",
    "is_toc_text",
    "find_toc_pages",
    "extract_toc_from_pdf",
    "SAMPLE_TOC",
    "TocEntry",
    "ProcessedToc",
]
