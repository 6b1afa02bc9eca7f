"""pdfplumber adapter producing ``PageContent`` objects from PDF bytes."""

import io
import logging
from typing import List

import pdfplumber

from recipe_importer.app.services.pdf_import.layout import PageContent, PageWord

logger = logging.getLogger(__name__)


def _page_words(page) -> List[PageWord]:
    words = []
    for word in page.extract_words() or []:
        text = (word.get("text") or "").strip()
        if not text:
            continue
        words.append(
            PageWord(
                text=text,
                x0=float(word["x0"]),
                x1=float(word["x1"]),
                top=float(word["top"]),
                bottom=float(word["bottom"]),
            )
        )
    return words


def read_pdf_pages(data: bytes) -> List[PageContent]:
    """Open a PDF from memory and collect each page's text and words."""
    pages: List[PageContent] = []
    with pdfplumber.open(io.BytesIO(data)) as pdf:
        logger.info("PDF opened: %d pages", len(pdf.pages))
        for page_no, page in enumerate(pdf.pages, start=1):
            text = page.extract_text() or ""
            words = [] if text.strip() else _page_words(page)
            pages.append(PageContent(page_no=page_no, text=text, words=words))
    return pages
