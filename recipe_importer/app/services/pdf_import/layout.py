"""Page text reconstruction from positioned words.

Coordinates follow pdfplumber: ``top`` grows downward from the top of the
page, so sorting by ascending ``top`` reads the page top to bottom.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from recipe_importer.app.services.segmentation.constants import KNOWN_SOURCE_DOMAINS
from recipe_importer.app.services.segmentation.normalizer import (
    normalize_whitespace,
    page_marker,
)

logger = logging.getLogger(__name__)

ROW_TOLERANCE = 2.0

URL_RE = re.compile(r"https?://")
PRINT_RE = re.compile(r"\bprint\b", re.I)
PAGE_FRACTION_RE = re.compile(r"^\s*\d+\s*/\s*\d+\s*$")
DATE_STAMP_RE = re.compile(r"^\s*\d{1,2}/\d{1,2}/\d{2,4}")
SOURCE_DOMAIN_RE = re.compile(
    rf"\b(?:{'|'.join(re.escape(domain) for domain in KNOWN_SOURCE_DOMAINS)})\b", re.I
)


@dataclass(frozen=True)
class PageWord:
    text: str
    x0: float
    x1: float
    top: float
    bottom: float

    @property
    def center_x(self) -> float:
        return (self.x0 + self.x1) / 2

    @property
    def center_y(self) -> float:
        return (self.top + self.bottom) / 2


@dataclass
class PageContent:
    """One PDF page: the layout-ordered text if available, plus its words."""

    page_no: int
    text: Optional[str] = None
    words: List[PageWord] = field(default_factory=list)


def split_columns(words: Sequence[PageWord]) -> Tuple[List[PageWord], List[PageWord]]:
    """Partition words around the median horizontal centre.

    Returns ``(words, [])`` when the two halves overlap horizontally, which
    means the page is a single column.
    """
    if not words:
        return [], []
    centers = sorted(word.center_x for word in words)
    median = centers[len(centers) // 2]
    left = [word for word in words if word.center_x < median]
    right = [word for word in words if word.center_x >= median]
    if not left or not right:
        return list(words), []
    gutter = min(word.x0 for word in right) - max(word.x1 for word in left)
    if gutter <= 0:
        return list(words), []
    return left, right


def group_rows(words: Sequence[PageWord], tolerance: float = ROW_TOLERANCE) -> List[List[PageWord]]:
    """Bucket words into rows by vertical centre, top to bottom, each row left to right."""
    row_centers: List[float] = []
    rows: List[List[PageWord]] = []
    for word in sorted(words, key=lambda w: (w.center_y, w.x0)):
        idx = next(
            (i for i, center in enumerate(row_centers) if abs(center - word.center_y) < tolerance),
            -1,
        )
        if idx < 0:
            row_centers.append(word.center_y)
            rows.append([word])
        else:
            rows[idx].append(word)
    order = sorted(range(len(rows)), key=lambda i: row_centers[i])
    return [sorted(rows[i], key=lambda w: w.x0) for i in order]


def rows_to_text(rows: Sequence[Sequence[PageWord]]) -> str:
    return "\n".join(" ".join(word.text for word in row) for row in rows)


def reconstruct_page_text(words: Sequence[PageWord]) -> str:
    """Rebuild reading-order text from words, left column before right column."""
    if not words:
        return ""
    left, right = split_columns(words)
    if not right:
        return rows_to_text(group_rows(left))
    logger.debug("Two-column page: %d left words, %d right words", len(left), len(right))
    return f"{rows_to_text(group_rows(left))}\n{rows_to_text(group_rows(right))}".strip()


def is_header_footer_line(line: str) -> bool:
    return (
        not line.strip()
        or bool(URL_RE.search(line))
        or bool(PRINT_RE.search(line))
        or bool(PAGE_FRACTION_RE.match(line))
        or bool(DATE_STAMP_RE.match(line))
        or bool(SOURCE_DOMAIN_RE.search(line))
    )


def clean_headers_footers(text: str) -> str:
    """Drop print headers and footers: URLs, "print", page x/y, dates, site names."""
    lines = (text or "").replace("\r\n", "\n").replace("\r", "\n").split("\n")
    kept = [line.rstrip() for line in lines if not is_header_footer_line(line)]
    return "\n".join(kept).strip()


def extract_page_text(page: PageContent) -> str:
    if page.text and page.text.strip():
        return clean_headers_footers(page.text)
    if not page.words:
        return ""
    return clean_headers_footers(reconstruct_page_text(page.words))


def extract_document_text(pages: Sequence[PageContent]) -> str:
    """Join page texts, each wrapped in START/END page markers."""
    chunks: List[str] = []
    for page in pages:
        page_text = extract_page_text(page)
        if not page_text.strip():
            logger.debug("Page %d produced no text", page.page_no)
            continue
        chunks.append(
            "\n".join(
                [
                    page_marker(page.page_no, "START"),
                    page_text.rstrip(),
                    page_marker(page.page_no, "END"),
                    "",
                ]
            )
        )
    return normalize_whitespace("\n".join(chunks))
