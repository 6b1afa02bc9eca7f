"""Whitespace and page-marker normalization for extracted recipe text."""

import re
from typing import Iterable, List

PAGE_MARKER_RE = re.compile(r"^=== PAGE \d+ (START|END) ===$")


def normalize_whitespace(text: str) -> str:
    """Canonicalize newlines, strip trailing blanks per line and collapse blank runs.

    Line structure is preserved; only runs of blank lines shrink to a single
    blank line. Applying it twice gives the same result as applying it once.
    """
    if not text:
        return ""
    s = text.replace("\0", "").replace("\r\n", "\n").replace("\r", "\n")
    s = re.sub(r"[^\S\n]+\n", "\n", s)
    s = re.sub(r"[^\S\n]+$", "", s)
    s = re.sub(r"\n{3,}", "\n\n", s)
    return s.strip()


def clean_text(text: str) -> str:
    """Normalize whitespace in text."""
    return re.sub(r"\s+", " ", text or "").strip()


def is_page_marker(line: str) -> bool:
    return bool(PAGE_MARKER_RE.match(line.strip()))


def page_marker(page_no: int, edge: str) -> str:
    return f"=== PAGE {page_no} {edge} ==="


def strip_page_markers(text: str) -> str:
    """Remove the page boundary markers inserted by the PDF reader."""
    kept = [line for line in (text or "").split("\n") if not is_page_marker(line)]
    return normalize_whitespace("\n".join(kept))


def split_lines(text: str) -> List[str]:
    """Split text into trimmed, non-empty lines, skipping page markers."""
    lines = (text or "").replace("\r\n", "\n").replace("\r", "\n").split("\n")
    return [line.strip() for line in lines if line.strip() and not is_page_marker(line)]


def join_lines(lines: Iterable[str]) -> str:
    return "\n".join(line for line in lines if line)
