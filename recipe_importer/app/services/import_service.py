"""Recipe import entry points for text, HTML, URLs and PDFs.

Every function returns an ``ImportResult``; failures are reported in its
``error`` field and never raised to the caller.
"""

import logging
from typing import Callable, Optional, Sequence, Tuple

import httpx
from bs4 import BeautifulSoup

from recipe_importer.app.schemas.import_result import ImportResult
from recipe_importer.app.services.debug_dump import DebugDumpService
from recipe_importer.app.services.html_import.dom_extractor import html_to_text, try_extract_from_dom
from recipe_importer.app.services.html_import.html_fetcher import fetch_html
from recipe_importer.app.services.html_import.schema_org import extract_recipe_from_schema_org
from recipe_importer.app.services.pdf_import.layout import PageContent, extract_document_text
from recipe_importer.app.services.pdf_import.reader import read_pdf_pages
from recipe_importer.app.services.segmentation.models import SplitResult
from recipe_importer.app.services.segmentation.normalizer import normalize_whitespace
from recipe_importer.app.services.segmentation.segmenter import split_recipe_text

logger = logging.getLogger(__name__)

HtmlStrategy = Callable[[BeautifulSoup, str], Optional[SplitResult]]


def _schema_org_strategy(soup: BeautifulSoup, html: str) -> Optional[SplitResult]:
    return extract_recipe_from_schema_org(soup)


def _dom_strategy(soup: BeautifulSoup, html: str) -> Optional[SplitResult]:
    return try_extract_from_dom(soup)


def _plain_text_strategy(soup: BeautifulSoup, html: str) -> Optional[SplitResult]:
    text = html_to_text(html)
    if not text.strip():
        return None
    return split_recipe_text(text)


HTML_STRATEGIES: Tuple[Tuple[str, HtmlStrategy], ...] = (
    ("schema_org_json_ld", _schema_org_strategy),
    ("dom", _dom_strategy),
    ("plain_text", _plain_text_strategy),
)


def run_html_strategies(
    html: str, strategies: Sequence[Tuple[str, HtmlStrategy]] = HTML_STRATEGIES
) -> Tuple[Optional[str], Optional[SplitResult]]:
    """Try each strategy in order; the first non-``None`` result wins."""
    soup = BeautifulSoup(html, "lxml")
    for name, strategy in strategies:
        try:
            result = strategy(soup, html)
        except Exception as exc:  # noqa: BLE001
            logger.warning("HTML import strategy %s failed: %s", name, exc)
            continue
        if result is not None:
            logger.info("HTML import strategy %s succeeded", name)
            return name, result
        logger.debug("HTML import strategy %s found nothing", name)
    return None, None


def _dump(dump: Optional[DebugDumpService], category: str, raw_text: str, split: SplitResult) -> None:
    dump = dump or DebugDumpService()
    dump.dump_split(category, raw_text, split)


def import_recipe_from_text(text: str, dump: Optional[DebugDumpService] = None) -> ImportResult:
    raw = normalize_whitespace(text or "")
    if not raw:
        return ImportResult.failure("No text found.")
    try:
        split = split_recipe_text(raw)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Text import failed")
        return ImportResult.failure(f"Text import failed: {exc}")
    _dump(dump, "Text Import", raw, split)
    return ImportResult.from_split(split)


def import_recipe_from_html(
    html: str, dump: Optional[DebugDumpService] = None, category: str = "HTML Import"
) -> ImportResult:
    if not html or not html.strip():
        return ImportResult.failure("No text found in HTML.")
    try:
        strategy, split = run_html_strategies(html)
        if split is None:
            return ImportResult.failure("No text found in HTML.")
        logger.info(
            "Imported HTML via %s: title=%s ingredients=%d steps=%d",
            strategy,
            split.title[:50],
            len(split.ingredients.splitlines()),
            len(split.steps.splitlines()),
        )
        _dump(dump, category, html_to_text(html), split)
        return ImportResult.from_split(split)
    except Exception as exc:  # noqa: BLE001
        logger.exception("HTML import failed")
        return ImportResult.failure(f"HTML import failed: {exc}")


async def import_recipe_from_url(url: str, dump: Optional[DebugDumpService] = None) -> ImportResult:
    try:
        html = await fetch_html(url)
    except ValueError as exc:
        logger.warning("Rejected URL %s: %s", url, exc)
        return ImportResult.failure(f"HTML import failed: {exc}")
    except httpx.HTTPStatusError as exc:
        logger.exception("Failed to fetch URL %s (status=%s)", url, exc.response.status_code)
        return ImportResult.failure(f"HTML import failed: status {exc.response.status_code}")
    except httpx.HTTPError as exc:
        logger.exception("Failed to fetch URL %s", url)
        return ImportResult.failure(f"HTML import failed: {exc}")

    if not html or not html.strip():
        return ImportResult.failure("Empty response")
    return import_recipe_from_html(html, dump=dump, category="URL Import")


def import_recipe_from_pages(
    pages: Sequence[PageContent], dump: Optional[DebugDumpService] = None
) -> ImportResult:
    raw = extract_document_text(pages)
    if not raw.strip():
        return ImportResult.failure("No text found in PDF.")
    split = split_recipe_text(raw)
    _dump(dump, "PDF Import", raw, split)
    return ImportResult.from_split(split)


def import_recipe_from_pdf(data: bytes, dump: Optional[DebugDumpService] = None) -> ImportResult:
    try:
        pages = read_pdf_pages(data)
        return import_recipe_from_pages(pages, dump=dump)
    except Exception as exc:  # noqa: BLE001
        logger.exception("PDF import failed")
        return ImportResult.failure(f"PDF import failed: {exc}")
