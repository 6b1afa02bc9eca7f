"""Schema.org JSON-LD recipe extraction."""

import html
import json
import logging
from typing import Iterable, List, Optional

from bs4 import BeautifulSoup

from recipe_importer.app.services.segmentation.constants import DEFAULT_TITLE
from recipe_importer.app.services.segmentation.models import SplitResult
from recipe_importer.app.services.segmentation.normalizer import clean_text, join_lines
from recipe_importer.app.services.segmentation.parsing_utils import (
    parse_iso8601_duration,
    parse_servings_value,
)
from recipe_importer.app.services.segmentation.tagging import format_tag

logger = logging.getLogger(__name__)


def _iter_candidates(data) -> Iterable[dict]:
    if isinstance(data, dict) and "@graph" in data:
        graph = data.get("@graph") or []
        if isinstance(graph, list):
            logger.info("Found @graph with %d items", len(graph))
            yield from (item for item in graph if isinstance(item, dict))
    if isinstance(data, list):
        logger.info("JSON-LD is a list with %d items", len(data))
        yield from (item for item in data if isinstance(item, dict))
    elif isinstance(data, dict):
        yield data


def _is_recipe(obj: dict) -> bool:
    obj_type = obj.get("@type")
    if not obj_type:
        return False
    types = [obj_type] if isinstance(obj_type, str) else obj_type
    return any(str(t).lower() == "recipe" for t in types)


def _coerce_text(value) -> str:
    """A JSON-LD text value: strings as is, the first string of a list, else empty."""
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        return next((item for item in value if isinstance(item, str)), "")
    return ""


def _clean_value(value) -> str:
    # JSON-LD strings are not entity-decoded by the HTML parser
    return clean_text(html.unescape(_coerce_text(value)))


def _named_text(entry: dict) -> str:
    return _clean_value(entry.get("name")) or _clean_value(entry.get("text"))


def _text_list(value) -> List[str]:
    """Flatten a string, list of strings or list of named things into clean lines."""
    if isinstance(value, str):
        cleaned = _clean_value(value)
        return [cleaned] if cleaned else []
    lines: List[str] = []
    entries = value if isinstance(value, list) else [value] if isinstance(value, dict) else []
    for entry in entries:
        cleaned = _named_text(entry) if isinstance(entry, dict) else _clean_value(entry)
        if cleaned:
            lines.append(cleaned)
    return lines


def extract_instruction_lines(instructions) -> List[str]:
    """Step lines from ``recipeInstructions``; a HowToSection name becomes a ``[Tag]`` line."""
    steps: List[str] = []
    if isinstance(instructions, str):
        return [line for line in (_clean_value(part) for part in instructions.splitlines()) if line]
    if not isinstance(instructions, list):
        return steps
    for entry in instructions:
        if isinstance(entry, str):
            cleaned = _clean_value(entry)
            if cleaned:
                steps.append(cleaned)
        elif isinstance(entry, dict):
            entry_type = _coerce_text(entry.get("@type"))
            if entry_type.lower() == "howtosection":
                section_steps = extract_instruction_lines(entry.get("itemListElement") or [])
                name = _clean_value(entry.get("name"))
                if name and section_steps:
                    steps.append(format_tag(name))
                steps.extend(section_steps)
                continue
            cleaned = _clean_value(entry.get("text")) or _clean_value(entry.get("description"))
            if cleaned:
                steps.append(cleaned)
    return steps


def extract_recipe_from_schema_org(soup: BeautifulSoup) -> Optional[SplitResult]:
    """Extract a recipe from schema.org JSON-LD data embedded in the page."""
    scripts = soup.find_all("script", attrs={"type": "application/ld+json"})
    logger.info("Found %d JSON-LD script blocks", len(scripts))

    for idx, script in enumerate(scripts):
        raw_json = script.string or script.get_text()
        if not raw_json:
            logger.debug("JSON-LD block %d is empty", idx)
            continue
        try:
            data = json.loads(raw_json)
        except json.JSONDecodeError as exc:
            logger.warning(
                "JSON-LD block %d failed to parse: %s (first 200 chars: %s)",
                idx,
                exc,
                raw_json[:200],
            )
            continue

        for obj_idx, obj in enumerate(_iter_candidates(data)):
            if not _is_recipe(obj):
                logger.debug("Candidate %d is not a Recipe, skipping", obj_idx)
                continue

            ingredients = _text_list(obj.get("recipeIngredient") or [])
            steps = extract_instruction_lines(obj.get("recipeInstructions") or [])
            logger.info(
                "Recipe candidate %d: ingredients=%d, steps=%d",
                obj_idx,
                len(ingredients),
                len(steps),
            )
            if not ingredients and not steps:
                continue

            return SplitResult(
                title=_clean_value(obj.get("name")) or DEFAULT_TITLE,
                servings=parse_servings_value(obj.get("recipeYield")),
                ingredients=join_lines(ingredients),
                steps=join_lines(steps),
                equipment=join_lines(_text_list(obj.get("tool") or [])),
                prep_minutes=parse_iso8601_duration(obj.get("prepTime")),
                cook_minutes=parse_iso8601_duration(obj.get("cookTime")),
                total_minutes=parse_iso8601_duration(obj.get("totalTime")),
            )
    return None
