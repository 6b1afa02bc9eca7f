"""DOM-structured recipe extraction from microdata and class/id containers."""

import logging
import re
from typing import Iterable, List, Optional, Sequence

from bs4 import BeautifulSoup, Tag

from recipe_importer.app.services.segmentation.constants import (
    DEFAULT_TITLE,
    FRACTION_CHARS,
    MAX_DOM_EQUIPMENT_ITEMS,
    MAX_EQUIPMENT_LINE_LENGTH,
)
from recipe_importer.app.services.segmentation.models import SplitResult
from recipe_importer.app.services.segmentation.normalizer import (
    clean_text,
    join_lines,
    normalize_whitespace,
)
from recipe_importer.app.services.segmentation.parsing_utils import (
    extract_first_integer,
    parse_servings_from_text,
)

logger = logging.getLogger(__name__)

INGREDIENT_HINTS = ("ingredient",)
INSTRUCTION_HINTS = ("instruction", "direction", "method", "step")
EQUIPMENT_HINTS = ("equipment", "tools")
SERVINGS_HINTS = ("serving", "yield")
TITLE_HINTS = ("title", "recipe", "post")

INLINE_QUANTITY_SPLIT_RE = re.compile(
    rf"(?<!\d)\s+(?=(?:\d+(?:\s+\d+/\d+)?|\d+/\d+|[{FRACTION_CHARS}]))"
)
NUMBERED_STEP_SPLIT_RE = re.compile(r"(?<=\S)\s+(?=\d+[.)]\s)")
SERVINGS_LABEL_RE = re.compile(r"Servings|Yield")

NOISE_TAGS = ["script", "style", "noscript", "nav", "footer", "aside", "form"]
BLOCK_TAGS = [
    "p",
    "div",
    "li",
    "ul",
    "ol",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "tr",
    "section",
    "article",
    "header",
    "table",
    "blockquote",
    "pre",
]


def _hint_text(tag: Tag) -> str:
    classes = tag.get("class") or []
    if isinstance(classes, str):
        classes = [classes]
    return f"{' '.join(classes)} {tag.get('id') or ''}".lower()


def has_hint(tag: Tag, hints: Sequence[str]) -> bool:
    """True when the tag's class or id contains any of ``hints``."""
    if not isinstance(tag, Tag):
        return False
    text = _hint_text(tag)
    return any(hint in text for hint in hints)


def node_text(node: Tag) -> str:
    return clean_text(node.get_text(" ", strip=True))


def _texts(nodes: Iterable[Tag], max_length: Optional[int] = None) -> List[str]:
    lines = []
    for node in nodes:
        text = node_text(node)
        if not text or (max_length is not None and len(text) > max_length):
            continue
        lines.append(text)
    return lines


def list_items_under_hint(soup: BeautifulSoup, hints: Sequence[str]) -> List[Tag]:
    """Every ``li`` with an ancestor hinting at ``hints``, in document order."""
    return [
        li for li in soup.find_all("li") if any(has_hint(parent, hints) for parent in li.parents)
    ]


def _is_title_class(value) -> bool:
    return bool(value) and any(hint in value.lower() for hint in TITLE_HINTS)


def extract_title(soup: BeautifulSoup) -> str:
    h1 = soup.find("h1", class_=_is_title_class) or soup.find("h1")
    if h1 and node_text(h1):
        return node_text(h1)
    item_name = soup.find(attrs={"itemprop": "name"})
    if item_name and node_text(item_name):
        return node_text(item_name)
    if soup.title and node_text(soup.title):
        return node_text(soup.title)
    return DEFAULT_TITLE


def extract_servings(soup: BeautifulSoup) -> str:
    yield_node = soup.find(attrs={"itemprop": "recipeYield"})
    if yield_node:
        return extract_first_integer(node_text(yield_node))

    hinted = soup.find(lambda tag: has_hint(tag, SERVINGS_HINTS))
    if hinted:
        text = node_text(hinted)
        return parse_servings_from_text(text) or extract_first_integer(text)

    for label in soup.find_all(string=SERVINGS_LABEL_RE):
        for node in (label.parent, label.parent.parent if label.parent else None):
            if node is None:
                continue
            servings = parse_servings_from_text(node_text(node))
            if servings:
                return servings
    return ""


def split_inline_ingredients(blob: str) -> List[str]:
    """Split a prose ingredient block wherever a fragment starts with a quantity."""
    parts = [part.strip() for part in INLINE_QUANTITY_SPLIT_RE.split(blob or "")]
    parts = [part for part in parts if part]
    return parts if len(parts) >= 2 else []


def select_ingredient_blob(soup: BeautifulSoup) -> str:
    node = soup.find(lambda tag: has_hint(tag, ("ingredients",)))
    if node is None or node.find("li"):
        return ""
    return node_text(node)


def select_ingredient_lines(soup: BeautifulSoup) -> List[str]:
    marked = soup.find_all(attrs={"itemprop": "recipeIngredient"})
    if marked:
        return _texts(marked)
    lines = _texts(list_items_under_hint(soup, INGREDIENT_HINTS))
    if lines:
        return lines
    blob = select_ingredient_blob(soup)
    if blob:
        logger.debug("Splitting inline ingredient block of %d chars", len(blob))
    return split_inline_ingredients(blob)


def split_into_step_lines(text: str) -> List[str]:
    """Split an instructions blob on line breaks, else on "1." / "1)" prefixes."""
    by_line = [clean_text(line) for line in normalize_whitespace(text).split("\n")]
    by_line = [line for line in by_line if line]
    if len(by_line) > 1:
        return by_line
    flat = clean_text(text)
    parts = [part.strip() for part in NUMBERED_STEP_SPLIT_RE.split(flat) if part.strip()]
    if len(parts) > 1:
        return parts
    return [flat] if flat else []


def select_instruction_lines(soup: BeautifulSoup) -> List[str]:
    steps: List[str] = []
    for container in soup.find_all(attrs={"itemprop": "recipeInstructions"}):
        text_nodes = container.find_all(attrs={"itemprop": "text"})
        if text_nodes:
            steps.extend(_texts(text_nodes))
            continue
        items = container.find_all("li")
        if items:
            steps.extend(_texts(items))
            continue
        steps.extend(split_into_step_lines(container.get_text("\n")))
    if steps:
        return steps
    return _texts(list_items_under_hint(soup, INSTRUCTION_HINTS))


def _is_equipment_header(tag: Tag) -> bool:
    if tag.name not in {"h2", "h3", "h4", "p", "strong"}:
        return False
    text = tag.get_text(" ", strip=True).lower()
    return "equipment" in text or "tools" in text


def select_equipment_lines(soup: BeautifulSoup) -> List[str]:
    header = soup.find(_is_equipment_header)
    if header is not None:
        found = header.find_next("ul") or header.find_next("ol")
        if found is not None:
            lines = _texts(found.find_all("li", recursive=False), MAX_EQUIPMENT_LINE_LENGTH)
            return lines[:MAX_DOM_EQUIPMENT_ITEMS]
    lines = _texts(list_items_under_hint(soup, EQUIPMENT_HINTS), MAX_EQUIPMENT_LINE_LENGTH)
    return lines[:MAX_DOM_EQUIPMENT_ITEMS]


def try_extract_from_dom(soup: BeautifulSoup) -> Optional[SplitResult]:
    """Structured extraction; ``None`` when neither ingredients nor steps were found."""
    ingredients = select_ingredient_lines(soup)
    steps = select_instruction_lines(soup)
    logger.info("DOM extraction: ingredients=%d, steps=%d", len(ingredients), len(steps))
    if not ingredients and not steps:
        return None
    return SplitResult(
        title=extract_title(soup),
        servings=extract_servings(soup),
        ingredients=join_lines(ingredients),
        steps=join_lines(steps),
        equipment=join_lines(select_equipment_lines(soup)),
    )


def html_to_text(html: str) -> str:
    """Flatten markup into text with one line per block element."""
    soup = BeautifulSoup(html or "", "lxml")
    for noisy in soup.find_all(NOISE_TAGS):
        noisy.decompose()
    for br in soup.find_all("br"):
        br.replace_with("\n")
    for block in soup.find_all(BLOCK_TAGS):
        block.insert_before("\n")
        block.append("\n")
    text = re.sub(r"[ \t\xa0]+", " ", soup.get_text())
    return normalize_whitespace(text)
