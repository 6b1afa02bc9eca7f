"""Stateless line predicates used to segment recipe text.

Every predicate looks at a single line of text and nothing else, so the same
line always gets the same answer. ``classify_line`` evaluates the predicates as
a rule table in precedence order and returns the first kind that fires.
"""

import re
from typing import Callable, Tuple

from recipe_importer.app.services.segmentation.constants import (
    COOKWARE_WORDS,
    FRACTION_CHARS,
    HEADING_WORDS,
    IMPERATIVE_VERBS,
    INGREDIENT_UNIT_WORDS,
    MAX_EQUIPMENT_LINE_LENGTH,
    STEP_UNIT_WORDS,
    SUBSECTION_WORDS,
)
from recipe_importer.app.services.segmentation.models import LineKind

HEADING_RE = re.compile(rf"^\s*(?:{'|'.join(HEADING_WORDS)})\s*:?\s*$", re.I)
STEP_HEADING_RE = re.compile(r"^\s*Step\s+\d+\s*$", re.I)
SUBSECTION_RE = re.compile(rf"^\s*(?:{'|'.join(SUBSECTION_WORDS)})\s*:?\s*$", re.I)

NUTRITION_RE = re.compile(r"\b(?:per\s+serving|nutrition)\b", re.I)
SERVINGS_TERM_RE = re.compile(r"\b(?:yield|serves?|servings?)\b", re.I)
TIME_TERM_RE = re.compile(r"\b(?:prep|cook|total)\b", re.I)
TIME_UNIT_RE = re.compile(r"\b(?:min(?:ute)?s?|hours?)\b", re.I)

JUNK_RE = re.compile(r"^[\ufffd•\-–—*. ]+$")
BOM_RE = re.compile(r"^\ufeff$")

# "1 Wrap ..." is a numbered step, never an ingredient.
NUMBERED_CAPITAL_RE = re.compile(r"^\s*\d+\s+[A-Z][a-z]")
BULLET_PREFIXES = ("- ", "• ", "* ")

_ASCII_MIXED = r"\d+\s+\d+/\d+"
_UNICODE_ONLY = rf"[{FRACTION_CHARS}]"
_DIGIT_UNICODE = rf"\d+\s*{_UNICODE_ONLY}"
_RANGE = r"\d+\s*[–-]\s*\d+"
_PLAIN_NUMBER = r"\d+(?:[./]\d+)?"
QUANTITY = rf"(?:{_ASCII_MIXED}|{_DIGIT_UNICODE}|{_UNICODE_ONLY}|{_RANGE}|{_PLAIN_NUMBER})"

INGREDIENT_QTY_RE = re.compile(
    rf"^\s*{QUANTITY}\s+(?:(?:{'|'.join(INGREDIENT_UNIT_WORDS)})\b|[a-z].+)", re.I
)
TO_TASTE_RE = re.compile(r"\b(?:to taste|optional)\b", re.I)

NUMBERED_PREFIX_RE = re.compile(r"^\s*\d+\s*(?:[.)]\s*)?")
QTY_START_RE = re.compile(rf"^\s*(?:\d+(?:\s+\d+/\d+)?|\d+/\d+|[{FRACTION_CHARS}])\b")
UNIT_START_RE = re.compile(rf"^(?:{'|'.join(STEP_UNIT_WORDS)})\b", re.I)
IMPERATIVE_RE = re.compile(rf"^(?:{'|'.join(IMPERATIVE_VERBS)})\b", re.I)
CAPITAL_WORD_RE = re.compile(r"^[A-Z][a-z]")

COOKWARE_RE = re.compile(rf"\b(?:{'|'.join(COOKWARE_WORDS)})\b", re.I)
SENTENCE_END_RE = re.compile(r"[.!?]$")

STOP_RE = re.compile(r"^(?:notes\b|pro\s*tips?\b|nutrition\b|tested by\b|https?://)", re.I)
SECTION_BOUNDARY_RE = re.compile(r"^(?:ingredients?|equipment|nutrition|tested by)", re.I)


def is_step_heading(line: str) -> bool:
    """An explicit "Step N" label on a line of its own."""
    return bool(STEP_HEADING_RE.match(line))


def is_heading_line(line: str) -> bool:
    return bool(HEADING_RE.match(line)) or is_step_heading(line)


def is_subsection_heading(line: str) -> bool:
    """A label naming one component of a multi-part recipe (a filling, a sauce...)."""
    return bool(SUBSECTION_RE.match(line))


def is_meta_line(line: str) -> bool:
    """A yield line that also carries prep/cook/total times with explicit units."""
    if NUTRITION_RE.search(line):
        return False
    has_servings = bool(SERVINGS_TERM_RE.search(line))
    has_time = bool(TIME_TERM_RE.search(line)) and bool(TIME_UNIT_RE.search(line))
    return has_servings and has_time


def is_junk_line(line: str) -> bool:
    # replacement characters, stray bullets/dashes/dots or a lone BOM
    return bool(JUNK_RE.match(line)) or bool(BOM_RE.match(line))


def is_ingredient_line(line: str) -> bool:
    if not line or not line.strip():
        return False
    if NUMBERED_CAPITAL_RE.match(line):
        return False
    if line.startswith(BULLET_PREFIXES):
        return not is_junk_line(line)
    if INGREDIENT_QTY_RE.match(line):
        return True
    return bool(TO_TASTE_RE.search(line)) and not is_heading_line(line)


def is_step_line(line: str) -> bool:
    if not line or not line.strip():
        return False
    if is_heading_line(line) or is_ingredient_line(line):
        return False

    numbered = NUMBERED_PREFIX_RE.match(line)
    if numbered:
        rest = line[numbered.end():].lstrip()
        if QTY_START_RE.match(rest) or UNIT_START_RE.match(rest):
            return False
        return bool(IMPERATIVE_RE.match(rest) or CAPITAL_WORD_RE.match(rest))

    return bool(IMPERATIVE_RE.match(line))


def is_equipment_line(line: str) -> bool:
    """Short lines that are nothing else, likely cookware or tools."""
    if not line or not line.strip():
        return False
    if is_heading_line(line) or is_junk_line(line):
        return False
    if is_ingredient_line(line) or is_step_line(line):
        return False
    if len(line) > MAX_EQUIPMENT_LINE_LENGTH:
        return False
    return bool(COOKWARE_RE.search(line)) or not SENTENCE_END_RE.search(line)


def is_stop_line(line: str) -> bool:
    """Notes, tips, nutrition, attribution or URL lines end a run of steps."""
    return bool(STOP_RE.match(line))


def is_section_boundary(line: str) -> bool:
    return bool(SECTION_BOUNDARY_RE.match(line))


def is_continuation_line(line: str) -> bool:
    """Wrapped overflow of the previous step."""
    if not line or not line.strip():
        return False
    if is_heading_line(line) or is_junk_line(line):
        return False
    if is_ingredient_line(line) or is_step_line(line):
        return False
    return not is_stop_line(line)


CLASSIFICATION_RULES: Tuple[Tuple[LineKind, Callable[[str], bool]], ...] = (
    (LineKind.HEADING, is_heading_line),
    (LineKind.META, is_meta_line),
    (LineKind.SUBHEADING, is_subsection_heading),
    (LineKind.INGREDIENT, is_ingredient_line),
    (LineKind.STEP, is_step_line),
    (LineKind.JUNK, is_junk_line),
    (LineKind.EQUIPMENT, is_equipment_line),
)


def classify_line(line: str) -> LineKind:
    for kind, predicate in CLASSIFICATION_RULES:
        if predicate(line):
            return kind
    return LineKind.PLAIN
