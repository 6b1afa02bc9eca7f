"""Sub-list tags and wrapped-line joining for ingredient and step output."""

import logging
from typing import Iterable, List, Optional

from recipe_importer.app.services.segmentation.classifier import (
    is_ingredient_line,
    is_subsection_heading,
)
from recipe_importer.app.services.segmentation.models import CapturedStep, IngredientRun

logger = logging.getLogger(__name__)


def subsection_tag(line: str) -> str:
    """"Cheese Filling:" -> "Cheese Filling"."""
    return line.strip().rstrip(":").strip()


def format_tag(tag: str) -> str:
    return f"[{tag}]"


def is_tag_line(line: str) -> bool:
    return line.startswith("[") and line.endswith("]")


def join_continuation(current: str, line: str) -> str:
    """Append wrapped overflow to a step, gluing hyphenated breaks without a space."""
    if current.endswith("-"):
        return current[:-1] + line.lstrip()
    return f"{current} {line.strip()}"


def tag_ingredient_sublists(lines: List[str], run: IngredientRun) -> List[str]:
    """Return the run's ingredient lines with ``[Tag]`` lines re-inserted.

    A sub-heading counts only when it sits immediately before a retained line,
    either just ahead of the run or inside it as a grace slot.
    """
    output: List[str] = []
    if not run.found:
        return output
    tag: Optional[str] = None
    for idx in range(run.end):
        line = lines[idx]
        if is_subsection_heading(line):
            tag = subsection_tag(line)
            continue
        if idx < run.start or not is_ingredient_line(line):
            tag = None
            continue
        if tag:
            logger.debug("Tagging ingredient sub-list %r", tag)
            output.append(format_tag(tag))
            tag = None
        output.append(line)
    return output


def dedupe_steps(steps: Iterable[CapturedStep]) -> List[CapturedStep]:
    seen = set()
    unique: List[CapturedStep] = []
    for step in steps:
        if not step.text.strip() or step.text in seen:
            continue
        seen.add(step.text)
        unique.append(step)
    return unique


def render_steps(steps: Iterable[CapturedStep]) -> List[str]:
    """Flatten captured steps into output lines, tags on their own line first."""
    output: List[str] = []
    for step in steps:
        if step.tag:
            output.append(format_tag(step.tag))
        output.append(step.text)
    return output
