"""Split plain recipe text into title, servings, ingredients, steps and equipment.

The segmenter works over a flat list of lines and never looks at markup or
page geometry; HTML and PDF imports reduce their input to text first. All scan
state lives in local variables so any helper can be run on an arbitrary
sub-range of lines.
"""

import logging
import re
from typing import List, Optional, Sequence, Tuple

from recipe_importer.app.services.segmentation.classifier import (
    is_continuation_line,
    is_equipment_line,
    is_heading_line,
    is_ingredient_line,
    is_junk_line,
    is_meta_line,
    is_section_boundary,
    is_step_heading,
    is_step_line,
    is_stop_line,
    is_subsection_heading,
)
from recipe_importer.app.services.segmentation.constants import (
    BANNER_SCAN_LINES,
    DEFAULT_TITLE,
    INGREDIENT_RUN_GRACE,
    MAX_EQUIPMENT_LINES,
)
from recipe_importer.app.services.segmentation.models import (
    NO_RUN,
    CapturedStep,
    IngredientRun,
    SplitResult,
)
from recipe_importer.app.services.segmentation.normalizer import join_lines, split_lines
from recipe_importer.app.services.segmentation.parsing_utils import (
    COOK_RE,
    PREP_RE,
    TOTAL_RE,
    parse_labeled_duration,
    parse_servings_from_text,
)
from recipe_importer.app.services.segmentation.tagging import (
    dedupe_steps,
    is_tag_line,
    join_continuation,
    render_steps,
    subsection_tag,
    tag_ingredient_sublists,
)

logger = logging.getLogger(__name__)

INGREDIENTS_HEADER = r"ingredients?"
DIRECTIONS_HEADER = r"(?:directions?|instructions?|method|steps|preparation|cooking(?:\s+steps)?)"
EQUIPMENT_HEADER = r"(?:equipment|tools?)"
# Looser anchor used when no classic directions header exists.
STAGE_HEADER_RE = re.compile(
    r"(?:^|\b)(?:instructions?|directions?|method|prep\s*work|make\s*the\s*meat\s*sauce"
    r"|preheat.*noodles|assemble|bake|cooking(?:\s*steps)?)\b",
    re.I,
)


def find_header_index(lines: Sequence[str], pattern: str) -> int:
    """Index of the first line that is exactly the given header, or -1."""
    header_re = re.compile(rf"^\s*{pattern}\s*:?\s*$", re.I)
    for idx, line in enumerate(lines):
        if header_re.match(line):
            return idx
    return -1


def find_section_headers(lines: Sequence[str]) -> Tuple[int, int, int]:
    """Return the (ingredients, directions, equipment) header indices."""
    return (
        find_header_index(lines, INGREDIENTS_HEADER),
        find_header_index(lines, DIRECTIONS_HEADER),
        find_header_index(lines, EQUIPMENT_HEADER),
    )


def remove_header_banner(lines: List[str]) -> List[str]:
    """Drop a leading cluster of two or more heading lines left by printed page headers."""
    count = 0
    for line in lines[:BANNER_SCAN_LINES]:
        if not (is_heading_line(line) or is_step_heading(line)):
            break
        count += 1
    if count >= 2:
        logger.debug("Removing %s banner heading lines", count)
        return lines[count:]
    return lines


def find_max_ingredient_run(
    lines: Sequence[str],
    start: int = 0,
    end: Optional[int] = None,
    grace_budget: int = INGREDIENT_RUN_GRACE,
) -> IngredientRun:
    """Find the longest run of ingredient lines in ``lines[start:end]``.

    Up to ``grace_budget`` sub-heading lines may interrupt a run without
    closing it. Runs are compared by their number of ingredient lines and ties
    keep the earliest run. The returned span ends at the last ingredient line.
    """
    end = len(lines) if end is None else end
    best, best_count = NO_RUN, 0
    run_start, run_last, run_count, grace = -1, -1, 0, 0

    for idx in range(start, end):
        line = lines[idx]
        if is_ingredient_line(line):
            if run_start < 0:
                run_start, run_count, grace = idx, 0, 0
            run_last = idx
            run_count += 1
            continue
        if (
            run_start >= 0
            and grace < grace_budget
            and is_subsection_heading(line)
            and not is_heading_line(line)
        ):
            grace += 1
            continue
        if run_start >= 0 and run_count > best_count:
            best, best_count = IngredientRun(run_start, run_last - run_start + 1), run_count
        run_start, run_last, run_count, grace = -1, -1, 0, 0

    if run_start >= 0 and run_count > best_count:
        best = IngredientRun(run_start, run_last - run_start + 1)
    return best


def count_ingredient_lines(lines: Sequence[str], run: IngredientRun) -> int:
    if not run.found:
        return 0
    return sum(1 for line in lines[run.start:run.end] if is_ingredient_line(line))


def capture_steps_in_range(lines: Sequence[str], start: int, end: int) -> List[CapturedStep]:
    """Collect step entries from ``lines[start:end]`` in a single forward scan."""
    captured: List[CapturedStep] = []
    current: Optional[str] = None
    current_tag: Optional[str] = None
    pending_tag: Optional[str] = None

    def flush() -> None:
        nonlocal current, current_tag
        if current and current.strip():
            captured.append(CapturedStep(current.strip(), current_tag))
        current, current_tag = None, None

    idx = max(start, 0)
    end = min(end, len(lines))
    while idx < end:
        line = lines[idx]
        if is_section_boundary(line):
            break
        if is_step_heading(line):
            flush()
            following = lines[idx + 1] if idx + 1 < end else ""
            if following and not (
                is_heading_line(following) or is_junk_line(following) or is_ingredient_line(following)
            ):
                current, current_tag, pending_tag = following, pending_tag, None
                idx += 2
                continue
            idx += 1
            continue
        if is_stop_line(line):
            break
        if is_subsection_heading(line):
            flush()
            pending_tag = subsection_tag(line)
        elif is_step_line(line):
            flush()
            current, current_tag, pending_tag = line, pending_tag, None
        elif current is not None and is_continuation_line(line):
            current = join_continuation(current, line)
        idx += 1

    flush()
    return captured


def first_step_index(lines: Sequence[str], start: int) -> int:
    """First step line or "Step N" label at or after ``start``, or -1."""
    for idx in range(max(start, 0), len(lines)):
        if is_step_line(lines[idx]) or is_step_heading(lines[idx]):
            return idx
    return -1


def slice_section(lines: Sequence[str], header_idx: int, *other_headers: int) -> List[str]:
    """Lines after ``header_idx`` up to the next of ``other_headers`` that follows it."""
    if header_idx < 0:
        return []
    following = [idx for idx in other_headers if idx > header_idx]
    stop = min(following) if following else len(lines)
    return list(lines[header_idx + 1:stop])


def fallback_steps(
    lines: Sequence[str], directions_idx: int, ingredients_idx: int, equipment_idx: int
) -> List[CapturedStep]:
    """Steps from the directions (or stage) section when no step follows the ingredients."""
    start_idx = directions_idx
    if start_idx < 0:
        start_idx = next((idx for idx, line in enumerate(lines) if STAGE_HEADER_RE.search(line)), -1)
    if start_idx < 0:
        return []
    section = slice_section(lines, start_idx, ingredients_idx, equipment_idx)
    logger.debug("Falling back to %s lines after header %r", len(section), lines[start_idx])
    return [CapturedStep(line) for line in section if is_step_line(line)]


def collect_equipment(lines: Sequence[str], run: IngredientRun, gap_end: int) -> List[str]:
    gap = lines[run.end:gap_end]
    equipment = [
        line
        for line in gap
        if not is_subsection_heading(line) and not is_step_line(line) and is_equipment_line(line)
    ]
    return equipment[:MAX_EQUIPMENT_LINES]


def prune_steps_from_ingredients(ingredient_lines: List[str]) -> List[str]:
    """Remove step lines that leaked into the ingredients, keeping at least two lines."""
    pruned = [line for line in ingredient_lines if not is_step_line(line)]
    kept = [line for line in pruned if not is_tag_line(line)]
    if len(kept) < 2:
        return ingredient_lines
    # a tag whose line was pruned would dangle
    return [
        line
        for idx, line in enumerate(pruned)
        if not is_tag_line(line) or (idx + 1 < len(pruned) and not is_tag_line(pruned[idx + 1]))
    ]


def find_title(lines: Sequence[str]) -> str:
    for line in lines:
        if not is_heading_line(line) and not is_junk_line(line):
            return line
    return DEFAULT_TITLE


def parse_meta(lines: Sequence[str]) -> Tuple[str, Optional[int], Optional[int], Optional[int]]:
    """Servings and prep/cook/total minutes from the first meta line."""
    meta = next((line for line in lines if is_meta_line(line)), None)
    if meta is None:
        return "", None, None, None
    logger.debug("Meta line: %r", meta)
    return (
        parse_servings_from_text(meta),
        parse_labeled_duration(meta, PREP_RE),
        parse_labeled_duration(meta, COOK_RE),
        parse_labeled_duration(meta, TOTAL_RE),
    )


def split_recipe_text(text: str) -> SplitResult:
    """Segment one recipe document; missing fields come back empty."""
    all_lines = split_lines(text)
    title = find_title(all_lines)
    servings, prep_minutes, cook_minutes, total_minutes = parse_meta(all_lines)

    lines = [line for line in all_lines if not is_meta_line(line) and not is_junk_line(line)]
    lines = remove_header_banner(lines)
    ingredients_idx, directions_idx, equipment_idx = find_section_headers(lines)

    run = find_max_ingredient_run(lines)
    ingredient_lines: List[str] = []
    if count_ingredient_lines(lines, run) >= 2:
        ingredient_lines = tag_ingredient_sublists(lines, run)
    logger.debug("Ingredient run %s with %s output lines", run, len(ingredient_lines))

    if run.found:
        pre_end = run.start
    elif ingredients_idx >= 0:
        pre_end = ingredients_idx
    else:
        pre_end = len(lines)
    captured = capture_steps_in_range(lines, 0, pre_end)

    post_start = first_step_index(lines, run.end if run.found else pre_end)
    if post_start >= 0:
        scan_from = post_start
        if post_start > 0 and is_subsection_heading(lines[post_start - 1]):
            scan_from = post_start - 1
        captured.extend(capture_steps_in_range(lines, scan_from, len(lines)))
    else:
        captured.extend(fallback_steps(lines, directions_idx, ingredients_idx, equipment_idx))

    step_lines = render_steps(dedupe_steps(captured))

    equipment: List[str] = []
    if ingredient_lines and step_lines and run.found:
        gap_end = post_start if post_start >= 0 else len(lines)
        equipment = collect_equipment(lines, run, gap_end)

    if ingredient_lines:
        ingredient_lines = prune_steps_from_ingredients(ingredient_lines)

    logger.debug(
        "Segmented %s lines: %s ingredients, %s steps, %s equipment",
        len(lines),
        len(ingredient_lines),
        len(step_lines),
        len(equipment),
    )
    return SplitResult(
        title=title,
        servings=servings,
        ingredients=join_lines(ingredient_lines),
        steps=join_lines(step_lines),
        equipment=join_lines(equipment),
        prep_minutes=prep_minutes,
        cook_minutes=cook_minutes,
        total_minutes=total_minutes,
    )
