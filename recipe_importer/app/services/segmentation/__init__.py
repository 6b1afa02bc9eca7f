"""Recipe text segmentation package.

Turns flat recipe text into a title, servings, ingredients, steps and
equipment using line classification and run detection.
"""

from recipe_importer.app.services.segmentation.classifier import (
    classify_line,
    is_continuation_line,
    is_equipment_line,
    is_heading_line,
    is_ingredient_line,
    is_junk_line,
    is_meta_line,
    is_step_heading,
    is_step_line,
    is_stop_line,
    is_subsection_heading,
)
from recipe_importer.app.services.segmentation.models import (
    CapturedStep,
    IngredientRun,
    LineKind,
    SplitResult,
)
from recipe_importer.app.services.segmentation.normalizer import (
    clean_text,
    normalize_whitespace,
    split_lines,
    strip_page_markers,
)
from recipe_importer.app.services.segmentation.segmenter import (
    capture_steps_in_range,
    find_max_ingredient_run,
    remove_header_banner,
    split_recipe_text,
)

__all__ = [
    # Models
    "CapturedStep",
    "IngredientRun",
    "LineKind",
    "SplitResult",
    # Classification
    "classify_line",
    "is_continuation_line",
    "is_equipment_line",
    "is_heading_line",
    "is_ingredient_line",
    "is_junk_line",
    "is_meta_line",
    "is_step_heading",
    "is_step_line",
    "is_stop_line",
    "is_subsection_heading",
    # Normalization
    "clean_text",
    "normalize_whitespace",
    "split_lines",
    "strip_page_markers",
    # Segmentation
    "capture_steps_in_range",
    "find_max_ingredient_run",
    "remove_header_banner",
    "split_recipe_text",
]
