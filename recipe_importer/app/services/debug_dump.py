"""Optional on-disk transcript of each import for diagnosing segmentation."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from recipe_importer.app.core.config import get_settings
from recipe_importer.app.services.segmentation.models import SplitResult

logger = logging.getLogger(__name__)


def format_transcript(raw_text: str, split: SplitResult) -> str:
    return "\n".join(
        [
            "RAW TEXT:",
            raw_text,
            "",
            "== SPLIT RESULT ==",
            f"Title: {split.title}",
            f"Servings: {split.servings}",
            f"Prep minutes: {split.prep_minutes if split.prep_minutes is not None else ''}",
            f"Cook minutes: {split.cook_minutes if split.cook_minutes is not None else ''}",
            f"Total minutes: {split.total_minutes if split.total_minutes is not None else ''}",
            "",
            "[EQUIPMENT]",
            split.equipment,
            "",
            "[INGREDIENTS]",
            split.ingredients,
            "",
            "[STEPS]",
            split.steps,
        ]
    )


class DebugDumpService:
    def __init__(self, enabled: Optional[bool] = None, base_dir: Optional[Path] = None) -> None:
        settings = get_settings()
        self.enabled = settings.recipe_debug_dump_enabled if enabled is None else enabled
        self.base_dir = Path(base_dir or settings.recipe_debug_dump_dir)
        self.last_path: Optional[Path] = None

    def append(self, category: str, content: str) -> Optional[Path]:
        """Write one transcript file; returns its path, or ``None`` when disabled or failed."""
        if not self.enabled:
            return None
        now = datetime.now()
        path = self.base_dir / f"RecipeImports-{now:%Y%m%d-%H%M%S}.log"
        header = f"===== [{now:%H:%M:%S}] {category} =====\n"
        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                f.write(header + content + "\n\n")
        except Exception as exc:  # noqa: BLE001
            logger.warning("Failed to write import transcript: %s", exc)
            return None
        self.last_path = path
        logger.info("Import transcript saved to %s", path)
        return path

    def dump_split(self, category: str, raw_text: str, split: SplitResult) -> Optional[Path]:
        if not self.enabled:
            return None
        return self.append(category, format_transcript(raw_text, split))
