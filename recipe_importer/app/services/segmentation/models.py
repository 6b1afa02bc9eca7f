"""Models shared by the segmentation pipeline."""

from enum import Enum
from typing import NamedTuple, Optional

from pydantic import BaseModel


class LineKind(str, Enum):
    HEADING = "heading"
    META = "meta"
    SUBHEADING = "subheading"
    INGREDIENT = "ingredient"
    STEP = "step"
    JUNK = "junk"
    EQUIPMENT = "equipment"
    PLAIN = "plain"


class IngredientRun(NamedTuple):
    """A span of ingredient lines; ``length`` counts grace sub-headings inside it."""

    start: int
    length: int

    @property
    def end(self) -> int:
        """Exclusive end index."""
        return self.start + self.length

    @property
    def found(self) -> bool:
        return self.start >= 0


NO_RUN = IngredientRun(-1, 0)


class CapturedStep(NamedTuple):
    text: str
    tag: Optional[str] = None


class SplitResult(BaseModel):
    """The five recipe fields recovered from one document, plus parsed meta times."""

    title: str
    servings: str = ""
    ingredients: str = ""
    steps: str = ""
    equipment: str = ""
    prep_minutes: Optional[int] = None
    cook_minutes: Optional[int] = None
    total_minutes: Optional[int] = None

    @property
    def has_content(self) -> bool:
        return bool(self.ingredients.strip() or self.steps.strip())
