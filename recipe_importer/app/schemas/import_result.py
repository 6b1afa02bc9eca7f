from typing import Optional

from pydantic import BaseModel

from recipe_importer.app.services.segmentation.models import SplitResult


class ImportResult(BaseModel):
    """Outcome of one import; content fields are ``None`` whenever ``success`` is false."""

    success: bool
    title: Optional[str] = None
    servings: Optional[str] = None
    ingredients_text: Optional[str] = None
    steps: Optional[str] = None
    equipment: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def from_split(cls, split: SplitResult) -> "ImportResult":
        return cls(
            success=True,
            title=split.title,
            servings=split.servings,
            ingredients_text=split.ingredients,
            steps=split.steps,
            equipment=split.equipment,
        )

    @classmethod
    def failure(cls, error: str) -> "ImportResult":
        return cls(success=False, error=error)


class ImportUrlRequest(BaseModel):
    url: str


class ImportHtmlRequest(BaseModel):
    html: str


class ImportTextRequest(BaseModel):
    text: str
