from fastapi import APIRouter, File, HTTPException, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from recipe_importer.app.core.config import get_settings
from recipe_importer.app.schemas.import_result import (
    ImportHtmlRequest,
    ImportResult,
    ImportTextRequest,
    ImportUrlRequest,
)
from recipe_importer.app.services import import_service

router = APIRouter(prefix="/recipes/import", tags=["import"])


@router.post("/url", response_model=ImportResult)
async def import_from_url(payload: ImportUrlRequest) -> ImportResult:
    return await import_service.import_recipe_from_url(payload.url)


@router.post("/html", response_model=ImportResult)
def import_from_html(payload: ImportHtmlRequest) -> ImportResult:
    return import_service.import_recipe_from_html(payload.html)


@router.post("/text", response_model=ImportResult)
def import_from_text(payload: ImportTextRequest) -> ImportResult:
    return import_service.import_recipe_from_text(payload.text)


@router.post("/pdf", response_model=ImportResult)
async def import_from_pdf(file: UploadFile = File(...)) -> ImportResult:
    settings = get_settings()
    data = await file.read(settings.recipe_pdf_max_bytes + 1)
    if len(data) > settings.recipe_pdf_max_bytes:
        raise HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail="PDF too large")
    if not data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Empty PDF upload")
    return await run_in_threadpool(import_service.import_recipe_from_pdf, data)
