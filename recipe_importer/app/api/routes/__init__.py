from fastapi import APIRouter

from recipe_importer.app.api.routes import imports

api_router = APIRouter()
api_router.include_router(imports.router)
