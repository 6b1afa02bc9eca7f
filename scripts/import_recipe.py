#!/usr/bin/env python
"""
Import a recipe from a local file or a URL and print the recovered fields.

Run manually:
    python scripts/import_recipe.py path/to/recipe.pdf
    python scripts/import_recipe.py https://example.com/recipe --json
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path

from recipe_importer.app.core.config import get_settings
from recipe_importer.app.schemas.import_result import ImportResult
from recipe_importer.app.services import import_service

logging.basicConfig(level=get_settings().log_level.upper())
logger = logging.getLogger("import_recipe")


def run_import(source: str) -> ImportResult:
    if source.startswith(("http://", "https://")):
        return asyncio.run(import_service.import_recipe_from_url(source))

    path = Path(source)
    if not path.is_file():
        return ImportResult.failure(f"File not found: {source}")
    suffix = path.suffix.lower()
    if suffix == ".pdf":
        return import_service.import_recipe_from_pdf(path.read_bytes())
    text = path.read_text(encoding="utf-8", errors="replace")
    if suffix in {".html", ".htm"}:
        return import_service.import_recipe_from_html(text)
    return import_service.import_recipe_from_text(text)


def print_result(result: ImportResult) -> None:
    if not result.success:
        print(f"Import failed: {result.error}")
        return
    print(f"Title: {result.title}")
    print(f"Servings: {result.servings}")
    for label, body in (
        ("EQUIPMENT", result.equipment),
        ("INGREDIENTS", result.ingredients_text),
        ("STEPS", result.steps),
    ):
        print()
        print(f"[{label}]")
        print(body or "")


def main() -> int:
    parser = argparse.ArgumentParser(description="Import a recipe from a PDF, HTML, text file or URL")
    parser.add_argument("source", help="Path to a .pdf/.html/.txt file, or an http(s) URL")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    args = parser.parse_args()

    logger.info("Importing %s", args.source)
    result = run_import(args.source)
    if args.json:
        print(result.model_dump_json(indent=2))
    else:
        print_result(result)
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
