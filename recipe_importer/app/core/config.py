import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    scraper_user_agent: str = Field(
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 13_6) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0 Safari/537.36",
        alias="SCRAPER_USER_AGENT",
    )
    scraper_cookies: str | None = Field(None, alias="SCRAPER_COOKIES")
    recipe_http_fetch_enabled: bool = Field(True, alias="RECIPE_HTTP_FETCH_ENABLED")
    recipe_fetch_timeout_seconds: float = Field(15.0, alias="RECIPE_FETCH_TIMEOUT_SECONDS")
    recipe_pdf_max_bytes: int = Field(20 * 1024 * 1024, alias="RECIPE_PDF_MAX_BYTES")
    recipe_debug_dump_enabled: bool = Field(False, alias="RECIPE_DEBUG_DUMP_ENABLED")
    recipe_debug_dump_dir: Path = Field(Path("logs/recipe-imports"), alias="RECIPE_DEBUG_DUMP_DIR")

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")


logger = logging.getLogger(__name__)


@lru_cache
def get_settings() -> Settings:
    try:
        settings = Settings()
    except PermissionError:
        logger.warning("Unable to read .env; continuing with environment variables only")
        settings = Settings(_env_file=None)
    return settings
