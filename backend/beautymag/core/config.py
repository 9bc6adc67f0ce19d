from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # App
    app_name: str = "BeautyMag Catalog"
    debug: bool = False
    api_prefix: str = "/api/v1"

    # Catalog store
    catalog_path: str = "PRODUCTS_PAYLOAD.json"
    recent_tail_size: int = 5

    # Ingestion
    brand_tokens: list[str] = []  # empty -> free-text excerpt mode for documents
    content_base_url: str | None = None  # e.g. "https://beautymag.com/productos"
    excerpt_chars: int = 1000
    max_upload_mb: int = 20
    upload_tmp_dir: str | None = None  # None -> system temp dir

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    """Process settings for the HTTP layer. The pipeline takes Settings explicitly."""
    return Settings()
