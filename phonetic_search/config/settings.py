"""Application settings and configuration management."""

from functools import lru_cache
from typing import Dict, List, Optional, Union

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Application
    app_name: str = Field(default="Phonetic Search")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    workers: int = Field(default=1)

    # Index building
    source_dir: Optional[str] = Field(default=None)
    match: List[str] = Field(default=["**/*.htm", "**/*.html"])
    index_fields: Dict[str, Union[bool, str]] = Field(
        default={"title": True, "keywords": True, "contents": "html"}
    )
    destination_json: str = Field(default="index.json")
    index_path: Optional[str] = Field(default=None)  # prebuilt artifact to serve
    url_prefix: str = Field(default="/")
    build_workers: int = Field(default=1)

    # Search Configuration
    max_query_length: int = Field(default=200)
    max_results: Optional[int] = Field(default=None)  # None returns every match

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")

    # CORS
    cors_origins: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:8080", "http://localhost:8000"]
    )

    model_config = SettingsConfigDict(
        env_prefix="PHONETIC_SEARCH_",
        case_sensitive=False,
        extra="ignore"  # Ignore extra environment variables
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings, loading a local .env file first."""
    load_dotenv()
    return Settings()
