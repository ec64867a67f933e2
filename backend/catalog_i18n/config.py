"""Application configuration."""

from pathlib import Path

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "Catalog i18n"
    debug: bool = True
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    frontend_port: int = 3000

    # Translation store (one directory per module, one JSON file per language)
    i18n_root: Path = Path(__file__).parent.parent.parent / "data" / "i18n"

    # Languages - the source language is always part of the list
    languages: list[str] = ["ja", "en", "zh-CN", "zh-TW"]
    source_language: str = "ja"

    # Scraper settings
    scrape_base_url: str = "https://oreno3d.com"
    scrape_request_delay: float = 1.0  # Delay between page requests (seconds)
    scrape_max_retries: int = 3
    scrape_timeout: float = 10.0
    scrape_user_agent: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )

    # CORS - dynamically built based on frontend_port
    cors_origins: list[str] = []

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Build CORS origins based on frontend port
        if not self.cors_origins:
            self.cors_origins = [
                f"http://localhost:{self.frontend_port}",
                f"http://127.0.0.1:{self.frontend_port}",
            ]

    @model_validator(mode="after")
    def _check_source_language(self) -> "Settings":
        if self.source_language not in self.languages:
            raise ValueError(
                f"source_language '{self.source_language}' must be one of {self.languages}"
            )
        return self

    @property
    def target_languages(self) -> list[str]:
        """Configured languages other than the source language."""
        return [lang for lang in self.languages if lang != self.source_language]


settings = Settings()
