"""Application configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    data_dir: Path = Path(".")
    templates_dir: Path | None = None
    host: str = "127.0.0.1"
    port: int = 8080
    debug: bool = False
    app_title: str = "PageWiki"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="PAGEWIKI_",
        env_file=".env",
        env_file_encoding="utf-8",
    )


settings = Settings()
