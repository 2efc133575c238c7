"""Application configuration."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Application
    app_name: str = "Marathon Manager"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:5173"]  # web client

    # Database
    database_url: str = "sqlite:///./data/marathon.db"

    # Pagination
    default_page_size: int = 10
    max_page_size: int = 100

    # Bib numbers (5 digits)
    bib_number_min: int = 10000
    bib_number_max: int = 99999
    bib_number_max_attempts: int = 10

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
