"""
Application configuration using Pydantic settings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # App
    app_name: str = "SmartBudget"
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite:///./data/db.sqlite"

    # Categorization engine
    categorization_cache_ttl_seconds: float = 300.0
    categorization_cache_max_entries: int = 1024

    # Bulk categorization jobs
    bulk_default_confidence_threshold: float = 0.7
    bulk_max_workers: int = 2
    bulk_max_retained_jobs: int = 1000

    # Feedback recording
    feedback_max_workers: int = 1

    # Server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    frontend_url: str = "http://localhost:5173"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
