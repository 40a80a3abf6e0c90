"""Application configuration

Settings are managed with Pydantic Settings and can be overridden through
environment variables or a local .env file.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Application
    APP_TITLE: str = "Manufacturing Workflow Engine"
    APP_DESCRIPTION: str = "Stage progression, quality gating and BOM validation API"
    APP_VERSION: str = "1.0.0"

    # Database - any SQLAlchemy URL; falls back to a local SQLite file
    DATABASE_URL: str = "sqlite:///./mfgtrack.db"
    ECHO_SQL: bool = False  # echo SQL statements to the log

    # Logging
    LOG_LEVEL: str = "INFO"

    # Engine rules
    BOM_SUM_TOLERANCE: float = 0.1  # allowed deviation of the component weight sum from 100%
    COMPLETION_THRESHOLD: float = 99.9  # stage percentage treated as "effectively complete"
    REQUIRE_PRE_STAGE_CHECKPOINT: bool = False  # strict mode: a passed pre-stage check is mandatory
    UIORN_MAX_ATTEMPTS: int = 5  # regeneration attempts when a UIORN collides


# Global settings instance
settings = Settings()
