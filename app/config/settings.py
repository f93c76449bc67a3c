from pathlib import Path

from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def default_database_url() -> str:
    """SQLite file next to the project, used when DATABASE_URL is unset.

    Production points DATABASE_URL at PostgreSQL.
    """
    db_path = Path(__file__).parent.parent.parent / "disciplin.db"
    logger.warning("DATABASE_URL not set, using local SQLite database", path=str(db_path))
    return f"sqlite:///{db_path.resolve()}"


class Settings(BaseSettings):
    database_url: str = Field(
        default_factory=default_database_url,
        validation_alias="DATABASE_URL",
    )
    openai_api_key: str = Field(default="", validation_alias="OPENAI_API_KEY")
    frontend_url: str = Field(
        default="http://localhost:3000",
        validation_alias="FRONTEND_URL",
        description="Origin of the web frontend, allowed by CORS",
    )
    dev_user_id: str = Field(
        default="",
        validation_alias="DEV_USER_ID",
        description="User ID assumed when a request carries no X-User-Id header (local dev only)",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="LOG_FILE")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(sorted(valid_levels))}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("openai_api_key")
    @classmethod
    def validate_openai_api_key(cls, value: str) -> str:
        """Warn when the completion service cannot be reached.

        The classifier and profile endpoints keep working without a key.
        """
        if not value:
            logger.warning("OPENAI_API_KEY is not set. Sensei, Fuel and Vision features will not work.")
        return value


settings = Settings()
