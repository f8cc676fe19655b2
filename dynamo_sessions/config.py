"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    session_secret: str = "change-me-in-production"
    session_store: str = "memory"  # "memory" or "dynamodb"
    session_max_age: int = 24 * 3600  # seconds of inactivity
    session_https_only: bool = False
    dynamodb_table: str = "sessions"
    dynamodb_endpoint: str = ""  # For local DynamoDB
    aws_region: str = "us-west-2"

    model_config = {"env_prefix": "", "case_sensitive": False}


settings: Settings | None = None


def get_settings() -> Settings:
    global settings
    if settings is None:
        settings = Settings()
    return settings


def override_settings(s: Settings) -> None:
    """For testing: inject a Settings instance."""
    global settings
    settings = s
