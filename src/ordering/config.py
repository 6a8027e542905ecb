"""Runtime settings for the Ordering service."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    jwt_secret: str = Field(
        default="cartline-development-secret-change-me",
        description="Secret used to verify bearer tokens",
    )
    jwt_algorithm: str = Field(default="HS256")
    cart_conflict_retries: int = Field(
        default=3,
        ge=0,
        description="How many times a cart mutation is re-run after a concurrent write",
    )
    log_dir: Path = Field(default=Path("logs"))
    log_file_prefix: str = Field(default="cartline")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="CARTLINE_",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
