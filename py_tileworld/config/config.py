"""Configuration management."""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings pulled from environment variables."""

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="plain", description="Logging format (plain or json)")

    # World Generation Configuration
    default_preset: str = Field(default="default", description="Preset used when none is given")
    max_world_width: int = Field(default=512, description="Max allowed world width")
    max_world_height: int = Field(default=512, description="Max allowed world height")
    max_lake_count: int = Field(default=256, description="Max lakes per world")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Instantiate singleton settings object
settings = Settings()
