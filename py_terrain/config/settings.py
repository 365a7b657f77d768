"""Application settings pulled from environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="PY_TERRAIN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="console", description="Logging format (console or json)")

    # Generation
    default_seed: str = Field(default="rivers", description="Seed used when none is given")
    default_preset: str = Field(default="lake", description="Contour preset used when none is given")
    output_dir: str = Field(default="./output", description="Directory for rendered networks")
    max_slope_map_size: int = Field(default=256, description="Largest accepted slope map side")

    # API Configuration
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")


settings = Settings()
