from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Base configuration for the requisite parser and its API."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False
    )

    cors_origins: list[str] = Field(default=["http://localhost:5173", "http://localhost:3000"])

    log_level: str = Field(default="INFO")
    log_format: str = Field(default="%(asctime)s %(levelname)s [%(name)s] %(message)s")

    # grade assumed when a requisite names a course without one
    default_min_grade: str = Field(default="D")
    output_dir: str = Field(default="./data")

settings = Settings()
