"""Application configuration."""
from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

OutputFormat = Literal["elements", "cytoscape", "mermaid"]


class Settings(BaseSettings):
    """Runtime settings loaded from .env and AVFLOW_* environment variables."""

    model_config = SettingsConfigDict(env_prefix="AVFLOW_", env_file=".env", env_file_encoding="utf-8", extra="ignore")

    log_level: str = "WARNING"
    output_indent: int = 2
    output_format: OutputFormat = "elements"


settings = Settings()
