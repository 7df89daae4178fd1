"""Application configuration — merges .env, env vars, and CLI args."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="POSTKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Paths
    content_dir: Path = Path("_posts")

    # Document format
    front_matter_delimiter: str = "---"
    excerpt_separator: str = "<!--more-->"
    default_layout: str = "post"
    extensions: list[str] = Field(default_factory=lambda: [".md", ".markdown"])

    # Listing
    preview_chars: int = 160

    def ensure_content_dir(self) -> None:
        self.content_dir.mkdir(parents=True, exist_ok=True)


def get_settings(**overrides: object) -> Settings:
    """Create settings with optional CLI overrides."""
    return Settings(**overrides)  # type: ignore[arg-type]
