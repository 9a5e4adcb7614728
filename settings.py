import logging
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    project_dir: Path = Path("./data")
    theme: str = "editorial"
    gallery_title: str = ""
    captions: bool = True
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="SPREADS_",
        env_file_encoding="utf-8",
    )

    @field_validator("theme")
    @classmethod
    def theme_must_not_be_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("theme must not be empty")
        return v

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {v}")
        return level

    @property
    def photos_dir(self) -> Path:
        return self.project_dir / "photos"

    @property
    def themes_dir(self) -> Path:
        return self.project_dir / "themes"

    @property
    def images_path(self) -> Path:
        """Image list exported by the gallery data layer, if any."""
        return self.project_dir / "images.json"

    @property
    def cache_dir(self) -> Path:
        return self.project_dir / ".cache"

    @property
    def images_cache_path(self) -> Path:
        return self.cache_dir / "images.json"

    @property
    def spread_plan_path(self) -> Path:
        return self.cache_dir / "spread_plan.json"
