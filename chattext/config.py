"""Configuration management with Pydantic Settings + optional YAML."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from chattext.utils.platform import default_config_file, get_data_dir


class ChatConfig(BaseModel):
    max_lines: int = Field(default=100, ge=1)
    history_limit: int = Field(default=1000, ge=1)


class ArchiveConfig(BaseModel):
    enabled: bool = False
    path: str = ""


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CHATTEXT_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    chat: ChatConfig = Field(default_factory=ChatConfig)
    archive: ArchiveConfig = Field(default_factory=ArchiveConfig)
    data_dir: str = ""
    log_level: str = "INFO"
    log_json: bool = False

    def get_data_dir(self) -> Path:
        if self.data_dir:
            return Path(self.data_dir)
        return get_data_dir()

    def get_archive_path(self) -> Path:
        if self.archive.path:
            return Path(self.archive.path)
        return self.get_data_dir() / "messages.db"


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from env vars, optionally overlaying a YAML config."""
    yaml_data: dict[str, Any] = {}

    if config_path is None:
        config_path = default_config_file()

    if config_path is not None:
        path = Path(config_path)
        if path.exists():
            with open(path) as f:
                yaml_data = yaml.safe_load(f) or {}

    # YAML values are init kwargs; drop the ones env vars should override
    env_settings = Settings()
    for key in env_settings.model_fields_set:
        yaml_data.pop(key, None)
    return Settings(**yaml_data)
