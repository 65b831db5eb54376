"""Settings for the cssmatrix command line, loadable from YAML or JSON."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator


class Settings(BaseModel):
    """Options shared by every ``cssmatrix`` subcommand."""

    safe_3d: bool = False
    precision: int = Field(default=6, ge=0, le=17)
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level


def load_settings(path: str | Path) -> Settings:
    """Load settings from a ``.yaml``/``.yml`` or ``.json`` file.

    Files with another suffix are read as YAML. An empty file gives the
    defaults.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    content = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        data = json.loads(content) if content.strip() else {}
    else:
        data = yaml.safe_load(content) or {}
    return Settings.model_validate(data)


def save_settings(settings: Settings, path: str | Path) -> None:
    path = Path(path)
    data = settings.model_dump(mode="json")
    with open(path, "w", encoding="utf-8") as f:
        if path.suffix.lower() == ".json":
            json.dump(data, f, indent=2)
        else:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
