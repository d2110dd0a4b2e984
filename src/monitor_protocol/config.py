"""Runtime settings for the protocol library.

Values come from a ``.env`` file overlaid by the process environment, so hub
and agent deployments can tune logging without code changes. The file is only
read; ``os.environ`` is never modified.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

import dotenv
from pydantic import BaseModel, field_validator

ENV_PREFIX = "MONITOR_PROTOCOL_"

_settings: Optional["ProtocolSettings"] = None


class ProtocolSettings(BaseModel):
    log_level: int = logging.INFO
    # unset -> stream logging only
    log_dir: Optional[str] = None

    @field_validator("log_level", mode="before")
    def _coerce_level(cls, v):
        if isinstance(v, int):
            return v
        text = str(v).strip()
        if text.isdigit():
            return int(text)
        level = logging.getLevelName(text.upper())
        if not isinstance(level, int):
            raise ValueError(f"unknown log level: {v!r}")
        return level

    @field_validator("log_dir", mode="before")
    def _blank_dir_is_none(cls, v):
        if v is None or not str(v).strip():
            return None
        return str(v)


def load_settings(dotenv_path: str | None = None) -> ProtocolSettings:
    """Load settings from ``.env`` and the environment.

    Variables set in the environment win over the ``.env`` file.
    """
    path = dotenv_path or os.environ.get(f"{ENV_PREFIX}DOTENV", ".env")
    values = {**dotenv.dotenv_values(path), **os.environ}
    raw = {}
    level = values.get(f"{ENV_PREFIX}LOG_LEVEL")
    if level is not None:
        raw["log_level"] = level
    log_dir = values.get(f"{ENV_PREFIX}LOG_DIR")
    if log_dir is not None:
        raw["log_dir"] = log_dir
    return ProtocolSettings(**raw)


def get_settings() -> ProtocolSettings:
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def reset_settings() -> None:
    global _settings
    _settings = None
