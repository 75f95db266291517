"""Application configuration: settings schema, config.yaml loader, and logging setup"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from boardpost.core.preprocess import compile_rules


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "BOARDPOST_"
YAML_ENV_FIELDS = {"filter_rules"}   # env values parsed as YAML rather than taken as strings


class FilterRule(BaseModel):
    """A find/replace rule applied to every post before parsing."""
    pattern:      str = Field(..., description="Regular expression (Python re syntax)")
    replace_with: str = Field(default="", description=r"Replacement; \1 or \g<name> for groups")


class Settings(BaseModel):
    app_name:     str = "boardpost"
    db_url:       str = "sqlite:///boardpost.db"
    log_level:    str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    filter_rules: list[FilterRule] = Field(default_factory=list, description="Applied in order")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then BOARDPOST_<FIELD> env vars, then non-None CLI overrides.

    Filter rules are compiled here so a bad pattern fails at load time (RuleError)
    rather than on the first post.
    """
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            if name in YAML_ENV_FIELDS:
                try:
                    val = yaml.safe_load(val)
                except yaml.YAMLError as e:
                    raise ValueError(f"Invalid {ENV_PREFIX}{name.upper()}: {e}") from e
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    settings = Settings(**data)
    compile_rules(settings.filter_rules)
    return settings


def setup_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
