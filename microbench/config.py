"""Harness settings: the sampling policy and log output.

Values come from a YAML file and ``MICROBENCH_*`` environment variables;
the environment wins, key by key, inside each section.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from microbench.logging import setup_logging
from microbench.sampling import SamplingPolicy


class LoggingConfig(BaseModel):
    level: str = "INFO"
    json_output: bool = False

    @field_validator("level")
    @classmethod
    def _validate_level(cls, value: str) -> str:
        normalized = value.upper()
        if normalized not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level: {value}")
        return normalized


class MicrobenchSettings(BaseSettings):
    sampling: SamplingPolicy = Field(default_factory=SamplingPolicy)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    continue_on_error: bool = False

    model_config = SettingsConfigDict(
        env_prefix="MICROBENCH_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Earlier sources take precedence: environment over file values.
        return env_settings, init_settings

    def configure_logging(self) -> None:
        """Install the root handler described by the ``logging`` section."""
        setup_logging(level=self.logging.level, json_output=self.logging.json_output)


def load_config(path: str | Path = "config/microbench.yaml") -> MicrobenchSettings:
    """Read settings from YAML, optionally nested under a ``microbench:`` key."""

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"config file not found: {config_path}")

    loaded = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    if not isinstance(loaded, dict):
        raise ValueError("config file must contain a top-level mapping")

    section = loaded.get("microbench", loaded) or {}
    if not isinstance(section, dict):
        raise ValueError("microbench config section must be a mapping")

    return MicrobenchSettings(**section)


__all__ = ["LoggingConfig", "MicrobenchSettings", "load_config"]
