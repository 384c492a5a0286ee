"""Typed configuration models for tracer runtime settings."""

from __future__ import annotations

from pathlib import Path
from typing import ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "ycsb-tracer" / "tracer.yaml"


class LoggingSettings(BaseModel):
    """Structured logging configuration for tracer processes."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    json_output: bool = True
    service: str = "ycsb-tracer"
    environment: str = "dev"


class WorkloadSettings(BaseModel):
    """Workload shape used to derive synthetic user and purpose identities."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    record_count: int = Field(default=1000, gt=0)
    user_count: int = Field(default=100, gt=0)
    purpose_count: int = Field(default=100, gt=0)
    objection_start: int = Field(default=0, ge=0)
    objection_count: int = Field(default=100, gt=0)


class TraceSettings(BaseModel):
    """Trace sink destination and value rendering."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    file: Path = Path("ycsb-trace.txt")
    mock_values: bool = False

    @field_validator("file", mode="before")
    @classmethod
    def _reject_blank_file(cls, value: object) -> object:
        """Reject blank trace file paths."""
        if isinstance(value, str):
            normalized = value.strip()
            if normalized == "":
                raise ValueError("file must be non-empty")
            return normalized
        return value


class TracerSettings(BaseSettings):
    """Root runtime settings resolved from init/env/yaml/defaults sources."""

    model_config = SettingsConfigDict(
        env_prefix="TRACER_",
        env_nested_delimiter="__",
        extra="ignore",
        frozen=True,
        nested_model_default_partial_update=True,
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    workload: WorkloadSettings = Field(default_factory=WorkloadSettings)
    trace: TraceSettings = Field(default_factory=TraceSettings)

    _config_path: ClassVar[Path] = DEFAULT_CONFIG_PATH

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Apply tracer precedence: init > env > yaml > model defaults."""
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(
                settings_cls,
                yaml_file=cls._config_path,
                yaml_file_encoding="utf-8",
            ),
        )
