"""Configuration management for kafkaguard using Pydantic models."""

import json
import logging
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from kafkaguard.lifecycle.registry import DEFAULT_PHASE_ORDER, ClientKind, normalize_phase_order

SETTINGS_FILE_NAME = ".kafkaguard.json"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"

    def to_logging_level(self) -> int:
        return {
            LogLevel.ERROR: logging.ERROR,
            LogLevel.WARN: logging.WARNING,
            LogLevel.INFO: logging.INFO,
            LogLevel.DEBUG: logging.DEBUG,
        }[self]


class ValidationSettings(BaseModel):
    """Validation configuration section."""
    fail_on_warnings: bool = Field(alias="failOnWarnings", default=False)
    class_aliases: dict[str, str] = Field(alias="classAliases", default_factory=dict)

    @field_validator("class_aliases")
    @classmethod
    def validate_class_aliases(cls, v):
        for tag, target in v.items():
            if not target.strip():
                raise ValueError(f"class alias {tag!r} must map to an import path")
        return v

    model_config = ConfigDict(populate_by_name=True)


class LifecycleSettings(BaseModel):
    """Lifecycle configuration section."""
    phase_order: list[ClientKind] = Field(
        alias="phaseOrder", default_factory=lambda: list(DEFAULT_PHASE_ORDER)
    )
    install_shutdown_hook: bool = Field(alias="installShutdownHook", default=True)

    @field_validator("phase_order")
    @classmethod
    def validate_phase_order(cls, v):
        return list(normalize_phase_order(v))

    model_config = ConfigDict(populate_by_name=True)


class LoggingSettings(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.INFO


class KafkaGuardSettings(BaseModel):
    """Complete kafkaguard configuration model."""
    validation: ValidationSettings = Field(default_factory=ValidationSettings)
    lifecycle: LifecycleSettings = Field(default_factory=LifecycleSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = ConfigDict(extra="forbid")


def load_settings(settings_path: str | Path | None = None) -> KafkaGuardSettings:
    """Load settings from file with fallback to defaults.

    Args:
        settings_path: Optional path to a settings file. If None, searches
                       current directory and parents for .kafkaguard.json

    Returns:
        KafkaGuardSettings: Loaded and validated settings

    Raises:
        ValueError: If the settings file is not valid JSON or not valid settings
    """
    if settings_path is None:
        settings_path = find_settings_file()
    else:
        settings_path = Path(settings_path)

    if settings_path and settings_path.exists():
        try:
            with open(settings_path, encoding="utf-8") as f:
                settings_data = json.load(f)
            return KafkaGuardSettings(**settings_data)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in settings file {settings_path}: {e}")
        except Exception as e:
            raise ValueError(f"Failed to load settings from {settings_path}: {e}")
    else:
        return KafkaGuardSettings()


def find_settings_file(start_dir: Path | None = None) -> Path | None:
    """Find .kafkaguard.json by searching up the directory tree.

    Args:
        start_dir: Directory to start search from (default: current directory)

    Returns:
        Path to settings file if found, None otherwise
    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = Path(start_dir).resolve()

    while True:
        settings_file = current / SETTINGS_FILE_NAME
        if settings_file.exists():
            return settings_file

        parent = current.parent
        if parent == current:  # Reached root directory
            break
        current = parent

    return None


def configure_logging(settings: KafkaGuardSettings) -> None:
    """Apply the configured level to the kafkaguard loggers."""
    level = LogLevel(settings.logging.level).to_logging_level()
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("kafkaguard").setLevel(level)
