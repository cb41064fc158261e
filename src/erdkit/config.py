"""Configuration management for erdkit using Pydantic models."""

import json
import logging
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".erdkit.json"


class AttributeCategory(str, Enum):
    """Attribute categories that can be selected for display."""
    CONTENT = "content"
    PRIMARY_KEYS = "primary_keys"
    FOREIGN_KEYS = "foreign_keys"
    TIMESTAMPS = "timestamps"
    INHERITANCE = "inheritance"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


class DiagramOptions(BaseModel):
    """Options recognized by the filter engine and the diagram pipeline.

    Instances are immutable. Use ``merge_options`` to derive a new set of
    options from a base set and per-run overrides.
    """
    attributes: frozenset[AttributeCategory] | None = None
    disconnected: bool = False
    indirect: bool = True
    inheritance: bool = False
    polymorphism: bool = False
    only: frozenset[str] | None = None
    exclude: frozenset[str] | None = None
    warn: bool = True
    title: str = "Domain model"

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("attributes", "only", "exclude", mode="before")
    @classmethod
    def normalize_collection(cls, v):
        """Accept a single value or a collection; an empty collection means unset."""
        if v is None:
            return None
        if isinstance(v, (str, Enum)):
            v = [v]
        if isinstance(v, Mapping) or not hasattr(v, "__iter__"):
            raise ValueError(f"expected a name or a list of names, got {type(v).__name__}")
        v = list(v)
        return frozenset(v) if v else None


DEFAULT_OPTIONS = DiagramOptions()


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.WARN

    model_config = ConfigDict(use_enum_values=True)


class ErdkitConfig(BaseModel):
    """Complete erdkit configuration file model."""
    diagram: DiagramOptions = Field(default_factory=DiagramOptions)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")


def merge_options(
    base: DiagramOptions = DEFAULT_OPTIONS,
    overrides: DiagramOptions | Mapping[str, Any] | None = None,
) -> DiagramOptions:
    """Merge per-run overrides on top of a base set of options.

    Only the fields the caller actually supplied are overridden; a
    ``DiagramOptions`` instance contributes its explicitly set fields.

    Raises:
        ConfigurationError: If an override is unknown or has an invalid value
    """
    if overrides is None:
        return base

    if isinstance(overrides, DiagramOptions):
        supplied = {name: getattr(overrides, name) for name in overrides.model_fields_set}
    elif isinstance(overrides, Mapping):
        supplied = dict(overrides)
    else:
        raise ConfigurationError(f"Diagram options must be a mapping, got {type(overrides).__name__}")

    merged = base.model_dump()
    merged.update(supplied)
    try:
        return DiagramOptions(**merged)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid diagram options: {e}") from e


def load_config(config_path: str | Path | None = None) -> ErdkitConfig:
    """Load configuration from file with fallback to defaults.

    Args:
        config_path: Optional path to configuration file. If None, searches
                    current directory and parents for .erdkit.json

    Returns:
        ErdkitConfig: Loaded and validated configuration

    Raises:
        ConfigurationError: If the configuration file is invalid
    """
    if config_path is None:
        config_path = find_config_file()
    else:
        config_path = Path(config_path)

    if config_path and config_path.exists():
        logger.debug(f"Loading configuration from {config_path}")
        try:
            with open(config_path, encoding="utf-8") as f:
                config_data = json.load(f)
            return ErdkitConfig(**config_data)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in config file {config_path}: {e}") from e
        except (ValidationError, TypeError) as e:
            raise ConfigurationError(f"Failed to load config from {config_path}: {e}") from e

    return ErdkitConfig()


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Return the nearest .erdkit.json in ``start_dir`` or one of its ancestors."""
    start = Path(start_dir or Path.cwd()).resolve()
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
    return None
