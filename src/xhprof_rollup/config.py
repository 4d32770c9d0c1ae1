# Copyright 2026 Pennyworth Technologies, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Configuration system for xhprof-rollup.

Provides hierarchical configuration with precedence:
1. CLI flags (highest)
2. Environment variables
3. Project config (./.xhprof_rollup.json)
4. Global config (~/.xhprof_rollup.json)
5. Hardcoded defaults (lowest)
"""

from __future__ import annotations

import copy
import json
import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

from xhprof_rollup.models.profile import SORT_FIELDS

logger = logging.getLogger(__name__)

VALID_OUTPUT_FORMATS = ("table", "json")

# Hardcoded defaults
DEFAULT_SORT_FIELD = "WallTime"
DEFAULT_OUTPUT_FORMAT = "table"

CONFIG_FILE_NAME = ".xhprof_rollup.json"

# Environment variable names
ENV_SORT_FIELD = "XHPROF_ROLLUP_SORT_FIELD"
ENV_OUTPUT_FORMAT = "XHPROF_ROLLUP_OUTPUT_FORMAT"
ENV_LIMIT = "XHPROF_ROLLUP_LIMIT"
ENV_MAX_WORKERS = "XHPROF_ROLLUP_MAX_WORKERS"


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    pass


class ConfigLoadError(Exception):
    """Raised when configuration file cannot be loaded."""

    pass


def _check_unknown(cls: type, data: dict[str, Any], section: str) -> None:
    known_fields = {f.name for f in fields(cls) if f.compare}
    unknown = set(data.keys()) - known_fields
    if unknown:
        raise ConfigValidationError(
            f"Unknown fields in {section} config: {', '.join(sorted(unknown))}"
        )


def _check_positive_int(name: str, value: Any) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigValidationError(f"{name} must be an integer, got {value!r}")
    if value <= 0:
        raise ConfigValidationError(f"{name} must be positive, got {value}")


@dataclass
class DisplayConfig:
    """How flattened profiles are presented."""

    sort_field: str = DEFAULT_SORT_FIELD
    output_format: str = DEFAULT_OUTPUT_FORMAT
    limit: int | None = None
    # Keys present in the source file; None when built in code.
    explicit_fields: frozenset[str] | None = field(default=None, compare=False, repr=False)

    def validate(self) -> None:
        """Validate configuration values."""
        if self.sort_field not in SORT_FIELDS:
            raise ConfigValidationError(
                f"Invalid sort_field '{self.sort_field}'. "
                f"Valid values: {', '.join(SORT_FIELDS)}"
            )
        if self.output_format not in VALID_OUTPUT_FORMATS:
            raise ConfigValidationError(
                f"Invalid output_format '{self.output_format}'. "
                f"Valid values: {', '.join(VALID_OUTPUT_FORMATS)}"
            )
        _check_positive_int("limit", self.limit)

    def to_dict(self) -> dict[str, Any]:
        return {
            "sort_field": self.sort_field,
            "output_format": self.output_format,
            "limit": self.limit,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], strict: bool = False) -> "DisplayConfig":
        if strict:
            _check_unknown(cls, data, "display")
        return cls(
            sort_field=data.get("sort_field", DEFAULT_SORT_FIELD),
            output_format=data.get("output_format", DEFAULT_OUTPUT_FORMAT),
            limit=data.get("limit"),
            explicit_fields=frozenset(data),
        )


@dataclass
class AggregationConfig:
    """Settings for multi-snapshot processing."""

    max_workers: int | None = None
    explicit_fields: frozenset[str] | None = field(default=None, compare=False, repr=False)

    def validate(self) -> None:
        _check_positive_int("max_workers", self.max_workers)

    def to_dict(self) -> dict[str, Any]:
        return {"max_workers": self.max_workers}

    @classmethod
    def from_dict(cls, data: dict[str, Any], strict: bool = False) -> "AggregationConfig":
        if strict:
            _check_unknown(cls, data, "aggregation")
        return cls(
            max_workers=data.get("max_workers"),
            explicit_fields=frozenset(data),
        )


@dataclass
class RollupConfig:
    """Main configuration container."""

    version: str = "1"
    display: DisplayConfig = field(default_factory=DisplayConfig)
    aggregation: AggregationConfig = field(default_factory=AggregationConfig)

    def validate(self) -> None:
        """Validate entire configuration."""
        self.display.validate()
        self.aggregation.validate()

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "display": self.display.to_dict(),
            "aggregation": self.aggregation.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], strict: bool = False) -> "RollupConfig":
        if strict:
            unknown = set(data.keys()) - {"version", "display", "aggregation"}
            if unknown:
                raise ConfigValidationError(
                    f"Unknown fields in config: {', '.join(sorted(unknown))}"
                )

        return cls(
            version=data.get("version", "1"),
            display=DisplayConfig.from_dict(data.get("display", {}), strict),
            aggregation=AggregationConfig.from_dict(data.get("aggregation", {}), strict),
        )


def get_global_config_path() -> Path:
    """Get path to global config file."""
    return Path.home() / CONFIG_FILE_NAME


def get_project_config_path(project_dir: Path | None = None) -> Path:
    """Get path to project config file."""
    return (project_dir or Path.cwd()) / CONFIG_FILE_NAME


def load_config_file(path: Path, strict: bool = False) -> RollupConfig:
    """Load configuration from a JSON file.

    Args:
        path: Path to the config file
        strict: If True, fail on unknown fields

    Returns:
        RollupConfig instance (defaults if the file does not exist)

    Raises:
        ConfigLoadError: If file cannot be read or parsed
        ConfigValidationError: If strict=True and unknown fields found
    """
    if not path.exists():
        return RollupConfig()

    try:
        content = path.read_text()
    except OSError as e:
        raise ConfigLoadError(f"Error reading {path}: {e}")

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigLoadError(f"Invalid JSON in {path}: {e}")

    if not isinstance(data, dict):
        raise ConfigLoadError(f"Config in {path} must be a JSON object")

    logger.debug("Loaded config from %s", path)
    return RollupConfig.from_dict(data, strict=strict)


def _overridden_fields(section: DisplayConfig | AggregationConfig) -> list[str]:
    """Names of the fields a config section sets.

    A section loaded from a file sets exactly the keys the file contains,
    even when a value equals the default. A section built in code sets the
    fields that differ from the defaults.
    """
    names = [f.name for f in fields(section) if f.compare]
    if section.explicit_fields is not None:
        return [name for name in names if name in section.explicit_fields]
    default = type(section)()
    return [name for name in names if getattr(section, name) != getattr(default, name)]


def merge_configs(*configs: RollupConfig) -> RollupConfig:
    """Merge multiple configs with later configs taking precedence.

    Each later config overrides only the fields it sets, so partial configs
    layer properly.
    """
    if not configs:
        return RollupConfig()

    result = copy.deepcopy(configs[0])

    for config in configs[1:]:
        for name in _overridden_fields(config.display):
            setattr(result.display, name, getattr(config.display, name))
        for name in _overridden_fields(config.aggregation):
            setattr(result.aggregation, name, getattr(config.aggregation, name))

    return result


def _int_env(name: str) -> int | None:
    value = os.environ.get(name)
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        raise ConfigValidationError(f"{name} must be an integer, got '{value}'")


def apply_env_overrides(config: RollupConfig) -> RollupConfig:
    """Apply environment variable overrides to config.

    Raises:
        ConfigValidationError: If env var value is invalid
    """
    result = copy.deepcopy(config)

    if sort_field := os.environ.get(ENV_SORT_FIELD):
        result.display.sort_field = sort_field

    if output_format := os.environ.get(ENV_OUTPUT_FORMAT):
        result.display.output_format = output_format

    if (limit := _int_env(ENV_LIMIT)) is not None:
        result.display.limit = limit

    if (max_workers := _int_env(ENV_MAX_WORKERS)) is not None:
        result.aggregation.max_workers = max_workers

    return result


def get_config(config_path: Path | None = None) -> RollupConfig:
    """Load and merge configuration from all sources.

    Loads in order (later sources override earlier):
    1. Hardcoded defaults
    2. Global config (~/.xhprof_rollup.json)
    3. Project config (./.xhprof_rollup.json), or ``config_path`` if given
    4. Environment variables
    """
    global_config = load_config_file(get_global_config_path())
    project_config = load_config_file(config_path or get_project_config_path())

    merged = merge_configs(RollupConfig(), global_config, project_config)
    result = apply_env_overrides(merged)
    result.validate()
    return result
