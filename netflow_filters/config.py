"""Configuration management for netflow-filters."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

from netflow_filters.exceptions import (
    ConfigParseError,
    ConfigValidationError,
)
from netflow_filters.filters.autocomplete import AutocompleteCache
from netflow_filters.filters.options import DEFAULT_MAX_OPTIONS
from netflow_filters.filters.router import (
    DEFAULT_LIMIT,
    DEFAULT_MATCH,
    DEFAULT_REPORTER,
    DEFAULT_TIME_RANGE,
    MATCH_VALUES,
    REPORTER_VALUES,
)


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".config" / "netflow-filters" / "config.toml"


@dataclass
class Config:
    """Application configuration.

    Attributes:
        match: Default match mode, ``all`` or ``any``.
        limit: Default maximum number of flows per query.
        time_range: Default relative time range in seconds.
        reporter: Default reporter side.
        max_options: Maximum number of autocomplete suggestions.
        namespaces: Namespaces offered by autocompletion.
        kinds: Kinds offered by autocompletion.
        names: Resource names keyed by ``Kind.namespace``.
        colored_output: Whether to use colored terminal output.
        config_path: Path where config was loaded from (None if defaults).
    """

    match: str = DEFAULT_MATCH
    limit: int = DEFAULT_LIMIT
    time_range: int = DEFAULT_TIME_RANGE
    reporter: str = DEFAULT_REPORTER
    max_options: int = DEFAULT_MAX_OPTIONS
    namespaces: list[str] = field(default_factory=list)
    kinds: list[str] = field(default_factory=list)
    names: dict[str, list[str]] = field(default_factory=dict)
    colored_output: bool = True
    config_path: Path | None = None

    def validate(self) -> list[str]:
        """Validate configuration values.

        Returns:
            List of warning messages for non-fatal issues.

        Raises:
            ConfigValidationError: If a critical validation fails.
        """
        warnings: list[str] = []

        if self.match not in MATCH_VALUES:
            raise ConfigValidationError("query.match", self.match, "must be 'all' or 'any'")
        if self.reporter not in REPORTER_VALUES:
            raise ConfigValidationError(
                "query.reporter", self.reporter, "must be 'source', 'destination' or 'both'"
            )
        if self.limit <= 0:
            raise ConfigValidationError("query.limit", self.limit, "must be positive")
        if self.time_range <= 0:
            raise ConfigValidationError("query.time_range", self.time_range, "must be positive")
        if self.max_options <= 0:
            raise ConfigValidationError(
                "autocomplete.max_options", self.max_options, "must be positive"
            )

        for key in self.names:
            if key.count(".") != 1:
                warnings.append(
                    f"autocomplete.names key '{key}' is not in the Kind.namespace form, ignored"
                )

        return warnings

    def seed_cache(self, cache: AutocompleteCache) -> None:
        """Load the configured autocomplete candidates into a cache."""
        cache.set_namespaces(self.namespaces)
        cache.set_kinds(self.kinds)
        for key, names in self.names.items():
            if key.count(".") != 1:
                continue
            kind, namespace = key.split(".")
            cache.set_names(kind, namespace, names)


def load_config(config_path: Path | None = None) -> tuple[Config, list[str]]:
    """Load configuration from file or use defaults.

    Args:
        config_path: Explicit config file path. If None, uses default location.

    Returns:
        Tuple of (Config object, list of warning messages).

    Raises:
        ConfigParseError: If config file exists but has invalid syntax.
        ConfigValidationError: If config values are invalid.
    """
    warnings: list[str] = []

    if config_path is None:
        config_path = get_default_config_path()

    config_path = config_path.expanduser().resolve()

    if not config_path.exists():
        # Use defaults
        config = Config()
        warnings.append(f"No config file found at {config_path}. Using defaults.")
        config_warnings = config.validate()
        return config, warnings + config_warnings

    # Load from file
    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(config_path, str(e)) from e

    config = _parse_config_dict(data, config_path)
    config_warnings = config.validate()

    return config, warnings + config_warnings


def _string_list(key: str, value: Any) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigValidationError(key, value, "must be a list of strings")
    return list(value)


def _integer(key: str, value: Any) -> int:
    # bool is an int subclass
    if not isinstance(value, int) or isinstance(value, bool):
        raise ConfigValidationError(key, value, "must be an integer")
    return value


def _parse_config_dict(data: dict[str, Any], config_path: Path) -> Config:
    """Parse configuration dictionary into Config object."""
    config = Config(config_path=config_path)

    # Parse [query] section
    query = data.get("query", {})
    if "match" in query:
        value = query["match"]
        if not isinstance(value, str):
            raise ConfigValidationError("query.match", value, "must be a string")
        config.match = value

    if "reporter" in query:
        value = query["reporter"]
        if not isinstance(value, str):
            raise ConfigValidationError("query.reporter", value, "must be a string")
        config.reporter = value

    if "limit" in query:
        config.limit = _integer("query.limit", query["limit"])

    if "time_range" in query:
        config.time_range = _integer("query.time_range", query["time_range"])

    # Parse [autocomplete] section
    autocomplete = data.get("autocomplete", {})
    if "max_options" in autocomplete:
        config.max_options = _integer("autocomplete.max_options", autocomplete["max_options"])

    if "namespaces" in autocomplete:
        config.namespaces = _string_list("autocomplete.namespaces", autocomplete["namespaces"])

    if "kinds" in autocomplete:
        config.kinds = _string_list("autocomplete.kinds", autocomplete["kinds"])

    if "names" in autocomplete:
        value = autocomplete["names"]
        if not isinstance(value, dict):
            raise ConfigValidationError("autocomplete.names", value, "must be a table")
        config.names = {
            key: _string_list(f"autocomplete.names.{key}", names) for key, names in value.items()
        }

    # Parse [display] section
    display = data.get("display", {})
    if "colored_output" in display:
        value = display["colored_output"]
        if not isinstance(value, bool):
            raise ConfigValidationError("display.colored_output", value, "must be a boolean")
        config.colored_output = value

    return config


def save_config(config: Config, config_path: Path | None = None) -> None:
    """Save configuration to file.

    Args:
        config: Configuration to save.
        config_path: Path to save to. If None, uses config.config_path or default.
    """
    if config_path is None:
        config_path = config.config_path or get_default_config_path()

    config_path = config_path.expanduser().resolve()

    # Ensure directory exists
    config_path.parent.mkdir(parents=True, exist_ok=True)

    # Build TOML structure
    data: dict[str, Any] = {
        "query": {
            "match": config.match,
            "limit": config.limit,
            "time_range": config.time_range,
            "reporter": config.reporter,
        },
        "display": {
            "colored_output": config.colored_output,
        },
    }

    # Build [autocomplete] section (only if non-default values)
    autocomplete: dict[str, Any] = {}
    if config.max_options != DEFAULT_MAX_OPTIONS:
        autocomplete["max_options"] = config.max_options
    if config.namespaces:
        autocomplete["namespaces"] = config.namespaces
    if config.kinds:
        autocomplete["kinds"] = config.kinds
    if config.names:
        autocomplete["names"] = config.names
    if autocomplete:
        data["autocomplete"] = autocomplete

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
