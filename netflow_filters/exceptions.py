"""Exception hierarchy for netflow-filters."""

from pathlib import Path


class NetflowFiltersError(Exception):
    """Base exception for all netflow-filters errors.

    All exceptions in this package inherit from this class,
    allowing callers to catch all netflow-filters errors with
    a single except clause.
    """

    pass


# Configuration Errors
class ConfigError(NetflowFiltersError):
    """Configuration-related errors."""

    pass


class ConfigParseError(ConfigError):
    """Configuration file has invalid syntax."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid config at {path}: {detail}")


class ConfigValidationError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: object, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid config value for '{key}': {reason}")


# Catalog Errors
class CatalogConfigurationError(NetflowFiltersError):
    """A filter definition breaks the catalog construction rules.

    This is a programming defect and is raised while the catalog is built,
    never while filters are compiled.
    """

    def __init__(self, filter_id: str, reason: str) -> None:
        self.filter_id = filter_id
        self.reason = reason
        super().__init__(f"Invalid filter definition '{filter_id}': {reason}")


class UnknownFilterError(NetflowFiltersError):
    """Filter id is not part of the catalog."""

    def __init__(self, filter_id: str) -> None:
        self.filter_id = filter_id
        super().__init__(f"Unknown filter: {filter_id}")


# Query Errors
class QueryParseError(NetflowFiltersError):
    """Raised when a backend filter fragment cannot be decoded."""

    def __init__(self, query: str, message: str) -> None:
        self.query = query
        super().__init__(f"Failed to parse filter query '{query}': {message}")
