"""Shared pytest fixtures."""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from netflow_filters.filters.autocomplete import AutocompleteCache
from netflow_filters.filters.catalog import FilterCatalog, build_catalog
from netflow_filters.filters.model import Filter, FilterValue

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    path = Path(tempfile.mkdtemp())
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def sample_config(temp_dir: Path) -> Path:
    """Create a sample config file."""
    config_path = temp_dir / "config.toml"
    config_path.write_text("""[query]
match = "any"
limit = 50
reporter = "both"

[autocomplete]
max_options = 5
namespaces = ["default", "kube-system", "openshift-apiserver"]
kinds = ["Pod", "Service", "Deployment"]

[autocomplete.names]
"Pod.default" = ["web-1", "web-2", "db-1"]

[display]
colored_output = false
""")
    return config_path


@pytest.fixture
def cache() -> AutocompleteCache:
    """A cache private to the test, with a few known resources."""
    c = AutocompleteCache()
    c.set_namespaces(["default", "kube-system", "Kube-public", "openshift-apiserver"])
    c.set_kinds(["Pod", "Service", "Deployment"])
    c.set_names("Pod", "default", ["web-1", "web-2", "db-1"])
    return c


@pytest.fixture
def catalog(cache: AutocompleteCache) -> FilterCatalog:
    return build_catalog(cache=cache)


@pytest.fixture
def make_filter(catalog: FilterCatalog):
    """Build an active filter from a catalog id and raw values."""

    def _make(filter_id: str, *values: str, negated: bool = False) -> Filter:
        return Filter(
            definition=catalog.get(filter_id),
            values=[FilterValue(v=v) for v in values],
            negated=negated,
        )

    return _make
