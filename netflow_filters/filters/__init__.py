"""Flow filter model, query compiler and URL codec."""

from netflow_filters.filters.autocomplete import AutocompleteCache, autocomplete_cache
from netflow_filters.filters.catalog import FilterCatalog, build_catalog, peers
from netflow_filters.filters.compiler import (
    compile_filters,
    compile_match_all,
    compile_match_any,
    decode_filters,
    encode_filters,
    group_filters_match_all,
    group_filters_match_any,
)
from netflow_filters.filters.model import (
    AlwaysMatch,
    Filter,
    FilterCategory,
    FilterComponent,
    FilterDefinition,
    FilterOption,
    FilterValue,
    Invalid,
    SplitMatch,
    Valid,
)
from netflow_filters.filters.url import filters_from_url, filters_to_url

__all__ = [
    "AlwaysMatch",
    "AutocompleteCache",
    "Filter",
    "FilterCatalog",
    "FilterCategory",
    "FilterComponent",
    "FilterDefinition",
    "FilterOption",
    "FilterValue",
    "Invalid",
    "SplitMatch",
    "Valid",
    "autocomplete_cache",
    "build_catalog",
    "compile_filters",
    "compile_match_all",
    "compile_match_any",
    "decode_filters",
    "encode_filters",
    "filters_from_url",
    "filters_to_url",
    "group_filters_match_all",
    "group_filters_match_any",
    "peers",
]
