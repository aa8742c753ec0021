"""Page URL parameters of the flow console."""

from __future__ import annotations

import enum
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Literal, cast

from netflow_filters.filters.catalog import FilterCatalog
from netflow_filters.filters.compiler import Match
from netflow_filters.filters.model import Filter
from netflow_filters.filters.url import filters_from_url, filters_to_url

Reporter = Literal["source", "destination", "both"]

DEFAULT_TIME_RANGE = 300
DEFAULT_LIMIT = 100
DEFAULT_REPORTER: Reporter = "destination"
DEFAULT_MATCH: Match = "all"

MATCH_VALUES: tuple[str, ...] = ("all", "any")
REPORTER_VALUES: tuple[str, ...] = ("source", "destination", "both")

# Flow direction recorded by the exporter -> reporter side
FLOWDIR_TO_REPORTER: dict[str, Reporter] = {
    "0": "destination",
    "1": "source",
    "": "both",
}


class URLParam(str, enum.Enum):
    FILTERS = "filters"
    TIME_RANGE = "timeRange"
    START_TIME = "startTime"
    END_TIME = "endTime"
    LIMIT = "limit"
    MATCH = "match"
    REPORTER = "reporter"


@dataclass(frozen=True)
class TimeRange:
    """Absolute time range, in seconds since the epoch."""

    start: int
    end: int


@dataclass
class PageState:
    filters: list[Filter]
    range: int | TimeRange
    match: Match
    reporter: Reporter
    limit: int


def _as_int(params: Mapping[str, str], key: URLParam) -> int | None:
    raw = params.get(key.value)
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def get_range(params: Mapping[str, str], default: int = DEFAULT_TIME_RANGE) -> int | TimeRange:
    """A relative range wins over start/end; both bounds are needed otherwise."""
    time_range = _as_int(params, URLParam.TIME_RANGE)
    start = _as_int(params, URLParam.START_TIME)
    end = _as_int(params, URLParam.END_TIME)
    if time_range:
        return time_range
    if start and end:
        return TimeRange(start=start, end=end)
    return default


def get_limit(params: Mapping[str, str], default: int = DEFAULT_LIMIT) -> int:
    return _as_int(params, URLParam.LIMIT) or default


def get_match(params: Mapping[str, str], default: Match = DEFAULT_MATCH) -> Match:
    value = params.get(URLParam.MATCH.value)
    if value in MATCH_VALUES:
        return cast(Match, value)
    return default


def get_reporter(params: Mapping[str, str], default: Reporter = DEFAULT_REPORTER) -> Reporter:
    value = params.get(URLParam.REPORTER.value)
    if value in REPORTER_VALUES:
        return cast(Reporter, value)
    return default


async def read_page_state(params: Mapping[str, str], catalog: FilterCatalog) -> PageState:
    """Restore the whole console state from URL parameters."""
    return PageState(
        filters=await filters_from_url(params.get(URLParam.FILTERS.value), catalog),
        range=get_range(params),
        match=get_match(params),
        reporter=get_reporter(params),
        limit=get_limit(params),
    )


def build_url_params(
    filters: Sequence[Filter],
    range: int | TimeRange = DEFAULT_TIME_RANGE,
    match: Match = DEFAULT_MATCH,
    reporter: Reporter = DEFAULT_REPORTER,
    limit: int = DEFAULT_LIMIT,
) -> dict[str, str]:
    """Render the console state as URL parameters."""
    params: dict[str, str] = {URLParam.FILTERS.value: filters_to_url(filters)}
    if isinstance(range, TimeRange):
        params[URLParam.START_TIME.value] = str(range.start)
        params[URLParam.END_TIME.value] = str(range.end)
    else:
        params[URLParam.TIME_RANGE.value] = str(range)
    params[URLParam.LIMIT.value] = str(limit)
    params[URLParam.MATCH.value] = match
    params[URLParam.REPORTER.value] = reporter
    return params
