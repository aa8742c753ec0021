"""Backend request parameters for flow queries and exports."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from netflow_filters.filters.compiler import Match, compile_filters
from netflow_filters.filters.model import Filter
from netflow_filters.filters.router import (
    DEFAULT_LIMIT,
    DEFAULT_REPORTER,
    DEFAULT_TIME_RANGE,
    Reporter,
    TimeRange,
)

EXPORT_FORMAT_CSV = "csv"


@dataclass
class FlowQuery:
    filters: str
    reporter: Reporter
    limit: int
    time_range: int | None = None
    start_time: str | None = None
    end_time: str | None = None

    def to_params(self) -> dict[str, str]:
        """Return the query as backend request parameters."""
        params = {
            "filters": self.filters,
            "reporter": self.reporter,
            "limit": str(self.limit),
        }
        if self.time_range is not None:
            params["timeRange"] = str(self.time_range)
        if self.start_time is not None:
            params["startTime"] = self.start_time
        if self.end_time is not None:
            params["endTime"] = self.end_time
        return params


@dataclass
class ExportQuery(FlowQuery):
    format: str = EXPORT_FORMAT_CSV
    columns: str | None = None

    def to_params(self) -> dict[str, str]:
        params = super().to_params()
        params["format"] = self.format
        if self.columns is not None:
            params["columns"] = self.columns
        return params


def build_flow_query(
    filters: Sequence[Filter],
    match: Match = "all",
    range: int | TimeRange = DEFAULT_TIME_RANGE,
    reporter: Reporter = DEFAULT_REPORTER,
    limit: int = DEFAULT_LIMIT,
) -> FlowQuery:
    query = FlowQuery(filters=compile_filters(filters, match), reporter=reporter, limit=limit)
    if isinstance(range, TimeRange):
        query.start_time = str(range.start)
        query.end_time = str(range.end)
    else:
        query.time_range = range
    return query


def build_export_query(flow_query: FlowQuery, columns: Sequence[str] | None = None) -> ExportQuery:
    """Turn a flow query into a CSV export query."""
    return ExportQuery(
        filters=flow_query.filters,
        reporter=flow_query.reporter,
        limit=flow_query.limit,
        time_range=flow_query.time_range,
        start_time=flow_query.start_time,
        end_time=flow_query.end_time,
        columns=",".join(columns) if columns else None,
    )
