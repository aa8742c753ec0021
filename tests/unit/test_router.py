"""Unit tests for page URL parameters and flow queries."""

from __future__ import annotations

import asyncio

from netflow_filters.filters.query import build_export_query, build_flow_query
from netflow_filters.filters.router import (
    FLOWDIR_TO_REPORTER,
    TimeRange,
    build_url_params,
    get_limit,
    get_match,
    get_range,
    get_reporter,
    read_page_state,
)


class TestReadParams:
    def test_relative_range_wins(self) -> None:
        assert get_range({"timeRange": "60", "startTime": "1", "endTime": "2"}) == 60

    def test_absolute_range(self) -> None:
        assert get_range({"startTime": "10", "endTime": "20"}) == TimeRange(start=10, end=20)

    def test_range_defaults(self) -> None:
        assert get_range({}) == 300
        assert get_range({"startTime": "10"}) == 300
        assert get_range({"timeRange": "soon"}) == 300

    def test_limit(self) -> None:
        assert get_limit({"limit": "50"}) == 50
        assert get_limit({"limit": "x"}) == 100
        assert get_limit({}) == 100

    def test_match_and_reporter(self) -> None:
        assert get_match({"match": "any"}) == "any"
        assert get_match({"match": "some"}) == "all"
        assert get_reporter({"reporter": "both"}) == "both"
        assert get_reporter({}) == "destination"

    def test_flowdir(self) -> None:
        assert FLOWDIR_TO_REPORTER["0"] == "destination"
        assert FLOWDIR_TO_REPORTER["1"] == "source"
        assert FLOWDIR_TO_REPORTER[""] == "both"


def test_url_params_round_trip(catalog, make_filter) -> None:
    filters = [make_filter("namespace", "foo"), make_filter("dst_port", "53", negated=True)]
    params = build_url_params(filters, TimeRange(start=10, end=20), "any", "source", 25)
    assert params == {
        "filters": "namespace%3Dfoo%3Bdst_port%21%3D53",
        "startTime": "10",
        "endTime": "20",
        "limit": "25",
        "match": "any",
        "reporter": "source",
    }

    state = asyncio.run(read_page_state(params, catalog))
    assert [(f.definition.id, f.negated) for f in state.filters] == [
        ("namespace", False),
        ("dst_port", True),
    ]
    assert state.range == TimeRange(start=10, end=20)
    assert (state.match, state.reporter, state.limit) == ("any", "source", 25)


class TestFlowQuery:
    def test_relative_range(self, make_filter) -> None:
        query = build_flow_query([make_filter("src_namespace", "foo")])
        assert query.to_params() == {
            "filters": "SrcK8S_Namespace%3Dfoo",
            "reporter": "destination",
            "limit": "100",
            "timeRange": "300",
        }

    def test_absolute_range_and_match_any(self, make_filter) -> None:
        query = build_flow_query(
            [make_filter("port", "80")], match="any", range=TimeRange(start=1, end=2)
        )
        params = query.to_params()
        assert params["filters"] == "SrcPort%3D80%7CDstPort%3D80"
        assert (params["startTime"], params["endTime"]) == ("1", "2")
        assert "timeRange" not in params

    def test_export(self, make_filter) -> None:
        query = build_flow_query([make_filter("protocol", "6")], limit=10)
        export = build_export_query(query, ["SrcAddr", "DstAddr"])
        params = export.to_params()
        assert params["format"] == "csv"
        assert params["columns"] == "SrcAddr,DstAddr"
        assert params["filters"] == "Proto%3D6"
        assert "columns" not in build_export_query(query).to_params()
