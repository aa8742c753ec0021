"""Unit tests for the filter group compiler."""

from __future__ import annotations

import pytest

from netflow_filters.exceptions import QueryParseError
from netflow_filters.filters.compiler import (
    compile_filters,
    compile_match_all,
    compile_match_any,
    decode_filters,
    encode_filters,
    group_filters_match_all,
    group_filters_match_any,
)

# ---------------------------------------------------------------------------
# Match all
# ---------------------------------------------------------------------------


class TestMatchAll:
    def test_single_source_filter(self, make_filter) -> None:
        filters = [make_filter("src_namespace", "foo")]
        assert group_filters_match_all(filters) == [{"SrcK8S_Namespace": ["foo"]}]
        assert compile_match_all(filters) == "SrcK8S_Namespace%3Dfoo"

    def test_common_filters_split_by_side(self, make_filter) -> None:
        filters = [make_filter("namespace", "foo"), make_filter("port", "80")]
        assert group_filters_match_all(filters) == [
            {"SrcK8S_Namespace": ["foo"], "SrcPort": ["80"]},
            {"DstK8S_Namespace": ["foo"], "DstPort": ["80"]},
        ]
        assert compile_match_all(filters) == (
            "SrcK8S_Namespace%3Dfoo%26SrcPort%3D80%7CDstK8S_Namespace%3Dfoo%26DstPort%3D80"
        )

    def test_no_split_gives_one_group(self, make_filter) -> None:
        filters = [
            make_filter("src_namespace", "foo"),
            make_filter("dst_port", "443"),
            make_filter("protocol", "TCP"),
        ]
        groups = group_filters_match_all(filters)
        assert groups == [{"SrcK8S_Namespace": ["foo"], "DstPort": ["443"], "Proto": ["TCP"]}]

    def test_always_filter_copied_to_both_sides(self, make_filter) -> None:
        filters = [make_filter("protocol", "TCP"), make_filter("namespace", "foo")]
        src, dst = group_filters_match_all(filters)
        assert src == {"Proto": ["TCP"], "SrcK8S_Namespace": ["foo"]}
        assert dst == {"Proto": ["TCP"], "DstK8S_Namespace": ["foo"]}

    def test_values_concatenated_in_order(self, make_filter) -> None:
        filters = [
            make_filter("src_address", "10.0.0.1"),
            make_filter("address", "10.0.0.2", "10.0.0.1"),
        ]
        src, dst = group_filters_match_all(filters)
        assert src == {"SrcAddr": ["10.0.0.1", "10.0.0.2", "10.0.0.1"]}
        assert dst == {"SrcAddr": ["10.0.0.1"], "DstAddr": ["10.0.0.2", "10.0.0.1"]}

    def test_resource_expands_to_three_fields(self, make_filter) -> None:
        filters = [make_filter("src_resource", "Pod.default.web-1")]
        assert group_filters_match_all(filters) == [
            {
                "SrcK8S_Type": ["Pod"],
                "SrcK8S_Namespace": ["default"],
                "SrcK8S_Name": ["web-1"],
            }
        ]

    def test_negated_filter_uses_distinct_key(self, make_filter) -> None:
        filters = [
            make_filter("dst_name", "web", negated=True),
            make_filter("dst_name", "api"),
        ]
        assert group_filters_match_all(filters) == [
            {"DstK8S_Name!": ["web"], "DstK8S_Name": ["api"]}
        ]
        assert compile_match_all(filters[:1]) == "DstK8S_Name%21%3Dweb"

    def test_empty_list(self) -> None:
        assert group_filters_match_all([]) == [{}]
        assert compile_match_all([]) == ""


# ---------------------------------------------------------------------------
# Match any
# ---------------------------------------------------------------------------


class TestMatchAny:
    def test_common_filters_give_four_groups(self, make_filter) -> None:
        filters = [make_filter("namespace", "foo"), make_filter("port", "80")]
        groups = group_filters_match_any(filters)
        assert groups == [
            {"SrcK8S_Namespace": ["foo"]},
            {"DstK8S_Namespace": ["foo"]},
            {"SrcPort": ["80"]},
            {"DstPort": ["80"]},
        ]
        assert all(len(g) == 1 for g in groups)

    def test_group_count(self, make_filter) -> None:
        filters = [
            make_filter("src_namespace", "a"),
            make_filter("address", "10.0.0.1"),
            make_filter("protocol", "UDP"),
            make_filter("resource", "Pod.default.web-1"),
        ]
        # 1 + 2 + 1 + 2
        assert len(group_filters_match_any(filters)) == 6

    def test_multiple_values_stay_together(self, make_filter) -> None:
        filters = [make_filter("src_port", "80", "443")]
        assert compile_match_any(filters) == "SrcPort%3D80%2C443"

    def test_empty_list(self) -> None:
        assert group_filters_match_any([]) == []
        assert compile_match_any([]) == ""


def test_compile_filters_dispatches_on_match(make_filter) -> None:
    filters = [make_filter("namespace", "foo")]
    assert compile_filters(filters, "all") == compile_match_all(filters)
    assert compile_filters(filters, "any") == compile_match_any(filters)
    assert compile_filters(filters) == compile_match_all(filters)


def test_display_labels_ignored(make_filter) -> None:
    from netflow_filters.filters.model import FilterValue

    f = make_filter("port", "80")
    labelled = make_filter("port")
    labelled.values = [FilterValue(v="80", display="http")]
    assert compile_match_all([f]) == compile_match_all([labelled])


def test_empty_exact_value_is_encoded(make_filter) -> None:
    assert compile_match_all([make_filter("src_name", '""')]) == "SrcK8S_Name%3D%22%22"


# ---------------------------------------------------------------------------
# Encoding / decoding
# ---------------------------------------------------------------------------


class TestDecode:
    def test_encode_example(self) -> None:
        encoded = encode_filters([{"foo": ["a", "b"], "bar": ["c"]}, {"baz": ["d"]}])
        assert encoded == "foo%3Da%2Cb%26bar%3Dc%7Cbaz%3Dd"

    def test_decode_plain_fragment(self) -> None:
        assert decode_filters("a=1,2&b!=3|c=4") == [
            {"a": ["1", "2"], "b!": ["3"]},
            {"c": ["4"]},
        ]

    def test_decode_compiled_filters(self, make_filter) -> None:
        filters = [make_filter("namespace", "foo"), make_filter("port", "80")]
        assert decode_filters(compile_match_all(filters)) == group_filters_match_all(filters)

    def test_decode_empty_value(self) -> None:
        assert decode_filters("SrcK8S_Namespace=") == [{"SrcK8S_Namespace": [""]}]

    def test_decode_empty(self) -> None:
        assert decode_filters("") == []

    @pytest.mark.parametrize("fragment", ["=foo", "a=1|", "a", "a==1"])
    def test_decode_invalid(self, fragment: str) -> None:
        with pytest.raises(QueryParseError):
            decode_filters(fragment)
