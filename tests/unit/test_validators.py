"""Unit tests for filter value validation."""

from __future__ import annotations

import pytest

from netflow_filters.filters.model import Completion, FilterOption, Invalid, Valid
from netflow_filters.filters.validators import (
    check_resource_completion,
    is_ip_filter,
    reject_empty,
    validate_address,
    validate_k8s_name,
    validate_port,
    validate_protocol,
    validate_resource,
)


class TestKubernetesName:
    def test_empty_becomes_exact_empty_match(self) -> None:
        assert validate_k8s_name("") == Valid('""')

    @pytest.mark.parametrize(
        "value", ["my-app", "cluster_image.registry", '"Deployment"', '""', "-i*e-"]
    )
    def test_accepted(self, value: str) -> None:
        assert validate_k8s_name(value) == Valid(value)

    @pytest.mark.parametrize("value", ["my app", "foo,bar", "a=b", '"unclosed', "a|b"])
    def test_rejected(self, value: str) -> None:
        assert validate_k8s_name(value) == Invalid("Not a valid Kubernetes name")

    def test_reason_is_translated(self) -> None:
        result = validate_k8s_name("bad name", t=lambda s: f"<{s}>")
        assert result == Invalid("<Not a valid Kubernetes name>")


class TestAddress:
    @pytest.mark.parametrize(
        "value",
        [
            "192.0.2.0",
            "::1",
            "192.51.100.0/24",
            "2001:db8::/32",
            "192.168.0.1-192.189.10.12",
            "2001:db8::1-2001:db8::8",
        ],
    )
    def test_accepted(self, value: str) -> None:
        assert is_ip_filter(value)
        assert validate_address(value) == Valid(value)

    @pytest.mark.parametrize("value", ["abc", "10.0.0.1-::1", "300.1.1.1", "10.0.0.0/99"])
    def test_rejected(self, value: str) -> None:
        assert isinstance(validate_address(value), Invalid)

    def test_empty(self) -> None:
        assert validate_address("") == Invalid("Value is empty")


class TestPort:
    @pytest.mark.parametrize("value", ["80", "8080", "http", "HTTPS", "ssh"])
    def test_accepted(self, value: str) -> None:
        assert validate_port(value) == Valid(value)

    def test_unknown(self) -> None:
        assert validate_port("nope") == Invalid("Unknown port")

    @pytest.mark.parametrize("value", ["²", "٨٠"])
    def test_non_ascii_digits_rejected(self, value: str) -> None:
        assert validate_port(value) == Invalid("Unknown port")

    def test_empty(self) -> None:
        assert validate_port("") == Invalid("Value is empty")


class TestProtocol:
    def test_number_kept(self) -> None:
        assert validate_protocol("17") == Valid("17")

    def test_name_normalized(self) -> None:
        assert validate_protocol("tcp") == Valid("TCP")
        assert validate_protocol("ipv6-icmp") == Valid("IPv6-ICMP")

    def test_unknown(self) -> None:
        assert validate_protocol("foo") == Invalid("Unknown protocol")

    def test_non_ascii_digits_rejected(self) -> None:
        assert validate_protocol("²") == Invalid("Unknown protocol")


def test_reject_empty() -> None:
    assert reject_empty("") == Invalid("Value is empty")
    assert reject_empty("Pod") == Valid("Pod")


class TestResource:
    def test_complete_path_normalizes_kind(self) -> None:
        assert validate_resource("pod.default.web-1") == Valid("Pod.default.web-1")
        assert validate_resource("DEPLOYMENT.ns.api") == Valid("Deployment.ns.api")

    def test_cluster_scoped(self) -> None:
        assert validate_resource("node..worker-0") == Valid("Node..worker-0")

    @pytest.mark.parametrize("value", ["pod", "pod.default", ""])
    def test_incomplete(self, value: str) -> None:
        assert validate_resource(value) == Invalid(
            "Incomplete resource name, either kind, namespace or name is missing."
        )

    def test_empty_kind(self) -> None:
        assert validate_resource(".default.web") == Invalid("Kind is empty")

    def test_bad_namespace(self) -> None:
        assert validate_resource("Pod.bad ns.web") == Invalid(
            "Namespace: not a valid Kubernetes name"
        )

    def test_bad_name(self) -> None:
        assert validate_resource("Pod.default.bad name") == Invalid(
            "Name: not a valid Kubernetes name"
        )


class TestResourceCompletion:
    def test_kind_selection_moves_to_namespace(self) -> None:
        assert check_resource_completion("po", "Pod") == Completion(
            completed=False, option=FilterOption(name="Pod.", value="Pod.")
        )

    def test_namespace_selection_moves_to_name(self) -> None:
        result = check_resource_completion("Pod.def", "default")
        assert result.completed is False
        assert result.option.value == "Pod.default."

    def test_name_selection_completes(self) -> None:
        result = check_resource_completion("Pod.default.w", "web-1")
        assert result.completed is True
        assert result.option.value == "Pod.default.web-1"
