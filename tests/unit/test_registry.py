"""Unit tests for the protocol and port registries."""

from __future__ import annotations

from netflow_filters.filters.registry import (
    PROTOCOL_OPTIONS,
    find_protocol_option,
    format_port,
    get_port,
    get_service,
    is_number,
    sort_ports,
)


def test_service_lookups() -> None:
    assert get_service(22) == "ssh"
    assert get_service(1) is None
    assert get_port("HTTP") == 80
    assert get_port("unknown") is None


def test_find_protocol() -> None:
    assert find_protocol_option("udp").value == "17"
    assert find_protocol_option("6").name == "TCP"
    assert find_protocol_option("nope") is None


def test_protocol_options_ordered_by_number() -> None:
    numbers = [int(o.value) for o in PROTOCOL_OPTIONS]
    assert numbers == sorted(numbers)
    assert all(n < 1024 for n in numbers)


def test_format_port() -> None:
    assert format_port(443) == "https (443)"
    assert format_port(40000) == "40000"


def test_sort_ports_known_services_first() -> None:
    assert sort_ports([40000, 443, 12, 22, 80]) == [80, 443, 22, 12, 40000]


def test_is_number_accepts_ascii_digits_only() -> None:
    assert is_number("443")
    assert not is_number("")
    assert not is_number("²")
    assert not is_number("٤٤٣")
