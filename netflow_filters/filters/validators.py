"""Validation and normalization of raw filter input.

Every validator takes the raw text and a translation function and returns
either ``Valid`` with the normalized value or ``Invalid`` with a reason the
caller must show to the user. Nothing here raises on bad input.
"""

from __future__ import annotations

import ipaddress
import re
from collections.abc import Callable

from netflow_filters.filters.model import (
    Completion,
    FilterOption,
    Invalid,
    Valid,
    ValidationResult,
)
from netflow_filters.filters.registry import find_protocol_option, get_port, is_number
from netflow_filters.filters.resource import SplitStage, join_resource, split_resource

Translate = Callable[[str], str]

# Literal value meaning "field is empty" (exact match on nothing).
EMPTY_EXACT_MATCH = '""'

# Unquoted names allow wildcards for partial matches; quoted names match exactly.
_K8S_NAME_RE = re.compile(r"^[A-Za-z0-9_.*-]+$")
_K8S_QUOTED_NAME_RE = re.compile(r'^"[A-Za-z0-9_.*-]*"$')


def _identity(text: str) -> str:
    return text


def is_k8s_name(value: str) -> bool:
    """Check Kubernetes name syntax, plain or quote-wrapped."""
    return bool(_K8S_NAME_RE.match(value) or _K8S_QUOTED_NAME_RE.match(value))


def is_ip_filter(value: str) -> bool:
    """Check for a single IPv4/IPv6 address, a CIDR, or a hyphenated range."""
    try:
        if "/" in value:
            ipaddress.ip_network(value, strict=False)
            return True
        if "-" in value:
            start, end = value.split("-", 1)
            return ipaddress.ip_address(start).version == ipaddress.ip_address(end).version
        ipaddress.ip_address(value)
        return True
    except ValueError:
        return False


def reject_empty(value: str, t: Translate = _identity) -> ValidationResult:
    if not value:
        return Invalid(t("Value is empty"))
    return Valid(value)


def validate_k8s_name(value: str, t: Translate = _identity) -> ValidationResult:
    """Empty input becomes the exact-empty token ``""``."""
    if not value:
        return Valid(EMPTY_EXACT_MATCH)
    if value == EMPTY_EXACT_MATCH or is_k8s_name(value):
        return Valid(value)
    return Invalid(t("Not a valid Kubernetes name"))


def validate_address(value: str, t: Translate = _identity) -> ValidationResult:
    if not value:
        return Invalid(t("Value is empty"))
    if is_ip_filter(value):
        return Valid(value)
    return Invalid(t("Not a valid IPv4 or IPv6, nor a CIDR, nor an IP range separated by hyphen"))


def validate_port(value: str, t: Translate = _identity) -> ValidationResult:
    if not value:
        return Invalid(t("Value is empty"))
    # Any port number, or a known service name
    if is_number(value) or get_port(value) is not None:
        return Valid(value)
    return Invalid(t("Unknown port"))


def validate_protocol(value: str, t: Translate = _identity) -> ValidationResult:
    """Numbers pass as-is; names are normalized to their registered spelling."""
    if not value:
        return Invalid(t("Value is empty"))
    if is_number(value):
        return Valid(value)
    protocol = find_protocol_option(value)
    if protocol is not None:
        return Valid(protocol.name)
    return Invalid(t("Unknown protocol"))


def validate_resource(value: str, t: Translate = _identity) -> ValidationResult:
    resource = split_resource(value)
    if resource.stage != SplitStage.COMPLETED:
        return Invalid(t("Incomplete resource name, either kind, namespace or name is missing."))
    if not resource.kind:
        return Invalid(t("Kind is empty"))
    if resource.namespace and not is_k8s_name(resource.namespace):
        return Invalid(t("Namespace: not a valid Kubernetes name"))
    if not is_k8s_name(resource.name):
        return Invalid(t("Name: not a valid Kubernetes name"))
    resource.kind = resource.kind[:1].upper() + resource.kind[1:].lower()
    return Valid(join_resource(resource))


def check_resource_completion(value: str, selected: str) -> Completion:
    """Advance a resource path after an option was picked.

    Kind then namespace selections keep the field open; picking a name on a
    complete path finishes it.
    """
    resource = split_resource(value)
    if resource.stage == SplitStage.PARTIAL_KIND:
        resource.kind = selected
    elif resource.stage == SplitStage.PARTIAL_NAMESPACE:
        resource.namespace = selected
    else:
        resource.name = selected
    joined = join_resource(resource)
    return Completion(
        completed=resource.stage == SplitStage.COMPLETED,
        option=FilterOption(name=joined, value=joined),
    )
