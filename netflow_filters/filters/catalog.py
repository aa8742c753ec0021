"""Filter catalog: the definitions a user can pick from."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterator, Sequence
from functools import partial

from netflow_filters.exceptions import CatalogConfigurationError, UnknownFilterError
from netflow_filters.filters.autocomplete import AutocompleteCache, autocomplete_cache
from netflow_filters.filters.model import (
    AlwaysMatch,
    FieldConstraint,
    FieldMapper,
    FilterCategory,
    FilterComponent,
    FilterDefinition,
    FilterValue,
    SplitMatch,
)
from netflow_filters.filters.options import (
    DEFAULT_MAX_OPTIONS,
    capped,
    get_port_options,
    get_protocol_options,
    kind_options,
    namespace_options,
    no_option,
    resource_options,
)
from netflow_filters.filters.resource import split_resource
from netflow_filters.filters.validators import (
    check_resource_completion,
    reject_empty,
    validate_address,
    validate_k8s_name,
    validate_port,
    validate_protocol,
    validate_resource,
)

Translate = Callable[[str], str]

SOURCE_PREFIX = "src_"
DESTINATION_PREFIX = "dst_"


def single_field_mapping(field: str) -> FieldMapper:
    """Map every value onto one backend field."""

    def mapping(values: Sequence[FilterValue]) -> list[FieldConstraint]:
        return [FieldConstraint(field=field, values=[value.v for value in values])]

    return mapping


def k8s_resource_mapping(kind: str, namespace: str, name: str) -> FieldMapper:
    """Map ``kind.namespace.name`` values onto three backend fields."""

    def mapping(values: Sequence[FilterValue]) -> list[FieldConstraint]:
        resources = [split_resource(value.v) for value in values]
        return [
            FieldConstraint(field=kind, values=[r.kind for r in resources]),
            FieldConstraint(field=namespace, values=[r.namespace for r in resources]),
            FieldConstraint(field=name, values=[r.name for r in resources]),
        ]

    return mapping


def peers(
    base: FilterDefinition, source: FieldMapper, destination: FieldMapper
) -> list[FilterDefinition]:
    """Derive the source, destination and common definitions of one base.

    ``src_<id>`` and ``dst_<id>`` always apply their own side. The bare
    ``<id>`` matches either side and has to be split at compile time.
    """
    return [
        dataclasses.replace(
            base,
            id=SOURCE_PREFIX + base.id,
            category=FilterCategory.SOURCE,
            field_matching=AlwaysMatch(always=source),
        ),
        dataclasses.replace(
            base,
            id=DESTINATION_PREFIX + base.id,
            category=FilterCategory.DESTINATION,
            field_matching=AlwaysMatch(always=destination),
        ),
        dataclasses.replace(
            base,
            category=FilterCategory.COMMON,
            field_matching=SplitMatch(if_source=source, if_destination=destination),
        ),
    ]


class FilterCatalog:
    """Immutable, ordered set of filter definitions indexed by id."""

    def __init__(self, definitions: Sequence[FilterDefinition]) -> None:
        by_id: dict[str, FilterDefinition] = {}
        for definition in definitions:
            if not isinstance(definition, FilterDefinition):
                raise CatalogConfigurationError(repr(definition), "not a FilterDefinition")
            if definition.id in by_id:
                raise CatalogConfigurationError(definition.id, "duplicate filter id")
            by_id[definition.id] = definition
        self._definitions = tuple(definitions)
        self._by_id = by_id

    def __iter__(self) -> Iterator[FilterDefinition]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def __contains__(self, filter_id: object) -> bool:
        return filter_id in self._by_id

    @property
    def ids(self) -> list[str]:
        return [d.id for d in self._definitions]

    def find(self, filter_id: str) -> FilterDefinition | None:
        """Return the definition for an id, or None when unknown."""
        return self._by_id.get(filter_id)

    def get(self, filter_id: str) -> FilterDefinition:
        """Return the definition for an id.

        Raises:
            UnknownFilterError: If the id is not in the catalog.
        """
        definition = self._by_id.get(filter_id)
        if definition is None:
            raise UnknownFilterError(filter_id)
        return definition


def _identity(text: str) -> str:
    return text


def build_catalog(
    t: Translate = _identity,
    cache: AutocompleteCache | None = None,
    max_options: int = DEFAULT_MAX_OPTIONS,
) -> FilterCatalog:
    """Build the flow filter catalog.

    Args:
        t: Translation function applied to every user-facing text.
        cache: Autocomplete cache backing namespace, kind and resource
            suggestions. Defaults to the session-wide cache.
        max_options: Maximum number of suggestions per lookup.

    Returns:
        The catalog, ready to be shared.
    """
    if cache is None:
        cache = autocomplete_cache

    def cap(func):
        return capped(func, max_options)

    k8s_name_hint = t("Specify a single kubernetes name.")
    k8s_name_examples = "\n".join(
        [
            t("Specify a single kubernetes name following these rules:"),
            "- " + t("Containing any alphanumeric, hyphen, underscrore or dot character"),
            "- " + t("Partial text like cluster, cluster-image, image-registry"),
            "- " + t('Exact match using quotes like "cluster-image-registry"'),
            "- " + t('Case sensitive match using quotes like "Deployment"'),
            "- " + t('Starting text like cluster, "cluster-*"'),
            "- " + t('Ending text like "*-registry"'),
            "- " + t('Pattern like "cluster-*-registry", "c*-*-r*y", -i*e-'),
        ]
    )

    # Placeholder matching, replaced by peers()
    unset = AlwaysMatch(always=single_field_mapping(""))

    definitions: list[FilterDefinition] = []
    definitions += peers(
        FilterDefinition(
            id="namespace",
            name=t("Namespace"),
            component=FilterComponent.AUTOCOMPLETE,
            category=FilterCategory.COMMON,
            field_matching=unset,
            validate=partial(validate_k8s_name, t=t),
            get_options=cap(namespace_options(cache)),
            hint=k8s_name_hint,
            examples=k8s_name_examples,
        ),
        single_field_mapping("SrcK8S_Namespace"),
        single_field_mapping("DstK8S_Namespace"),
    )
    definitions += peers(
        FilterDefinition(
            id="name",
            name=t("Name"),
            component=FilterComponent.TEXT,
            category=FilterCategory.COMMON,
            field_matching=unset,
            validate=partial(validate_k8s_name, t=t),
            get_options=no_option,
            hint=k8s_name_hint,
            examples=k8s_name_examples,
        ),
        single_field_mapping("SrcK8S_Name"),
        single_field_mapping("DstK8S_Name"),
    )
    definitions += peers(
        FilterDefinition(
            id="kind",
            name=t("Kind"),
            component=FilterComponent.AUTOCOMPLETE,
            category=FilterCategory.COMMON,
            field_matching=unset,
            validate=partial(reject_empty, t=t),
            get_options=cap(kind_options(cache)),
        ),
        single_field_mapping("SrcK8S_Type"),
        single_field_mapping("DstK8S_Type"),
    )
    definitions += peers(
        FilterDefinition(
            id="resource",
            name=t("Resource"),
            component=FilterComponent.AUTOCOMPLETE,
            category=FilterCategory.COMMON,
            field_matching=unset,
            validate=partial(validate_resource, t=t),
            get_options=cap(resource_options(cache)),
            check_completion=check_resource_completion,
            hint=t("Specify an existing resource from its kind, namespace and name."),
            examples="\n".join(
                [
                    t("Specify a kind, namespace and name from existing:"),
                    "- " + t("Select kind first from suggestions"),
                    "- " + t("Then Select namespace from suggestions"),
                    "- " + t("Finally select name from suggestions"),
                    t(
                        "You can also directly specify a kind, namespace and name"
                        " like pod.openshift.apiserver"
                    ),
                ]
            ),
        ),
        k8s_resource_mapping("SrcK8S_Type", "SrcK8S_Namespace", "SrcK8S_Name"),
        k8s_resource_mapping("DstK8S_Type", "DstK8S_Namespace", "DstK8S_Name"),
    )
    definitions += peers(
        FilterDefinition(
            id="address",
            name=t("Address"),
            component=FilterComponent.TEXT,
            category=FilterCategory.COMMON,
            field_matching=unset,
            validate=partial(validate_address, t=t),
            get_options=no_option,
            hint=t("Specify a single address or range."),
            examples="\n".join(
                [
                    t("Specify addresses following one of these rules:"),
                    "- " + t("A single IPv4 or IPv6 address like 192.0.2.0, ::1"),
                    "- "
                    + t(
                        "A range within the IP address like 192.168.0.1-192.189.10.12,"
                        " 2001:db8::1-2001:db8::8"
                    ),
                    "- " + t("A CIDR specification like 192.51.100.0/24, 2001:db8::/32"),
                ]
            ),
        ),
        single_field_mapping("SrcAddr"),
        single_field_mapping("DstAddr"),
    )
    definitions += peers(
        FilterDefinition(
            id="port",
            name=t("Port"),
            component=FilterComponent.AUTOCOMPLETE,
            category=FilterCategory.COMMON,
            field_matching=unset,
            validate=partial(validate_port, t=t),
            get_options=cap(get_port_options),
            hint=t("Specify a single port number or name."),
            examples="\n".join(
                [
                    t("Specify a single port following one of these rules:"),
                    "- " + t("A port number like 80, 21"),
                    "- " + t("A IANA name like HTTP, FTP"),
                ]
            ),
        ),
        single_field_mapping("SrcPort"),
        single_field_mapping("DstPort"),
    )
    definitions.append(
        FilterDefinition(
            id="protocol",
            name=t("Protocol"),
            component=FilterComponent.AUTOCOMPLETE,
            category=FilterCategory.NONE,
            field_matching=AlwaysMatch(always=single_field_mapping("Proto")),
            validate=partial(validate_protocol, t=t),
            get_options=cap(get_protocol_options),
            hint=t("Specify a single protocol number or name."),
            examples="\n".join(
                [
                    t("Specify a single protocol following one of these rules:"),
                    "- " + t("A protocol number like 6, 17"),
                    "- " + t("A IANA name like TCP, UDP"),
                ]
            ),
        )
    )
    return FilterCatalog(definitions)
