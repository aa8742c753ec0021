"""Autocomplete option lookups for filter definitions."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Sequence

from netflow_filters.filters.autocomplete import AutocompleteCache
from netflow_filters.filters.model import FilterDefinition, FilterOption, FilterValue
from netflow_filters.filters.registry import PROTOCOL_OPTIONS, get_port, get_service, is_number
from netflow_filters.filters.resource import SplitStage, split_resource

logger = logging.getLogger(__name__)

DEFAULT_MAX_OPTIONS = 10

OptionsFunc = Callable[[str], list[FilterOption]]


def to_option(name: str) -> FilterOption:
    return FilterOption(name=name, value=name)


def _by_prefix(names: Sequence[str], prefix: str) -> list[FilterOption]:
    options = [to_option(n) for n in names]
    if not prefix:
        return options
    lowered = prefix.lower()
    return [o for o in options if o.name.lower().startswith(lowered)]


def no_option(value: str) -> list[FilterOption]:
    return []


def capped(func: OptionsFunc, max_options: int = DEFAULT_MAX_OPTIONS) -> OptionsFunc:
    """Wrap a lookup so that it returns at most ``max_options`` entries."""

    def lookup(value: str) -> list[FilterOption]:
        return func(value)[:max_options]

    return lookup


def get_protocol_options(value: str) -> list[FilterOption]:
    lowered = value.lower()
    return [
        o
        for o in PROTOCOL_OPTIONS
        if o.value.startswith(value) or o.name.lower().startswith(lowered)
    ]


def get_port_options(value: str) -> list[FilterOption]:
    """Resolve a port number to its service, or a service name to its port."""
    if is_number(value):
        service = get_service(int(value))
        if service:
            return [FilterOption(name=service, value=value)]
        return []
    port = get_port(value)
    if port is not None:
        return [FilterOption(name=value, value=str(port))]
    return []


def namespace_options(cache: AutocompleteCache) -> OptionsFunc:
    def lookup(value: str) -> list[FilterOption]:
        return _by_prefix(cache.get_namespaces(), value)

    return lookup


def kind_options(cache: AutocompleteCache) -> OptionsFunc:
    def lookup(value: str) -> list[FilterOption]:
        return _by_prefix(cache.get_kinds(), value)

    return lookup


def resource_options(cache: AutocompleteCache) -> OptionsFunc:
    """Suggest kinds, then namespaces, then names as the path is typed."""

    def lookup(value: str) -> list[FilterOption]:
        resource = split_resource(value)
        if resource.stage == SplitStage.PARTIAL_KIND:
            return _by_prefix(cache.get_kinds(), resource.kind)
        if resource.stage == SplitStage.PARTIAL_NAMESPACE:
            return _by_prefix(cache.get_namespaces(), resource.namespace)
        names = cache.get_names(resource.kind, resource.namespace) or []
        return _by_prefix(names, resource.name)

    return lookup


async def get_options(definition: FilterDefinition, value: str) -> list[FilterOption]:
    """Run a definition's lookup, awaiting it when it is asynchronous."""
    result = definition.get_options(value)
    if inspect.isawaitable(result):
        result = await result
    return list(result)


async def create_filter_value(definition: FilterDefinition, value: str) -> FilterValue:
    """Turn a raw value into a FilterValue, attaching a display label if known.

    An option matches when either its name or its value equals the raw text;
    the option value then becomes ``v``.
    """
    option = await _find_option(definition, value)
    if option is None:
        return FilterValue(v=value)
    return FilterValue(v=option.value, display=option.name)


async def resolve_filter_value(definition: FilterDefinition, value: str) -> FilterValue:
    """Like ``create_filter_value`` but ``v`` is always kept as given.

    Used when restoring filters from a URL, where the stored value is already
    canonical and only the label has to be recovered.
    """
    option = await _find_option(definition, value)
    return FilterValue(v=value, display=option.name if option is not None else None)


async def _find_option(definition: FilterDefinition, value: str) -> FilterOption | None:
    for option in await get_options(definition, value):
        if option.name == value or option.value == value:
            return option
    logger.debug("No option found for %s=%s", definition.id, value)
    return None
