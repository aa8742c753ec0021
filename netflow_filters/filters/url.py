"""Encode and decode the active filters as a page URL parameter.

The URL grammar is separate from the backend fragment: ``id=v1,v2;id2!=v3``.
Definitions are joined by ``;``, values by ``,``, and a negated filter puts
``!`` right after its id.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from urllib.parse import quote, unquote

from netflow_filters.filters.catalog import FilterCatalog
from netflow_filters.filters.model import Filter
from netflow_filters.filters.options import resolve_filter_value

FILTERS_SEPARATOR = ";"
FILTER_KV_SEPARATOR = "="
FILTER_VALUES_SEPARATOR = ","
NEGATION_MARKER = "!"

logger = logging.getLogger(__name__)


def filters_to_url(filters: Sequence[Filter]) -> str:
    """Serialize filters into a percent-encoded URL parameter value.

    Only raw values are written; display labels are recovered on decode.
    """
    parts = []
    for f in filters:
        key = f.definition.id + (NEGATION_MARKER if f.negated else "")
        values = FILTER_VALUES_SEPARATOR.join(value.v for value in f.values)
        parts.append(f"{key}{FILTER_KV_SEPARATOR}{values}")
    return quote(FILTERS_SEPARATOR.join(parts), safe="")


def _parse_key(key: str) -> tuple[str, bool]:
    """Split a URL key into (filter id, negated).

    Accepts both ``id!`` and the leading form ``!id``.
    """
    if key.endswith(NEGATION_MARKER):
        return key[: -len(NEGATION_MARKER)], True
    if key.startswith(NEGATION_MARKER):
        return key[len(NEGATION_MARKER) :], True
    return key, False


async def filters_from_url(url_value: str | None, catalog: FilterCatalog) -> list[Filter]:
    """Restore filters from a URL parameter value.

    Unknown ids and malformed entries are skipped so that stale links keep
    working. Display labels are resolved through each definition's option
    lookup, which may be asynchronous.

    Args:
        url_value: The ``filters`` parameter, percent-encoded or not.
        catalog: Catalog to look definitions up in.

    Returns:
        Filters in URL order.
    """
    if not url_value:
        return []

    pending = []
    for entry in unquote(url_value).split(FILTERS_SEPARATOR):
        pair = entry.split(FILTER_KV_SEPARATOR)
        if len(pair) != 2:
            if entry:
                logger.debug("Ignoring malformed URL filter: %s", entry)
            continue
        filter_id, negated = _parse_key(pair[0])
        definition = catalog.find(filter_id)
        if definition is None:
            logger.debug("Ignoring unknown URL filter id: %s", filter_id)
            continue
        raw_values = pair[1].split(FILTER_VALUES_SEPARATOR)
        pending.append((definition, negated, raw_values))

    filters = []
    for definition, negated, raw_values in pending:
        values = await asyncio.gather(*(resolve_filter_value(definition, v) for v in raw_values))
        filters.append(Filter(definition=definition, values=list(values), negated=negated))
    return filters
