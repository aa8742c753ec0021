"""Compile active filters into the backend filter fragment.

The backend reads ``field=v1,v2&field2=v3|field3=v4``: ``|`` separates
alternative groups, ``&`` separates constraints that must all hold, ``,``
separates accepted values of one field. A negated constraint is written
``field!=v``.

Grouping depends on the match mode:

- Match all puts every constraint in one group, unless a common filter
  (one that applies to either side of the flow) is present. Then the
  source-side constraints and the destination-side constraints form two
  groups, so that ``Namespace=foo`` with ``Port=80`` means
  ``SrcK8S_Namespace=foo&SrcPort=80|DstK8S_Namespace=foo&DstPort=80``.
- Match any gives every filter its own group, and common filters one group
  per side.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from importlib import resources
from typing import Any, Literal
from urllib.parse import quote, unquote

from lark import Lark, Token, Transformer, UnexpectedInput

from netflow_filters.exceptions import QueryParseError
from netflow_filters.filters.model import (
    AlwaysMatch,
    AndGroup,
    FieldMapper,
    Filter,
    OrGroup,
)

Match = Literal["all", "any"]

GROUP_SEPARATOR = "|"
FIELD_SEPARATOR = "&"
VALUE_SEPARATOR = ","
NEGATION_SUFFIX = "!"

logger = logging.getLogger(__name__)


def _field_key(field: str, negated: bool) -> str:
    return field + NEGATION_SUFFIX if negated else field


def _add_to_group(group: AndGroup, key: str, values: list[str]) -> None:
    """Append values under a key; duplicates are kept."""
    group[key] = group.get(key, []) + values


def _merge_mapping(group: AndGroup, mapping: FieldMapper, f: Filter) -> None:
    for constraint in mapping(f.values):
        _add_to_group(group, _field_key(constraint.field, f.negated), constraint.values)


def group_filters_match_all(filters: Sequence[Filter]) -> OrGroup:
    """Group filters so that all of them must hold, on the same flow side."""
    src_group: AndGroup = {}
    dst_group: AndGroup = {}
    need_split = False
    for f in filters:
        matching = f.definition.field_matching
        if isinstance(matching, AlwaysMatch):
            # Applied regardless of the src/dst split
            _merge_mapping(src_group, matching.always, f)
            _merge_mapping(dst_group, matching.always, f)
        else:
            need_split = True
            _merge_mapping(src_group, matching.if_source, f)
            _merge_mapping(dst_group, matching.if_destination, f)
    if need_split:
        return [src_group, dst_group]
    # Without split both groups are identical
    return [src_group]


def group_filters_match_any(filters: Sequence[Filter]) -> OrGroup:
    """Group filters so that any one of them is enough."""
    or_group: OrGroup = []
    for f in filters:
        matching = f.definition.field_matching
        if isinstance(matching, AlwaysMatch):
            mappings = [matching.always]
        else:
            mappings = [matching.if_source, matching.if_destination]
        for mapping in mappings:
            group: AndGroup = {}
            _merge_mapping(group, mapping, f)
            or_group.append(group)
    return or_group


def encode_filters(groups: OrGroup) -> str:
    """Render groups as a percent-encoded backend fragment.

    Example of output before encoding: ``foo=a,b&bar=c|baz=d``.
    """
    rendered = GROUP_SEPARATOR.join(
        FIELD_SEPARATOR.join(_render_constraint(key, values) for key, values in group.items())
        for group in groups
    )
    return quote(rendered, safe="")


def _render_constraint(key: str, values: list[str]) -> str:
    # Negated keys already end with "!", giving "field!=v"
    return f"{key}={VALUE_SEPARATOR.join(values)}"


def compile_match_all(filters: Sequence[Filter]) -> str:
    return encode_filters(group_filters_match_all(filters))


def compile_match_any(filters: Sequence[Filter]) -> str:
    return encode_filters(group_filters_match_any(filters))


def compile_filters(filters: Sequence[Filter], match: Match = "all") -> str:
    """Compile filters for the given match mode (``all`` or ``any``)."""
    if match == "any":
        encoded = compile_match_any(filters)
    else:
        encoded = compile_match_all(filters)
    logger.debug("Compiled %d filter(s) with match=%s: %s", len(filters), match, encoded)
    return encoded


def _load_grammar() -> str:
    """Load the Lark grammar from the package resources."""
    return resources.files("netflow_filters.filters").joinpath("grammar.lark").read_text()


_parser = Lark(_load_grammar(), parser="lalr")


class _FragmentTransformer(Transformer):
    """Transform the Lark parse tree into an OrGroup."""

    def start(self, items: list[Any]) -> OrGroup:
        return list(items)

    def group(self, items: list[Any]) -> AndGroup:
        group: AndGroup = {}
        for key, values in items:
            _add_to_group(group, key, values)
        return group

    def constraint(self, items: list[Any]) -> tuple[str, list[str]]:
        field, operator, values = items
        return _field_key(field, operator == "!="), values

    def values(self, items: list[Any]) -> list[str]:
        return list(items)

    def value(self, items: list[Any]) -> str:
        return items[0] if items else ""

    def FIELD(self, token: Token) -> str:
        return str(token)

    def OPERATOR(self, token: Token) -> str:
        return str(token)

    def VALUE(self, token: Token) -> str:
        return str(token)


_transformer = _FragmentTransformer()


def decode_filters(encoded: str) -> OrGroup:
    """Parse a backend fragment produced by ``encode_filters``.

    Args:
        encoded: Percent-encoded fragment.

    Returns:
        The groups, with negated fields keyed as ``field!``.

    Raises:
        QueryParseError: If the fragment does not follow the grammar.
    """
    decoded = unquote(encoded).strip()
    if not decoded:
        return []
    try:
        tree = _parser.parse(decoded)
        return _transformer.transform(tree)
    except UnexpectedInput as e:
        raise QueryParseError(decoded, str(e)) from e
