"""Data classes for filter definitions and active filters."""

from __future__ import annotations

import enum
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import TypeAlias

from netflow_filters.exceptions import CatalogConfigurationError


class FilterComponent(enum.Enum):
    """Input widget used to enter a filter value."""

    AUTOCOMPLETE = "autocomplete"
    TEXT = "text"


class FilterCategory(enum.Enum):
    """Side of the flow a definition applies to."""

    SOURCE = "source"
    DESTINATION = "destination"
    COMMON = "common"
    NONE = "none"


@dataclass(frozen=True)
class FilterValue:
    """A chosen filter value.

    ``v`` is sent to the backend. ``display`` is a label for humans only and
    never takes part in grouping or encoding.
    """

    v: str
    display: str | None = None


@dataclass(frozen=True)
class FilterOption:
    """An autocomplete suggestion."""

    name: str
    value: str


@dataclass(frozen=True)
class FieldConstraint:
    """Values required on a single backend field."""

    field: str
    values: list[str]


FieldMapper: TypeAlias = Callable[[Sequence[FilterValue]], list[FieldConstraint]]


@dataclass(frozen=True)
class AlwaysMatch:
    """Mapping applied identically whatever the flow side."""

    always: FieldMapper


@dataclass(frozen=True)
class SplitMatch:
    """Mapping that differs for the source and the destination side."""

    if_source: FieldMapper
    if_destination: FieldMapper


FieldMatching: TypeAlias = AlwaysMatch | SplitMatch


@dataclass(frozen=True)
class Valid:
    """Accepted input, normalized."""

    value: str


@dataclass(frozen=True)
class Invalid:
    """Rejected input with a human-readable reason."""

    reason: str


ValidationResult: TypeAlias = Valid | Invalid


@dataclass(frozen=True)
class Completion:
    """Outcome of selecting an option in a multi-stage autocomplete field."""

    completed: bool
    option: FilterOption


OptionLookup: TypeAlias = Callable[
    [str], Sequence[FilterOption] | Awaitable[Sequence[FilterOption]]
]
Validator: TypeAlias = Callable[[str], ValidationResult]
CompletionCheck: TypeAlias = Callable[[str, str], Completion]


@dataclass(frozen=True)
class FilterDefinition:
    """Static description of one filterable attribute.

    Attributes:
        id: Stable identifier, used as key in page URLs.
        name: Translated display name.
        component: Widget used to enter values.
        category: Flow side the definition was derived for.
        field_matching: Either ``AlwaysMatch`` or ``SplitMatch``.
        validate: Normalizes or rejects raw text.
        get_options: Autocomplete lookup, sync or awaitable.
        check_completion: Only set for multi-stage fields (resources).
        hint: Short help text.
        examples: Longer help text listing accepted forms.
    """

    id: str
    name: str
    component: FilterComponent
    category: FilterCategory
    field_matching: FieldMatching
    validate: Validator
    get_options: OptionLookup
    check_completion: CompletionCheck | None = None
    hint: str | None = None
    examples: str | None = None

    def __post_init__(self) -> None:
        matching = self.field_matching
        if isinstance(matching, AlwaysMatch):
            if not callable(matching.always):
                raise CatalogConfigurationError(self.id, "'always' mapping is not callable")
        elif isinstance(matching, SplitMatch):
            if not callable(matching.if_source) or not callable(matching.if_destination):
                raise CatalogConfigurationError(
                    self.id, "both source and destination mappings are required"
                )
        else:
            raise CatalogConfigurationError(
                self.id, "field matching must be AlwaysMatch or SplitMatch"
            )

    @property
    def needs_split(self) -> bool:
        """Whether source and destination must be evaluated separately."""
        return isinstance(self.field_matching, SplitMatch)


@dataclass
class Filter:
    """An active filter: one definition with its chosen values.

    Values are OR-ed together on the mapped fields. ``negated`` flips the
    comparison for every mapped field.
    """

    definition: FilterDefinition
    values: list[FilterValue] = field(default_factory=list)
    negated: bool = False

    @property
    def id(self) -> str:
        return self.definition.id


# Backend field key -> accumulated values; insertion order is kept.
AndGroup: TypeAlias = dict[str, list[str]]
OrGroup: TypeAlias = list[AndGroup]
