"""In-memory cache of autocomplete candidates."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def _names_key(kind: str, namespace: str) -> str:
    return f"{kind}.{namespace}"


class AutocompleteCache:
    """Namespaces, kinds and resource names known to the session.

    The cache is filled by whatever discovers resources and is only read to
    suggest options and to resolve display labels. Entries never expire;
    call ``clear()`` to invalidate.
    """

    def __init__(self) -> None:
        self._namespaces: list[str] = []
        self._kinds: list[str] = []
        self._names: dict[str, list[str]] = {}

    def get_namespaces(self) -> list[str]:
        return list(self._namespaces)

    def set_namespaces(self, namespaces: list[str]) -> None:
        self._namespaces = list(namespaces)

    def get_kinds(self) -> list[str]:
        return list(self._kinds)

    def set_kinds(self, kinds: list[str]) -> None:
        self._kinds = list(kinds)

    def get_names(self, kind: str, namespace: str) -> list[str] | None:
        """Return names for a kind in a namespace, or None when never fetched."""
        names = self._names.get(_names_key(kind, namespace))
        return list(names) if names is not None else None

    def set_names(self, kind: str, namespace: str, names: list[str]) -> None:
        self._names[_names_key(kind, namespace)] = list(names)

    def has_names(self, kind: str, namespace: str) -> bool:
        return _names_key(kind, namespace) in self._names

    def clear(self) -> None:
        logger.debug(
            "Clearing autocomplete cache (%d namespaces, %d kinds, %d name lists)",
            len(self._namespaces),
            len(self._kinds),
            len(self._names),
        )
        self._namespaces = []
        self._kinds = []
        self._names.clear()


# Session-wide cache used when no other instance is injected.
autocomplete_cache = AutocompleteCache()
