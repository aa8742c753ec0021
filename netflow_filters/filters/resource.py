"""Kubernetes resource paths in the ``kind.namespace.name`` form."""

from __future__ import annotations

import enum
from dataclasses import dataclass

RESOURCE_SEPARATOR = "."


class SplitStage(enum.IntEnum):
    """How far the user got while typing a resource path."""

    PARTIAL_KIND = 0
    PARTIAL_NAMESPACE = 1
    COMPLETED = 2


@dataclass
class SplitResource:
    kind: str
    namespace: str
    name: str
    stage: SplitStage


def split_resource(path: str) -> SplitResource:
    """Split a resource path into its parts.

    ``Pod`` and ``Pod.ns`` are partial paths. Anything with two or more
    separators is complete; extra separators belong to the name.
    """
    parts = path.split(RESOURCE_SEPARATOR, 2)
    if len(parts) == 1:
        return SplitResource(parts[0], "", "", SplitStage.PARTIAL_KIND)
    if len(parts) == 2:
        return SplitResource(parts[0], parts[1], "", SplitStage.PARTIAL_NAMESPACE)
    return SplitResource(parts[0], parts[1], parts[2], SplitStage.COMPLETED)


def join_resource(resource: SplitResource) -> str:
    """Render a resource path up to its stage.

    Partial paths keep a trailing separator so that the next part can be
    typed right away: ``Pod.`` then ``Pod.ns.``.
    """
    if resource.stage == SplitStage.PARTIAL_KIND:
        return f"{resource.kind}{RESOURCE_SEPARATOR}"
    if resource.stage == SplitStage.PARTIAL_NAMESPACE:
        return f"{resource.kind}{RESOURCE_SEPARATOR}{resource.namespace}{RESOURCE_SEPARATOR}"
    return RESOURCE_SEPARATOR.join((resource.kind, resource.namespace, resource.name))
