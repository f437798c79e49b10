"""
patchgraph Transformer — Patch Merger
======================================
Collapses every patch of a project into one namespace and wraps the result in
a ``ProjectContext`` that the resolvers share for the duration of one call.

Merge policy
------------
Patches are folded left to right.  For each top-level key (``nodes``,
``pins``, ``links`` …) present in both operands the inner mappings are merged
one level deep; on an inner key collision the later patch's entry replaces
the earlier one as a whole.  Non-mapping values are simply replaced.  The
patch ``id`` is dropped from the result.

Collisions are not reported here; ``schema.check_project`` lists them.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .ir import Link, Node, NodeType, Pin

logger = logging.getLogger(__name__)


def _shallow_merge(left: Any, right: Any) -> Any:
    if isinstance(left, Mapping) and isinstance(right, Mapping):
        return {**left, **right}
    return right


def _merge_two(acc: Dict[str, Any], patch: Any) -> Dict[str, Any]:
    if not isinstance(patch, Mapping):
        return acc
    merged = dict(acc)
    for key, value in patch.items():
        merged[key] = _shallow_merge(merged[key], value) if key in merged else value
    return merged


def merge_patches(project: Any) -> Dict[str, Any]:
    """Fold all ``project["patches"]`` into one patch dict (without ``id``)."""
    patches = project.get("patches") if isinstance(project, Mapping) else None
    if not isinstance(patches, Mapping):
        patches = {}

    merged: Dict[str, Any] = {}
    for patch in patches.values():
        merged = _merge_two(merged, patch)
    merged.pop("id", None)

    logger.debug(f"Merged {len(patches)} patch(es) into keys {sorted(map(str, merged))}")
    return merged


def _entities(merged: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = merged.get(key)
    return value if isinstance(value, Mapping) else {}


@dataclass
class ProjectContext:
    """Merged view of a project, built once and passed to every resolver."""

    nodes: Dict[str, Node] = field(default_factory=dict)
    pins: Dict[str, Pin] = field(default_factory=dict)
    links: Dict[str, Link] = field(default_factory=dict)
    node_types: Dict[str, NodeType] = field(default_factory=dict)

    @classmethod
    def from_project(cls, project: Any) -> "ProjectContext":
        merged = merge_patches(project)
        node_types = project.get("nodeTypes") if isinstance(project, Mapping) else None
        if not isinstance(node_types, Mapping):
            node_types = {}

        return cls(
            nodes={k: Node.from_dict(v) for k, v in _entities(merged, "nodes").items()},
            pins={k: Pin.from_dict(v) for k, v in _entities(merged, "pins").items()},
            links={k: Link.from_dict(v) for k, v in _entities(merged, "links").items()},
            node_types={k: NodeType.from_dict(v) for k, v in node_types.items()},
        )

    # ── Convenience queries ────────────────────────────────────────────────

    def pin_list(self) -> List[Pin]:
        return list(self.pins.values())

    def link_list(self) -> List[Link]:
        return list(self.links.values())

    def pin_by_id(self, pin_id: Any) -> Optional[Pin]:
        if not isinstance(pin_id, Hashable):
            return None
        return self.pins.get(pin_id)
