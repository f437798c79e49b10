"""
patchgraph Transformer — Project Checker
=========================================
Optional structural checks for hand-edited project documents.

``transform`` accepts anything and degrades silently; this module is the
place to find out what it degraded.  It never influences the transform.

Reported issues
---------------
  - ``patches`` / ``nodeTypes`` that are not objects
  - node, pin or link ids defined by more than one patch (later patch wins
    in the merge, silently)
  - nodes whose ``typeId`` has no node type
  - pins with a missing owner node, an undeclared key, or a duplicated
    ``(nodeId, key)`` pair
  - links without exactly two pin ids, with missing endpoints, or running
    from a non-output pin / into a non-input pin
  - node-type pins with a direction or type outside the known set
"""

from __future__ import annotations

import warnings
from collections.abc import Hashable
from typing import Any, Dict, List, Mapping, Set, Tuple

from patchgraph.core.Types import PinDirection, PinType

from .ir import NodeType
from .merger import ProjectContext


class SchemaError(ValueError):
    """Raised by ``check_project(strict=True)`` when a project has issues."""

    def __init__(self, issues: List[str]):
        self.issues = list(issues)
        super().__init__(
            f"{len(self.issues)} project issue(s):\n" + "\n".join(f"  - {i}" for i in self.issues)
        )


# ── Individual checks ─────────────────────────────────────────────────────────

def _check_top_level(project: Any) -> List[str]:
    if not isinstance(project, Mapping):
        return ["project must be an object"]
    issues = []
    for key in ("patches", "nodeTypes"):
        if key in project and not isinstance(project[key], Mapping):
            issues.append(f"'{key}' must be an object")
    return issues


def _check_collisions(project: Any) -> List[str]:
    patches = project.get("patches") if isinstance(project, Mapping) else None
    if not isinstance(patches, Mapping):
        return []

    issues = []
    for section in ("nodes", "pins", "links"):
        owner: Dict[Any, Any] = {}
        for patch_id, patch in patches.items():
            entries = patch.get(section) if isinstance(patch, Mapping) else None
            if not isinstance(entries, Mapping):
                continue
            for entry_id in entries:
                if entry_id in owner:
                    issues.append(
                        f"{section}['{entry_id}'] is defined in patch '{owner[entry_id]}' "
                        f"and overridden by patch '{patch_id}'"
                    )
                owner[entry_id] = patch_id
    return issues


def _check_node_types(node_types: Dict[str, NodeType]) -> List[str]:
    issues = []
    for type_id, node_type in node_types.items():
        for key, pin in node_type.pins.items():
            ctx = f"nodeTypes['{type_id}'].pins['{key}']"
            if not isinstance(pin.direction, PinDirection):
                issues.append(f"{ctx}: unknown direction {pin.direction!r}")
            if not isinstance(pin.type, PinType):
                issues.append(f"{ctx}: unknown type {pin.type!r}")
    return issues


def _check_nodes(ctx: ProjectContext) -> List[str]:
    return [
        f"nodes['{node_id}']: unknown node type {node.type_id!r}"
        for node_id, node in ctx.nodes.items()
        if not (isinstance(node.type_id, Hashable) and node.type_id in ctx.node_types)
    ]


def _pin_declaration(ctx: ProjectContext, pin_id: Any):
    """Node-type pin declared for a pin instance, or None."""
    pin = ctx.pin_by_id(pin_id)
    if pin is None or not isinstance(pin.node_id, Hashable):
        return None
    node = ctx.nodes.get(pin.node_id)
    if node is None or not isinstance(node.type_id, Hashable):
        return None
    node_type = ctx.node_types.get(node.type_id)
    if node_type is None:
        return None
    return next((p for p in node_type.pins.values() if p.key == pin.key), None)


def _check_pins(ctx: ProjectContext) -> List[str]:
    issues = []
    seen: Set[Tuple[Any, Any]] = set()
    for pin_id, pin in ctx.pins.items():
        label = f"pins['{pin_id}']"
        if not (isinstance(pin.node_id, Hashable) and pin.node_id in ctx.nodes):
            issues.append(f"{label}: owner node {pin.node_id!r} not found")
            continue
        node = ctx.nodes[pin.node_id]
        known_type = isinstance(node.type_id, Hashable) and node.type_id in ctx.node_types
        if known_type and _pin_declaration(ctx, pin_id) is None:
            issues.append(f"{label}: key {pin.key!r} is not declared by node type '{node.type_id}'")
        if isinstance(pin.key, Hashable):
            if (pin.node_id, pin.key) in seen:
                issues.append(f"{label}: duplicate pin {pin.key!r} on node '{pin.node_id}'")
            seen.add((pin.node_id, pin.key))
    return issues


def _check_links(ctx: ProjectContext) -> List[str]:
    issues = []
    for link_id, link in ctx.links.items():
        label = f"links['{link_id}']"
        if len(link.pins) != 2:
            issues.append(f"{label}: expected 2 pin ids, got {len(link.pins)}")
            continue

        for end, pin_id, expected in (
            ("source", link.source, PinDirection.OUTPUT),
            ("destination", link.destination, PinDirection.INPUT),
        ):
            if ctx.pin_by_id(pin_id) is None:
                issues.append(f"{label}: {end} pin {pin_id!r} not found")
                continue
            declared = _pin_declaration(ctx, pin_id)
            if declared is not None and declared.direction != expected:
                issues.append(
                    f"{label}: {end} pin {pin_id!r} should be {expected.value}, "
                    f"is {getattr(declared.direction, 'value', declared.direction)!r}"
                )
    return issues


# ── Public checker ───────────────────────────────────────────────────────────

def check_project(project: Any, *, strict: bool = False) -> List[str]:
    """
    Check a parsed project dict for the problems ``transform`` would hide.

    Args:
        project: The parsed project dict.
        strict:  When True, raise SchemaError if any issue is found.
                 When False (default), every issue produces a warning.

    Returns:
        The list of issue messages (empty for a clean project).

    Raises:
        SchemaError: In strict mode, when at least one issue is found.
    """
    issues = _check_top_level(project)
    if isinstance(project, Mapping):
        ctx = ProjectContext.from_project(project)
        issues += _check_collisions(project)
        issues += _check_node_types(ctx.node_types)
        issues += _check_nodes(ctx)
        issues += _check_pins(ctx)
        issues += _check_links(ctx)

    if issues and strict:
        raise SchemaError(issues)
    for issue in issues:
        warnings.warn(issue, stacklevel=2)
    return issues


__all__ = ["SchemaError", "check_project"]
