"""
patchgraph Transformer — Type Resolver
=======================================
Maps nodes to their node types and node-type pins to runtime value kinds.

Node types are project-level (``project["nodeTypes"]``), not patch-level, so
they are looked up on the context rather than in the merged patch.

Native type mapping
-------------------
    pulse   → bool
    boolean → bool
    number  → float
    string  → str
    other   → the tag itself, unchanged
"""

from __future__ import annotations

import logging
from collections.abc import Hashable
from typing import Any, Dict

from patchgraph.core.Types import NATIVE_TYPES, PinDirection, PinType

from .ir import Node, NodeType, NodeTypePin, TransformedNodeType
from .merger import ProjectContext

logger = logging.getLogger(__name__)


def node_type_by_node(ctx: ProjectContext, node: Node) -> NodeType:
    """Return the node's type, or an empty ``NodeType`` when it is unknown."""
    if isinstance(node.type_id, Hashable) and node.type_id in ctx.node_types:
        return ctx.node_types[node.type_id]
    logger.warning(f"Node '{node.id}' references unknown node type '{node.type_id}'")
    return NodeType()


def pins_by_direction(node_type: NodeType, direction: PinDirection) -> Dict[str, NodeTypePin]:
    return {
        key: pin
        for key, pin in node_type.pins.items()
        if pin.direction == direction
    }


def inputs(node_type: NodeType) -> Dict[str, NodeTypePin]:
    return pins_by_direction(node_type, PinDirection.INPUT)


def outputs(node_type: NodeType) -> Dict[str, NodeTypePin]:
    return pins_by_direction(node_type, PinDirection.OUTPUT)


def native_type(tag: Any) -> Any:
    """Runtime value kind for a pin type tag; unknown tags pass through."""
    parsed = PinType.parse(tag)
    if isinstance(parsed, PinType):
        return NATIVE_TYPES[parsed]
    logger.debug(f"Unknown pin type {tag!r}, passing through")
    return tag


def input_types(node_type: NodeType) -> Dict[str, Any]:
    return {key: native_type(pin.type) for key, pin in inputs(node_type).items()}


def transformed_node_type(node_type: NodeType) -> TransformedNodeType:
    return TransformedNodeType(
        pure=node_type.pure,
        setup=node_type.setup,
        evaluate=node_type.evaluate,
        input_types=input_types(node_type),
    )
