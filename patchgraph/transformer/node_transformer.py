"""
patchgraph Transformer — Node Transformer
==========================================
Combines the resolvers into one flat record per node:

    TransformedNode = {id} ∪ transformed_node_type(type) ∪ {outLinks}

``outLinks`` walks the node type's output pins in declared order.  An output
with no live destination is left out entirely; every remaining destination is
one ``OutLink`` (wire form ``{pinKey: {nodeId, key}}``), so a fanned-out
output contributes one entry per link, in link order.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from .ir import Node, NodeType, OutLink, TransformedNode
from .link_resolver import node_type_pin_out_links
from .merger import ProjectContext
from .type_resolver import node_type_by_node, outputs, transformed_node_type

logger = logging.getLogger(__name__)


def node_out_links(
    ctx: ProjectContext,
    node: Node,
    node_type: Optional[NodeType] = None,
) -> List[OutLink]:
    if node_type is None:
        node_type = node_type_by_node(ctx, node)
    out_links: List[OutLink] = []
    for key, pin in outputs(node_type).items():
        destinations = node_type_pin_out_links(ctx, node, pin)
        if not destinations:
            continue
        out_links.extend(OutLink(pin_key=key, destination=d) for d in destinations)
    return out_links


def transformed_node(ctx: ProjectContext, node: Node) -> TransformedNode:
    node_type = node_type_by_node(ctx, node)
    behaviour = transformed_node_type(node_type)
    return TransformedNode(
        id=node.id,
        pure=behaviour.pure,
        setup=behaviour.setup,
        evaluate=behaviour.evaluate,
        input_types=behaviour.input_types,
        out_links=node_out_links(ctx, node, node_type),
    )


def transform(project: Any) -> Dict[str, TransformedNode]:
    """
    Transform a project document into the runtime's node map.

    Args:
        project: The parsed project dict (``patches`` + ``nodeTypes``).

    Returns:
        ``{nodeId: TransformedNode}`` in merged node order.  Never raises;
        broken references degrade to empty values.
    """
    ctx = ProjectContext.from_project(project)
    result = {node_id: transformed_node(ctx, node) for node_id, node in ctx.nodes.items()}
    logger.debug(f"Transformed {len(result)} node(s)")
    return result


def transform_to_dict(project: Any) -> Dict[str, Dict[str, Any]]:
    """Same as ``transform`` but in the runtime's wire shape."""
    return {node_id: node.to_dict() for node_id, node in transform(project).items()}
