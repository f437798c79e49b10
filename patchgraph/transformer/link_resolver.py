"""
patchgraph Transformer — Link Resolver
=======================================
Traces one output pin of a node forward through the merged link graph.

    NodeTypePin ──[pin_by_node_type_pin]──▶ Pin
    Pin         ──[outgoing_links]───────▶ [Link, …]      (fan-out)
    Link        ──[link_destination]─────▶ PinDestination {nodeId, key}

Any lookup that fails degrades to an empty result: a missing pin instance has
no links, and a link whose destination pin is missing resolves to an empty
``PinDestination``.  Link order is the merged link map's insertion order;
nothing is sorted or deduplicated.
"""

from __future__ import annotations

import logging
from typing import List

from .ir import Link, Node, NodeTypePin, Pin, PinDestination
from .merger import ProjectContext

logger = logging.getLogger(__name__)


def pin_by_node_type_pin(ctx: ProjectContext, owner_node: Node, node_type_pin: NodeTypePin) -> Pin:
    """First pin instance owned by ``owner_node`` with the node-type pin's key."""
    pin = next(
        (
            p for p in ctx.pin_list()
            if p.node_id == owner_node.id and p.key == node_type_pin.key
        ),
        None,
    )
    if pin is None:
        logger.debug(f"Node '{owner_node.id}' has no pin instance for '{node_type_pin.key}'")
        return Pin()
    return pin


def outgoing_links(ctx: ProjectContext, pin: Pin) -> List[Link]:
    if pin.is_empty():
        return []
    return [link for link in ctx.link_list() if link.source == pin.id]


def link_destination(ctx: ProjectContext, link: Link) -> PinDestination:
    pin = ctx.pin_by_id(link.destination)
    if pin is None:
        logger.warning(f"Link '{link.id}' points at missing pin '{link.destination}'")
        return PinDestination()
    return PinDestination(node_id=pin.node_id, key=pin.key)


def node_type_pin_out_links(
    ctx: ProjectContext,
    owner_node: Node,
    node_type_pin: NodeTypePin,
) -> List[PinDestination]:
    """Every destination the given output of ``owner_node`` currently feeds."""
    pin = pin_by_node_type_pin(ctx, owner_node, node_type_pin)
    return [link_destination(ctx, link) for link in outgoing_links(ctx, pin)]
