"""
patchgraph Transformer — Intermediate Representation
=====================================================
Plain dataclasses for both sides of the transformation:

    project dict  →  [merger]  →  ProjectContext (Node / Pin / Link / NodeType)
                                        ↓
                              [node_transformer]  →  TransformedNode

Input entities are built with lenient ``from_dict`` constructors: a missing
field becomes ``None`` and a value of the wrong shape becomes an empty entity.
Nothing here raises on malformed documents.

Output entities carry ``to_dict`` which produces the camelCase wire shape the
runtime consumes.  Fields left as ``None`` are omitted from that shape.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Tuple

from patchgraph.core.Types import PinDirection, PinType


def _as_mapping(data: Any) -> Mapping[str, Any]:
    return data if isinstance(data, Mapping) else {}


# ── Node type ────────────────────────────────────────────────────────────────

@dataclass
class NodeTypePin:
    key: Any = None
    direction: Any = None   # PinDirection, or the raw tag when unrecognised
    type: Any = None        # PinType, or the raw tag when unrecognised

    @classmethod
    def from_dict(cls, data: Any) -> "NodeTypePin":
        data = _as_mapping(data)
        return cls(
            key=data.get("key"),
            direction=PinDirection.parse(data.get("direction")),
            type=PinType.parse(data.get("type")),
        )


@dataclass
class NodeType:
    # pure / setup / evaluate are opaque to the transformer; None means absent.
    pure: Any = None
    setup: Any = None
    evaluate: Any = None
    pins: Dict[str, NodeTypePin] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "NodeType":
        data = _as_mapping(data)
        return cls(
            pure=data.get("pure"),
            setup=data.get("setup"),
            evaluate=data.get("evaluate"),
            pins={
                key: NodeTypePin.from_dict(spec)
                for key, spec in _as_mapping(data.get("pins")).items()
            },
        )


# ── Graph entities ───────────────────────────────────────────────────────────

@dataclass
class Node:
    id: Any = None
    type_id: Any = None

    @classmethod
    def from_dict(cls, data: Any) -> "Node":
        data = _as_mapping(data)
        return cls(id=data.get("id"), type_id=data.get("typeId"))


@dataclass
class Pin:
    id: Any = None
    node_id: Any = None
    key: Any = None

    @classmethod
    def from_dict(cls, data: Any) -> "Pin":
        data = _as_mapping(data)
        return cls(id=data.get("id"), node_id=data.get("nodeId"), key=data.get("key"))

    def is_empty(self) -> bool:
        return self.id is None


@dataclass
class Link:
    id: Any = None
    pins: Tuple[Any, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> "Link":
        data = _as_mapping(data)
        pins = data.get("pins")
        return cls(
            id=data.get("id"),
            pins=tuple(pins) if isinstance(pins, (list, tuple)) else (),
        )

    @property
    def source(self) -> Any:
        return self.pins[0] if len(self.pins) > 0 else None

    @property
    def destination(self) -> Any:
        return self.pins[1] if len(self.pins) > 1 else None


# ── Output ───────────────────────────────────────────────────────────────────

@dataclass
class PinDestination:
    node_id: Any = None
    key: Any = None

    def is_empty(self) -> bool:
        return self.node_id is None and self.key is None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.node_id is not None:
            out["nodeId"] = self.node_id
        if self.key is not None:
            out["key"] = self.key
        return out


@dataclass
class OutLink:
    pin_key: Any
    destination: PinDestination

    def to_dict(self) -> Dict[str, Any]:
        return {self.pin_key: self.destination.to_dict()}


@dataclass
class TransformedNodeType:
    pure: Any = None
    setup: Any = None
    evaluate: Any = None
    input_types: Dict[str, Any] = field(default_factory=dict)


@dataclass
class TransformedNode:
    id: Any = None
    pure: Any = None
    setup: Any = None
    evaluate: Any = None
    input_types: Dict[str, Any] = field(default_factory=dict)
    out_links: List[OutLink] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for name in ("id", "pure", "setup", "evaluate"):
            value = getattr(self, name)
            if value is not None:
                out[name] = value
        out["inputTypes"] = dict(self.input_types)
        out["outLinks"] = [link.to_dict() for link in self.out_links]
        return out
