"""
patchgraph Transformer
======================
Flattens a patch-based project document into the node map the runtime
evaluates.

Pipeline:
    project dict  →  [merger]          →  ProjectContext
    ProjectContext →  [type_resolver]  →  behaviour + inputTypes per node
                      [link_resolver]  →  outLinks per node
                   →  [node_transformer] →  {nodeId: TransformedNode}

Public API
----------
    from patchgraph.transformer import transform, transform_to_dict

    nodes = transform(project)             # {nodeId: TransformedNode}
    wire  = transform_to_dict(project)     # {nodeId: {"id", "inputTypes", "outLinks", ...}}

    from patchgraph.transformer import check_project
    check_project(project, strict=True)    # raises SchemaError on broken references
"""

from __future__ import annotations

from .ir import OutLink, PinDestination, TransformedNode
from .merger import ProjectContext, merge_patches
from .node_transformer import transform, transform_to_dict, transformed_node
from .schema import SchemaError, check_project


__all__ = [
    "OutLink",
    "PinDestination",
    "ProjectContext",
    "SchemaError",
    "TransformedNode",
    "check_project",
    "merge_patches",
    "transform",
    "transform_to_dict",
    "transformed_node",
]
