"""GraphML document model.

Key Components:
    Document: Root container with declarations, keys, graphs and data
    Key: Custom attribute declaration scoped to an element Kind
    Graph, Node, Edge: Structural elements carrying Data values
    Data: Custom attribute value kept as a replayable event payload
"""

from .document import (
    ELEMENT_NAMES,
    EXT,
    NAMESPACE,
    Data,
    Document,
    Edge,
    EdgeDir,
    ExtObject,
    Graph,
    Key,
    Kind,
    Node,
    Object,
)

__all__ = [
    "ELEMENT_NAMES",
    "EXT",
    "NAMESPACE",
    "Data",
    "Document",
    "Edge",
    "EdgeDir",
    "ExtObject",
    "Graph",
    "Key",
    "Kind",
    "Node",
    "Object",
]
