"""Typed GraphML document model.

Every element kind implements the same attribute marshalling pair:
``add_attr`` absorbs one raw attribute into a typed field (or keeps it
verbatim when unrecognized) and ``attrs`` rebuilds the ordered attribute list
for re-emission. The order produced by ``attrs`` is part of the round-trip
contract.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Union

from graphml_codec.tokens import (
    Attr,
    CharData,
    ProcessingInstruction,
    Token,
    TokenReplay,
)

# Canonical XML namespace for GraphML
NAMESPACE = "http://graphml.graphdrawing.org/xmlns"
# File extension for GraphML files
EXT = ".graphml"


class Kind(str, Enum):
    """Element kind a key declaration applies to."""

    ALL = "all"
    GRAPHML = "graphml"
    GRAPH = "graph"
    NODE = "node"
    EDGE = "edge"
    HYPEREDGE = "hyperedge"
    PORT = "port"
    ENDPOINT = "endpoint"

    @classmethod
    def parse(cls, value: str) -> Union["Kind", str]:
        """Return the matching Kind, or the raw value when it is not one."""
        try:
            return cls(value)
        except ValueError:
            return value


class EdgeDir(str, Enum):
    """Default direction mode for the edges of a graph."""

    DIRECTED = "directed"
    UNDIRECTED = "undirected"

    @classmethod
    def parse(cls, value: str) -> Union["EdgeDir", str]:
        """Return the matching EdgeDir, or the raw value when it is not one."""
        try:
            return cls(value)
        except ValueError:
            return value


def _raw(value: Union[Enum, str]) -> str:
    return value.value if isinstance(value, Enum) else value


def _known(attr: Attr) -> Optional[str]:
    """Local name of an unqualified attribute; qualified ones are never typed."""
    return None if attr.name.space else attr.name.local


@dataclass
class Object:
    """Attributes shared by keys, graphs, nodes and edges."""

    id: str = ""
    unrecognized: List[Attr] = field(default_factory=list)

    def add_attr(self, attr: Attr) -> None:
        if _known(attr) == "id":
            self.id = attr.value
        else:
            self.unrecognized.append(attr)

    def attrs(self) -> List[Attr]:
        """Typed attributes in fixed order, then unrecognized ones as read."""
        return [*self._typed_attrs(), *self.unrecognized]

    def _typed_attrs(self) -> List[Attr]:
        return [Attr.local("id", self.id)] if self.id else []


@dataclass
class Data:
    """Raw XML value of a custom attribute.

    The payload holds every event between ``<data>`` and ``</data>``,
    including comments and whitespace, so it can be replayed verbatim.
    """

    key: str = ""
    unrecognized: List[Attr] = field(default_factory=list)
    payload: List[Token] = field(default_factory=list)

    def add_attr(self, attr: Attr) -> None:
        if _known(attr) == "key":
            self.key = attr.value
        else:
            self.unrecognized.append(attr)

    def attrs(self) -> List[Attr]:
        return [Attr.local("key", self.key), *self.unrecognized]

    def reader(self) -> TokenReplay:
        """Return a token source replaying the payload."""
        return TokenReplay(self.payload)

    @property
    def text(self) -> str:
        """Concatenated character data of the payload."""
        return "".join(tok.text for tok in self.payload if isinstance(tok, CharData))

    @classmethod
    def from_text(cls, key: str, text: str) -> "Data":
        """Create a data element holding plain text."""
        return cls(key=key, payload=[CharData(text)] if text else [])


@dataclass
class ExtObject(Object):
    """Object that can carry custom attribute values."""

    data: List[Data] = field(default_factory=list)


@dataclass
class Key(Object):
    """Declaration of a custom attribute.

    ``default`` holds the raw events of an optional ``<default>`` child;
    None means the key is written as an empty element.
    """

    for_: Union[Kind, str] = ""
    name: str = ""
    type: str = ""
    default: Optional[List[Token]] = None
    default_attrs: List[Attr] = field(default_factory=list)

    @classmethod
    def new(
        cls,
        kind: Union[Kind, str],
        id: str,
        name: str = "",
        type: str = "",
        default: Optional[str] = None,
    ) -> "Key":
        """Create a key declaration for the given element kind."""
        key = cls(id=id, for_=kind, name=name, type=type)
        if default is not None:
            key.default = [CharData(default)] if default else []
        return key

    def add_attr(self, attr: Attr) -> None:
        name = _known(attr)
        if name == "for":
            self.for_ = Kind.parse(attr.value)
        elif name == "attr.name":
            self.name = attr.value
        elif name == "attr.type":
            self.type = attr.value
        else:
            super().add_attr(attr)

    def _typed_attrs(self) -> List[Attr]:
        out = super()._typed_attrs()
        out.append(Attr.local("for", _raw(self.for_)))
        if self.name:
            out.append(Attr.local("attr.name", self.name))
        if self.type:
            out.append(Attr.local("attr.type", self.type))
        return out


@dataclass
class Node(ExtObject):
    """Node of a graph, optionally holding subgraphs."""

    graphs: List["Graph"] = field(default_factory=list)


@dataclass
class Edge(ExtObject):
    """Connection between two nodes; endpoints are not resolved."""

    source: str = ""
    target: str = ""

    def add_attr(self, attr: Attr) -> None:
        name = _known(attr)
        if name == "source":
            self.source = attr.value
        elif name == "target":
            self.target = attr.value
        else:
            super().add_attr(attr)

    def _typed_attrs(self) -> List[Attr]:
        out = super()._typed_attrs()
        out.append(Attr.local("source", self.source))
        out.append(Attr.local("target", self.target))
        return out


@dataclass
class Graph(ExtObject):
    """Set of nodes and edges."""

    edgedefault: Union[EdgeDir, str] = ""
    nodes: List[Node] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)

    def add_attr(self, attr: Attr) -> None:
        if _known(attr) == "edgedefault":
            self.edgedefault = EdgeDir.parse(attr.value)
        else:
            super().add_attr(attr)

    def _typed_attrs(self) -> List[Attr]:
        out = super()._typed_attrs()
        if self.edgedefault:
            out.append(Attr.local("edgedefault", _raw(self.edgedefault)))
        return out

    def iter_nodes(self) -> Iterator[Node]:
        """Yield every node depth-first, descending into subgraphs."""
        for node in self.nodes:
            yield node
            for sub in node.graphs:
                yield from sub.iter_nodes()

    def iter_edges(self) -> Iterator[Edge]:
        """Yield every edge, including those of nested subgraphs."""
        yield from self.edges
        for node in self.nodes:
            for sub in node.graphs:
                yield from sub.iter_edges()


# Local element name for each modeled element kind
ELEMENT_NAMES: Dict[type, str] = {
    Key: "key",
    Graph: "graph",
    Node: "node",
    Edge: "edge",
    Data: "data",
}


@dataclass
class Document:
    """Self-contained GraphML document."""

    declaration: Optional[ProcessingInstruction] = None
    instructions: List[ProcessingInstruction] = field(default_factory=list)
    namespace: str = NAMESPACE
    nsmap: Dict[Optional[str], str] = field(default_factory=dict)
    attrs: List[Attr] = field(default_factory=list)
    keys: List[Key] = field(default_factory=list)
    graphs: List[Graph] = field(default_factory=list)
    data: List[Data] = field(default_factory=list)

    def find_key(self, id: str, kind: Union[Kind, str]) -> Optional[Key]:
        """Resolve a key id for an element kind, preferring scoped keys."""
        fallback = None
        for key in self.keys:
            if key.id != id:
                continue
            if key.for_ == kind:
                return key
            if key.for_ in (Kind.ALL, "") and fallback is None:
                fallback = key
        return fallback

    def iter_graphs(self) -> Iterator[Graph]:
        """Yield every graph depth-first, including subgraphs."""
        def _walk(graph: Graph) -> Iterator[Graph]:
            yield graph
            for node in graph.nodes:
                for sub in node.graphs:
                    yield from _walk(sub)

        for graph in self.graphs:
            yield from _walk(graph)
