"""Streaming recursive-descent GraphML decoder.

The decoder pulls structural events from a token source and builds a
``Document``, enforcing key scoping, document-wide id uniqueness and the
GraphML nesting rules as it goes. Only a fully decoded root element produces
a document; any violation raises and nothing partial is returned.
"""

import logging
from typing import Any, Dict, Iterator, List, Optional, Tuple

from graphml_codec.model import (
    NAMESPACE,
    Data,
    Document,
    Edge,
    Graph,
    Key,
    Kind,
    Node,
)
from graphml_codec.shared import (
    CodecMetrics,
    DecoderConfig,
    GraphMLError,
    MalformedRootError,
    PrematureEndError,
    UnexpectedElementError,
    UnexpectedTokenError,
    get_logger,
)
from graphml_codec.tokens import (
    CharData,
    Comment,
    EndElement,
    ProcessingInstruction,
    StartElement,
    Token,
    TokenSource,
)

from .schema import SchemaContext

# Child elements each element may contain
NESTING: Dict[str, Tuple[str, ...]] = {
    "graphml": ("key", "graph", "data"),
    "key": ("default",),
    "graph": ("data", "node", "edge"),
    "node": ("data", "graph"),
    "edge": ("data",),
}

# Kind that data elements are resolved against, per owning element
_DATA_KIND: Dict[str, Kind] = {
    "graphml": Kind.GRAPHML,
    "graph": Kind.GRAPH,
    "node": Kind.NODE,
    "edge": Kind.EDGE,
}


def can_skip(tok: Token) -> bool:
    """Whitespace and comments between structural elements carry no meaning."""
    if isinstance(tok, Comment):
        return True
    return isinstance(tok, CharData) and tok.is_whitespace


class Decoder:
    """GraphML decoder over a token source.

    Examples:
        >>> from graphml_codec.tokens import XMLTokenReader
        >>> doc = Decoder(XMLTokenReader(open("graph.graphml", "rb"))).decode()
        >>> [n.id for n in doc.graphs[0].nodes]
        ['n0', 'n1']
    """

    def __init__(
        self,
        source: TokenSource,
        config: Optional[DecoderConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize the decoder.

        Args:
            source: Token source yielding structural events
            config: Decoder configuration, defaults to ``DecoderConfig()``
            correlation_id: Optional correlation ID for request tracking
        """
        self._source = source
        self.config = config or DecoderConfig()
        self.metrics = CodecMetrics()
        self.logger = get_logger(__name__, correlation_id, "decoder")
        self._namespace = NAMESPACE

    def decode(self) -> Document:
        """Decode one complete document from the source.

        Returns:
            The decoded Document

        Raises:
            GraphMLError: If the stream violates GraphML structure or schema rules
        """
        self.metrics = CodecMetrics()
        self.logger.info("Starting GraphML decode")

        doc = Document()
        schema = SchemaContext()
        try:
            self._decode_document(doc, schema)
        except GraphMLError as e:
            self.logger.error(
                "GraphML decode failed",
                extra={
                    "error_type": type(e).__name__,
                    "element": e.element,
                    "identifier": e.identifier,
                    "tokens_processed": self.metrics.tokens_processed,
                },
            )
            raise

        self.metrics.finish()
        self.logger.info(
            "GraphML decode completed",
            extra={
                "keys": len(doc.keys),
                "graphs": len(doc.graphs),
                "ids": len(schema.ids),
                "tokens_processed": self.metrics.tokens_processed,
                "processing_time_ms": self.metrics.processing_time_ms,
            },
        )
        return doc

    def _next(self) -> Optional[Token]:
        tok = self._source.token()
        if tok is not None and self.config.collect_metrics:
            self.metrics.tokens_processed += 1
        return tok

    def _require(self, start: StartElement) -> Token:
        tok = self._next()
        if tok is None:
            raise PrematureEndError(
                f"stream ended inside <{start.name.local}>", element=start.name.local
            )
        return tok

    def _count(self, name: str) -> None:
        if self.config.collect_metrics:
            self.metrics.add_element(name)

    def _decode_document(self, doc: Document, schema: SchemaContext) -> None:
        start = self._start_root(doc)
        self._namespace = start.name.space
        doc.namespace = start.name.space
        doc.nsmap = dict(start.nsmap)
        doc.attrs = list(start.attrs)
        self._decode_children(start, doc, schema, depth=0)

    def _start_root(self, doc: Document) -> StartElement:
        while True:
            tok = self._next()
            if tok is None:
                raise MalformedRootError("missing graphml root element", element="graphml")
            if can_skip(tok):
                continue
            if isinstance(tok, ProcessingInstruction):
                if tok.is_declaration:
                    doc.declaration = tok
                else:
                    doc.instructions.append(tok)
                continue
            if isinstance(tok, StartElement) and self._is_root(tok):
                return tok
            raise MalformedRootError(
                f"expected graphml root element, got {tok!r}",
                element=tok.name.local if isinstance(tok, StartElement) else None,
            )

    def _is_root(self, start: StartElement) -> bool:
        if start.name.local != "graphml":
            return False
        if start.name.space == NAMESPACE:
            return True
        return not self.config.require_namespace and start.name.space == ""

    def _child_elements(self, start: StartElement) -> Iterator[StartElement]:
        """Yield child start events until the matching end of ``start``."""
        parent = start.name.local
        while True:
            tok = self._require(start)
            if can_skip(tok):
                continue
            if isinstance(tok, StartElement):
                if tok.name.space != self._namespace:
                    raise UnexpectedElementError(
                        f"unexpected element {tok.name} in <{parent}>",
                        element=tok.name.local,
                    )
                yield tok
                continue
            if isinstance(tok, EndElement) and tok.name == start.name:
                return
            raise UnexpectedTokenError(f"unexpected token in <{parent}>: {tok!r}", element=parent)

    def _decode_children(
        self, start: StartElement, owner: Any, schema: SchemaContext, depth: int
    ) -> None:
        """Dispatch every child of ``start`` and attach it to ``owner``."""
        parent = start.name.local
        allowed = NESTING[parent]
        for child in self._child_elements(start):
            name = child.name.local
            if name not in allowed:
                raise UnexpectedElementError(
                    f"unexpected element <{name}> in <{parent}>", element=name
                )
            if name == "data":
                owner.data.append(self._decode_data(child, _DATA_KIND[parent], schema))
            elif name == "key":
                owner.keys.append(self._decode_key(child, schema))
            elif name == "default":
                if owner.default is not None:
                    raise UnexpectedElementError(
                        f"duplicate <default> in key {owner.id!r}", element=name,
                        identifier=owner.id,
                    )
                owner.default_attrs = list(child.attrs)
                owner.default = self._capture(child)
            elif name == "graph":
                owner.graphs.append(self._decode_graph(child, schema, depth + 1))
            elif name == "node":
                owner.nodes.append(self._decode_node(child, schema, depth))
            elif name == "edge":
                owner.edges.append(self._decode_edge(child, schema, depth))

    def _decode_key(self, start: StartElement, schema: SchemaContext) -> Key:
        key = Key()
        for attr in start.attrs:
            key.add_attr(attr)
        if not key.for_:
            key.for_ = Kind.ALL
        schema.declare_key(key)
        self._count("key")
        if self.logger.is_enabled_for(logging.DEBUG):
            self.logger.debug(
                "Declared key",
                extra={"key_id": key.id, "for": getattr(key.for_, "value", key.for_)},
            )
        self._decode_children(start, key, schema, depth=0)
        return key

    def _decode_graph(self, start: StartElement, schema: SchemaContext, depth: int) -> Graph:
        if depth > self.config.max_depth:
            raise UnexpectedElementError(
                f"graph nesting exceeds max_depth={self.config.max_depth}", element="graph"
            )
        graph = Graph()
        for attr in start.attrs:
            graph.add_attr(attr)
        schema.claim_id(graph.id, "graph")
        self._count("graph")
        self._decode_children(start, graph, schema, depth)
        return graph

    def _decode_node(self, start: StartElement, schema: SchemaContext, depth: int) -> Node:
        node = Node()
        for attr in start.attrs:
            node.add_attr(attr)
        schema.claim_id(node.id, "node")
        self._count("node")
        self._decode_children(start, node, schema, depth)
        return node

    def _decode_edge(self, start: StartElement, schema: SchemaContext, depth: int) -> Edge:
        edge = Edge()
        for attr in start.attrs:
            edge.add_attr(attr)
        schema.claim_id(edge.id, "edge")
        self._count("edge")
        self._decode_children(start, edge, schema, depth)
        return edge

    def _decode_data(self, start: StartElement, kind: Kind, schema: SchemaContext) -> Data:
        data = Data()
        for attr in start.attrs:
            data.add_attr(attr)
        schema.resolve_key(data.key, kind)
        data.payload = self._capture(start)
        self._count("data")
        return data

    def _capture(self, start: StartElement) -> List[Token]:
        """Collect every event up to the end of ``start``, unfiltered."""
        payload: List[Token] = []
        depth = 0
        while True:
            tok = self._require(start)
            if isinstance(tok, EndElement) and depth == 0:
                if tok.name != start.name:
                    raise UnexpectedTokenError(
                        f"mismatched closing tag {tok.name} for <{start.name.local}>",
                        element=start.name.local,
                    )
                break
            if isinstance(tok, StartElement):
                depth += 1
            elif isinstance(tok, EndElement):
                depth -= 1
            payload.append(tok)

        if self.config.collect_metrics:
            self.metrics.payload_tokens += len(payload)
        return payload


def decode_tokens(
    source: TokenSource,
    config: Optional[DecoderConfig] = None,
    correlation_id: Optional[str] = None,
) -> Document:
    """Decode a document from any token source."""
    return Decoder(source, config, correlation_id).decode()
