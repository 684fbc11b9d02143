"""Streaming GraphML encoder.

The encoder is the mirror of the decoder: it walks a ``Document`` and pushes
events to a token sink in the same structural order the decoder stored them,
rebuilding each element's attributes through its ``attrs()`` contract. It
performs no validation.
"""

from typing import List, Optional

from graphml_codec.model import (
    ELEMENT_NAMES,
    Data,
    Document,
    Edge,
    Graph,
    Key,
    Node,
)
from graphml_codec.shared import CodecMetrics, EncoderConfig, get_logger
from graphml_codec.tokens import (
    Attr,
    CharData,
    EndElement,
    QName,
    StartElement,
    Token,
    TokenSink,
    normalize_nsmap,
)


class Encoder:
    """GraphML encoder over a token sink."""

    def __init__(
        self,
        sink: TokenSink,
        config: Optional[EncoderConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize the encoder.

        Args:
            sink: Token sink receiving structural events
            config: Encoder configuration, defaults to ``EncoderConfig()``
            correlation_id: Optional correlation ID for request tracking
        """
        self._sink = sink
        self.config = config or EncoderConfig()
        self.metrics = CodecMetrics()
        self.logger = get_logger(__name__, correlation_id, "encoder")
        self._namespace = ""

    def encode(self, doc: Document) -> None:
        """Write ``doc`` to the sink and flush it.

        Sink errors propagate unchanged.
        """
        self.metrics = CodecMetrics()
        self._namespace = doc.namespace
        self.logger.info("Starting GraphML encode", extra={"graphs": len(doc.graphs)})

        if doc.declaration is not None and self.config.write_declaration:
            self._token(doc.declaration)
        for instruction in doc.instructions:
            self._token(instruction)

        nsmap = dict(doc.nsmap)
        if doc.namespace and doc.namespace not in nsmap.values():
            nsmap[None] = doc.namespace
        root = StartElement(self._name("graphml"), tuple(doc.attrs), normalize_nsmap(nsmap))
        self._token(root)

        for key in doc.keys:
            self._encode_key(key, 1)
        for graph in doc.graphs:
            self._encode_graph(graph, 1)
        self._encode_data(doc.data, 1)

        self._indent(0)
        self._token(root.end())
        self._sink.flush()

        self.metrics.finish()
        self.logger.info(
            "GraphML encode completed",
            extra={
                "tokens_written": self.metrics.tokens_processed,
                "processing_time_ms": self.metrics.processing_time_ms,
            },
        )

    def _name(self, local: str) -> QName:
        return QName(self._namespace, local)

    def _token(self, tok: Token) -> None:
        self._sink.write(tok)
        if self.config.collect_metrics:
            self.metrics.tokens_processed += 1

    def _indent(self, depth: int) -> None:
        if self.config.indent is not None:
            self._token(CharData("\n" + self.config.indent * depth))

    def _start(self, element: object, attrs: List[Attr], depth: int) -> StartElement:
        name = ELEMENT_NAMES[type(element)]
        if self.config.collect_metrics:
            self.metrics.add_element(name)
        self._indent(depth)
        start = StartElement(self._name(name), tuple(attrs))
        self._token(start)
        return start

    def _end(self, start: StartElement, depth: int, has_children: bool) -> None:
        if has_children:
            self._indent(depth)
        self._token(start.end())

    def _payload(self, tokens: List[Token]) -> None:
        for tok in tokens:
            self._token(tok)
        if self.config.collect_metrics:
            self.metrics.payload_tokens += len(tokens)

    def _encode_key(self, key: Key, depth: int) -> None:
        start = self._start(key, key.attrs(), depth)
        if key.default is not None:
            self._indent(depth + 1)
            default = StartElement(self._name("default"), tuple(key.default_attrs))
            self._token(default)
            self._payload(key.default)
            self._token(default.end())
        self._end(start, depth, key.default is not None)

    def _encode_data(self, data: List[Data], depth: int) -> None:
        for item in data:
            start = self._start(item, item.attrs(), depth)
            self._payload(item.payload)
            self._token(start.end())

    def _encode_graph(self, graph: Graph, depth: int) -> None:
        start = self._start(graph, graph.attrs(), depth)
        self._encode_data(graph.data, depth + 1)
        for node in graph.nodes:
            self._encode_node(node, depth + 1)
        for edge in graph.edges:
            self._encode_edge(edge, depth + 1)
        self._end(start, depth, bool(graph.data or graph.nodes or graph.edges))

    def _encode_node(self, node: Node, depth: int) -> None:
        start = self._start(node, node.attrs(), depth)
        self._encode_data(node.data, depth + 1)
        for graph in node.graphs:
            self._encode_graph(graph, depth + 1)
        self._end(start, depth, bool(node.data or node.graphs))

    def _encode_edge(self, edge: Edge, depth: int) -> None:
        start = self._start(edge, edge.attrs(), depth)
        self._encode_data(edge.data, depth + 1)
        self._end(start, depth, bool(edge.data))


def encode_tokens(
    doc: Document,
    sink: TokenSink,
    config: Optional[EncoderConfig] = None,
    correlation_id: Optional[str] = None,
) -> None:
    """Encode a document to any token sink."""
    Encoder(sink, config, correlation_id).encode(doc)
