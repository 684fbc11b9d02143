"""Tests for the typed GraphML document model."""

from graphml_codec.model import (
    Data,
    Document,
    Edge,
    EdgeDir,
    Graph,
    Key,
    Kind,
    Node,
)
from graphml_codec.tokens import Attr, CharData, Comment, QName, TokenReplay

Y = "http://www.yworks.com/xml/graphml"


class TestEnums:
    """Test suite for Kind and EdgeDir parsing."""

    def test_known_values(self) -> None:
        """Test that known values map to enum members."""
        assert Kind.parse("node") is Kind.NODE
        assert Kind.parse("all") is Kind.ALL
        assert EdgeDir.parse("undirected") is EdgeDir.UNDIRECTED

    def test_unknown_values_kept_raw(self) -> None:
        """Test that unknown values survive as plain strings."""
        assert Kind.parse("hypernode") == "hypernode"
        assert not isinstance(Kind.parse("hypernode"), Kind)
        assert EdgeDir.parse("mixed") == "mixed"


class TestAttributeMarshalling:
    """Test suite for add_attr/attrs on every element kind."""

    def test_key_attribute_order(self) -> None:
        """Test that typed key attributes precede unrecognized ones."""
        key = Key()
        for attr in [
            Attr.local("attr.type", "string"),
            Attr.local("yfiles.type", "nodegraphics"),
            Attr.local("for", "node"),
            Attr.local("id", "d0"),
            Attr.local("attr.name", "label"),
        ]:
            key.add_attr(attr)

        assert key.for_ is Kind.NODE
        assert key.attrs() == [
            Attr.local("id", "d0"),
            Attr.local("for", "node"),
            Attr.local("attr.name", "label"),
            Attr.local("attr.type", "string"),
            Attr.local("yfiles.type", "nodegraphics"),
        ]

    def test_key_optional_attributes_omitted(self) -> None:
        """Test that empty name and type are not emitted."""
        key = Key.new(Kind.ALL, "d1")

        assert key.attrs() == [Attr.local("id", "d1"), Attr.local("for", "all")]

    def test_key_unknown_scope_round_trips(self) -> None:
        """Test that an unknown for value is written back unchanged."""
        key = Key()
        key.add_attr(Attr.local("for", "hypernode"))

        assert key.attrs()[-1] == Attr.local("for", "hypernode")

    def test_graph_attributes(self) -> None:
        """Test graph id, edgedefault and extra attributes."""
        graph = Graph()
        graph.add_attr(Attr.local("parse.order", "free"))
        graph.add_attr(Attr.local("edgedefault", "directed"))
        graph.add_attr(Attr.local("id", "G"))

        assert graph.edgedefault is EdgeDir.DIRECTED
        assert graph.attrs() == [
            Attr.local("id", "G"),
            Attr.local("edgedefault", "directed"),
            Attr.local("parse.order", "free"),
        ]

    def test_graph_without_edgedefault(self) -> None:
        """Test that an empty edgedefault is omitted."""
        assert Graph(id="G").attrs() == [Attr.local("id", "G")]

    def test_node_without_id(self) -> None:
        """Test that an empty id is omitted."""
        assert Node().attrs() == []

    def test_edge_attributes(self) -> None:
        """Test that source and target follow the id."""
        edge = Edge()
        edge.add_attr(Attr.local("target", "n1"))
        edge.add_attr(Attr.local("directed", "false"))
        edge.add_attr(Attr.local("source", "n0"))

        assert edge.attrs() == [
            Attr.local("source", "n0"),
            Attr.local("target", "n1"),
            Attr.local("directed", "false"),
        ]

    def test_qualified_attributes_are_never_typed(self) -> None:
        """Test that a namespaced id is kept as an unrecognized attribute."""
        node = Node()
        foreign_id = Attr(QName(Y, "id"), "x")
        node.add_attr(foreign_id)

        assert node.id == ""
        assert node.unrecognized == [foreign_id]

    def test_data_attributes(self) -> None:
        """Test that the key comes first on data elements."""
        data = Data()
        data.add_attr(Attr.local("lang", "en"))
        data.add_attr(Attr.local("key", "d0"))

        assert data.attrs() == [Attr.local("key", "d0"), Attr.local("lang", "en")]


class TestData:
    """Test suite for Data payload access."""

    def test_reader_replays_payload(self) -> None:
        """Test that reader() replays the captured events."""
        payload = [CharData("a"), Comment("c"), CharData("b")]
        data = Data(key="d0", payload=payload)

        reader = data.reader()

        assert isinstance(reader, TokenReplay)
        assert list(reader) == payload
        assert data.text == "ab"

    def test_from_text(self) -> None:
        """Test building a plain text value."""
        assert Data.from_text("d0", "red").payload == [CharData("red")]
        assert Data.from_text("d0", "").payload == []


class TestDocument:
    """Test suite for Document helpers."""

    def _document(self) -> Document:
        inner = Graph(id="n0:", nodes=[Node(id="n0::n0")])
        outer = Graph(
            id="G",
            nodes=[Node(id="n0", graphs=[inner]), Node(id="n1")],
            edges=[Edge(id="e0", source="n0", target="n1")],
        )
        inner.edges.append(Edge(source="n0::n0", target="n0::n0"))
        return Document(
            keys=[Key.new(Kind.ALL, "d0", "color"), Key.new(Kind.NODE, "d0", "label")],
            graphs=[outer],
        )

    def test_find_key_prefers_scoped(self) -> None:
        """Test that a kind-specific key wins over an all key."""
        doc = self._document()

        assert doc.find_key("d0", Kind.NODE).name == "label"
        assert doc.find_key("d0", Kind.EDGE).name == "color"
        assert doc.find_key("missing", Kind.NODE) is None

    def test_iter_graphs(self) -> None:
        """Test depth-first graph traversal."""
        assert [g.id for g in self._document().iter_graphs()] == ["G", "n0:"]

    def test_iter_nodes_and_edges(self) -> None:
        """Test traversal into subgraphs."""
        graph = self._document().graphs[0]

        assert [n.id for n in graph.iter_nodes()] == ["n0", "n0::n0", "n1"]
        assert [e.source for e in graph.iter_edges()] == ["n0", "n0::n0"]
