"""Tests for the lxml-backed token writer."""

import io

import pytest

from graphml_codec.tokens import (
    Attr,
    CharData,
    Comment,
    ProcessingInstruction,
    QName,
    StartElement,
    XMLTokenReader,
    XMLTokenWriter,
    declaration_params,
)


def _write(tokens, encoding="utf-8"):
    buffer = io.BytesIO()
    with XMLTokenWriter(buffer, encoding=encoding) as writer:
        for tok in tokens:
            writer.write(tok)
    return buffer.getvalue()


class TestXMLTokenWriter:
    """Test suite for XMLTokenWriter."""

    def test_events_read_back_unchanged(self) -> None:
        """Test that written events are read back as the same events."""
        start = StartElement(QName("", "a"), (Attr.local("x", "1"), Attr.local("y", "<&>")))
        tokens = [
            start,
            CharData("1 < 2"),
            Comment("c"),
            ProcessingInstruction("p", "d"),
            StartElement(QName("", "b")),
            StartElement(QName("", "b")).end(),
            start.end(),
        ]

        output = _write(tokens)

        assert b"1 &lt; 2" in output
        assert list(XMLTokenReader(output)) == tokens

    def test_namespace_declarations(self) -> None:
        """Test that per-element namespace declarations are written."""
        root = StartElement(QName("urn:d", "r"), (), ((None, "urn:d"), ("y", "urn:y")))
        child = StartElement(QName("urn:y", "c"), (Attr(QName("urn:y", "k"), "v"),))
        tokens = [root, child, child.end(), root.end()]

        output = _write(tokens)

        assert b'xmlns="urn:d"' in output
        assert b'xmlns:y="urn:y"' in output
        assert list(XMLTokenReader(output)) == tokens

    def test_declaration_written_verbatim(self) -> None:
        """Test that a matching declaration keeps its original text."""
        decl = ProcessingInstruction("xml", 'version="1.0" encoding="UTF-8" standalone="no"')
        root = StartElement(QName("", "a"))

        output = _write([decl, root, root.end()], encoding="UTF-8")

        assert output.startswith(b'<?xml version="1.0" encoding="UTF-8" standalone="no"?>')
        assert list(XMLTokenReader(output))[0] == decl

    def test_declaration_with_other_encoding_is_rewritten(self) -> None:
        """Test that a declaration contradicting the output encoding is replaced."""
        decl = ProcessingInstruction("xml", 'version="1.0" encoding="ISO-8859-1"')
        root = StartElement(QName("", "a"))

        output = _write([decl, root, root.end()])

        assert output.startswith(b"<?xml")
        assert b"ISO-8859-1" not in output

    def test_depth_tracking(self) -> None:
        """Test the number of open elements."""
        buffer = io.BytesIO()
        root = StartElement(QName("", "a"))
        with XMLTokenWriter(buffer) as writer:
            writer.write(root)
            assert writer.depth == 1
            writer.write(root.end())
            assert writer.depth == 0

    def test_unsupported_token(self) -> None:
        """Test that unknown objects are rejected."""
        buffer = io.BytesIO()
        root = StartElement(QName("", "a"))
        with XMLTokenWriter(buffer) as writer:
            with pytest.raises(TypeError, match="unsupported token"):
                writer.write("text")  # type: ignore[arg-type]
            writer.write(root)
            writer.write(root.end())


class TestDeclarationParams:
    """Test suite for declaration_params."""

    def test_parses_both_quote_styles(self) -> None:
        """Test pseudo-attribute parsing."""
        params = declaration_params("version='1.0' encoding=\"UTF-8\" standalone='yes'")

        assert params == {"version": "1.0", "encoding": "UTF-8", "standalone": "yes"}

    def test_empty_body(self) -> None:
        """Test that an empty declaration body yields no parameters."""
        assert declaration_params("") == {}
