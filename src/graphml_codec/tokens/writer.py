"""Push-based XML event writer backed by ``lxml.etree.xmlfile``.

``xmlfile`` exposes elements as context managers; the writer keeps a stack of
entered contexts so start and end events can arrive as independent calls.
Elements are always closed with an explicit end tag, so an element without
content is written as ``<key ...></key>`` rather than ``<key .../>``; both read
back as the same events.
"""

import codecs
import re
from typing import IO, Any, List, Optional

from lxml import etree

from graphml_codec.shared import get_logger

from .events import (
    CharData,
    Comment,
    EndElement,
    ProcessingInstruction,
    StartElement,
    Token,
)

DEFAULT_ENCODING = "utf-8"

_PSEUDO_ATTR = re.compile(r"""([A-Za-z_][\w.-]*)\s*=\s*(?:"([^"]*)"|'([^']*)')""")


def declaration_params(text: str) -> dict:
    """Parse the pseudo-attributes of an XML declaration body."""
    return {
        match.group(1): match.group(2) if match.group(2) is not None else match.group(3)
        for match in _PSEUDO_ATTR.finditer(text)
    }


class XMLTokenWriter:
    """Token sink serializing events to a binary stream.

    Use as a context manager, or call ``close`` once the root element has
    been closed. Stream errors propagate unchanged.
    """

    def __init__(
        self,
        stream: IO[bytes],
        encoding: str = DEFAULT_ENCODING,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize the writer.

        Args:
            stream: Binary file-like object receiving the serialized document
            encoding: Output encoding, also written into the declaration
            correlation_id: Optional correlation ID for request tracking
        """
        self.encoding = encoding
        self._stream = stream
        self._started = False
        self._context = etree.xmlfile(stream, encoding=encoding)
        self._xf = self._context.__enter__()
        self._open: List[Any] = []
        self._closed = False
        self.logger = get_logger(__name__, correlation_id, "token_writer")

    def __enter__(self) -> "XMLTokenWriter":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        if exc_type is None:
            self.close()
        else:
            self._abort(exc_type, exc_value, traceback)

    @property
    def depth(self) -> int:
        """Number of currently open elements."""
        return len(self._open)

    def write(self, token: Token) -> None:
        """Serialize one event."""
        if isinstance(token, ProcessingInstruction) and token.is_declaration:
            self._write_declaration(token)
            return
        self._started = True
        if isinstance(token, StartElement):
            attrib = {attr.name.clark: attr.value for attr in token.attrs}
            element = self._xf.element(
                token.name.clark, attrib, nsmap=dict(token.nsmap) or None
            )
            element.__enter__()
            self._open.append(element)
        elif isinstance(token, EndElement):
            element = self._open.pop()
            element.__exit__(None, None, None)
        elif isinstance(token, CharData):
            self._xf.write(token.text)
        elif isinstance(token, Comment):
            self._xf.write(etree.Comment(token.text))
        elif isinstance(token, ProcessingInstruction):
            self._xf.write(etree.ProcessingInstruction(token.target, token.text or None))
        else:
            raise TypeError(f"unsupported token: {token!r}")

    def flush(self) -> None:
        """Flush buffered output to the stream."""
        self._xf.flush()

    def close(self) -> None:
        """Finish the document; every opened element must have been closed."""
        if self._closed:
            return
        self._closed = True
        if self._open:
            self.logger.warning(
                "Closing writer with open elements", extra={"open_elements": len(self._open)}
            )
        self._context.__exit__(None, None, None)

    def _abort(self, exc_type, exc_value, traceback) -> None:
        if self._closed:
            return
        self._closed = True
        self._context.__exit__(exc_type, exc_value, traceback)

    def _write_declaration(self, token: ProcessingInstruction) -> None:
        """Write the declaration verbatim unless it contradicts the output encoding."""
        params = declaration_params(token.text)
        declared = params.get("encoding", DEFAULT_ENCODING)
        matches = codecs.lookup(declared).name == codecs.lookup(self.encoding).name
        if matches and not self._started:
            # xmlfile has buffered nothing yet, so this lands first
            self._stream.write(f"<?xml {token.text}?>\n".encode("ascii"))
        else:
            standalone = params.get("standalone")
            self._xf.write_declaration(
                version=params.get("version"),
                standalone=None if standalone is None else standalone == "yes",
            )
        self._started = True
