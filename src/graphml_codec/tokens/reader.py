"""Pull-based XML event reader backed by the lxml feed parser.

The reader pushes fixed-size chunks into ``lxml.etree.XMLParser`` with a
parser target, buffers the resulting events and hands them out one at a time,
so documents of any size are decoded without building an lxml tree.
"""

import io
import re
from collections import deque
from typing import IO, Any, Deque, Dict, Iterator, Optional, Union

from lxml import etree

from graphml_codec.shared import TokenStreamError, get_logger

from .events import (
    Attr,
    CharData,
    Comment,
    EndElement,
    ProcessingInstruction,
    QName,
    StartElement,
    Token,
    normalize_nsmap,
)

InputType = Union[str, bytes, IO[Any]]

DEFAULT_CHUNK_SIZE = 65536

# libxml2 consumes the XML declaration without reporting it
_XML_DECLARATION = re.compile(rb"^(?:\xef\xbb\xbf)?\s*<\?xml\s+(.*?)\s*\?>", re.DOTALL)


class _EventTarget:
    """lxml parser target that appends one event per parser callback."""

    def __init__(self, events: Deque[Token]) -> None:
        self._events = events
        self.depth = 0
        self.root_seen = False

    def start(self, tag: str, attrib: Dict[str, str],
              nsmap: Optional[Dict[Optional[str], str]] = None) -> None:
        self.depth += 1
        self.root_seen = True
        attrs = tuple(Attr(QName.parse(name), value) for name, value in attrib.items())
        self._events.append(
            StartElement(QName.parse(tag), attrs, normalize_nsmap(nsmap))
        )

    def end(self, tag: str) -> None:
        self.depth -= 1
        self._events.append(EndElement(QName.parse(tag)))

    def data(self, data: str) -> None:
        # libxml2 splits character runs at buffer boundaries and entities
        if self._events and isinstance(self._events[-1], CharData):
            self._events[-1] = CharData(self._events[-1].text + data)
        else:
            self._events.append(CharData(data))

    def comment(self, text: str) -> None:
        self._events.append(Comment(text))

    def pi(self, target: str, data: Optional[str]) -> None:
        self._events.append(ProcessingInstruction(target, data or ""))

    def close(self) -> None:
        return None


class XMLTokenReader:
    """Token source reading XML events from bytes, text or a file object.

    Character data is coalesced, so a run of text between two markup events
    is always delivered as a single ``CharData``.

    Examples:
        >>> reader = XMLTokenReader(b'<a x="1">hi</a>')
        >>> [type(t).__name__ for t in reader]
        ['StartElement', 'CharData', 'EndElement']
    """

    def __init__(
        self,
        source: InputType,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize the reader.

        Args:
            source: XML as bytes, str, or a binary/text file object
            chunk_size: Number of bytes or characters read per feed
            correlation_id: Optional correlation ID for request tracking
        """
        if isinstance(source, bytes):
            source = io.BytesIO(source)
        elif isinstance(source, str):
            source = io.StringIO(source)
        self._stream = source
        self._chunk_size = chunk_size
        self._events: Deque[Token] = deque()
        self._target = _EventTarget(self._events)
        self._parser: Optional[etree.XMLParser] = None
        self._eof = False
        self._error: Optional[TokenStreamError] = None
        self.logger = get_logger(__name__, correlation_id, "token_reader")

    def token(self) -> Optional[Token]:
        """Return the next event, or None once the stream is exhausted.

        Raises:
            TokenStreamError: If the input is not well-formed XML
        """
        while self._needs_input():
            self._fill()
        if self._events:
            return self._events.popleft()
        if self._error is not None:
            raise self._error
        return None

    def __iter__(self) -> Iterator[Token]:
        while True:
            tok = self.token()
            if tok is None:
                return
            yield tok

    def _needs_input(self) -> bool:
        if self._eof:
            return False
        if not self._events:
            return True
        # trailing text may continue in the next chunk
        return len(self._events) == 1 and isinstance(self._events[0], CharData)

    def _fill(self) -> None:
        chunk = self._stream.read(self._chunk_size)
        is_text = isinstance(chunk, str)
        if is_text:
            chunk = chunk.encode("utf-8")

        if self._parser is None:
            self._parser = self._create_parser(chunk, is_text)

        if not chunk:
            self._finish()
            return

        try:
            self._parser.feed(chunk)
        except etree.XMLSyntaxError as e:
            self._fail(str(e))
            return

        # some libxml2 builds stop on a fatal error without raising until close
        fatals = self._parser.error_log.filter_from_fatals()
        if fatals:
            self._fail(str(fatals.last_error))

    def _fail(self, detail: str) -> None:
        self._eof = True
        self._error = TokenStreamError(f"malformed XML: {detail}")
        self.logger.debug("XML syntax error", extra={"detail": detail})

    def _create_parser(self, first_chunk: bytes, is_text: bool) -> etree.XMLParser:
        match = _XML_DECLARATION.match(first_chunk)
        if match:
            declaration = match.group(1).decode("ascii", errors="replace")
            self._events.append(ProcessingInstruction("xml", declaration))

        # text input was re-encoded above, whatever its declaration says
        return etree.XMLParser(
            target=self._target,
            encoding="utf-8" if is_text else None,
            resolve_entities="internal",
            no_network=True,
        )

    def _finish(self) -> None:
        self._eof = True
        try:
            self._parser.close()
        except etree.XMLSyntaxError as e:
            if self._target.depth > 0 or not self._target.root_seen:
                # reported as a premature end or missing root by the decoder
                self.logger.debug(
                    "Stream ended before document completed",
                    extra={"detail": str(e), "open_elements": self._target.depth},
                )
            else:
                self._error = TokenStreamError(f"malformed XML: {e}")
