"""Structural XML event vocabulary shared by readers, writers and the codec.

Events are immutable value objects, so captured payloads can be compared,
replayed and shared between documents without copying.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Optional, Protocol, Tuple, Union

NamespaceMap = Tuple[Tuple[Optional[str], str], ...]


class TokenType(Enum):
    """Kinds of structural events."""

    START_ELEMENT = auto()
    END_ELEMENT = auto()
    CHAR_DATA = auto()
    COMMENT = auto()
    PROCESSING_INSTRUCTION = auto()


@dataclass(frozen=True)
class QName:
    """Namespace-qualified name; ``space`` is empty for unqualified names."""

    space: str
    local: str

    @classmethod
    def parse(cls, name: str) -> "QName":
        """Build a QName from Clark notation (``{uri}local``) or a bare name."""
        if name.startswith("{"):
            space, _, local = name[1:].partition("}")
            return cls(space, local)
        return cls("", name)

    @property
    def clark(self) -> str:
        """Render the name in Clark notation."""
        if self.space:
            return f"{{{self.space}}}{self.local}"
        return self.local

    def __str__(self) -> str:
        return self.clark


@dataclass(frozen=True)
class Attr:
    """Single attribute with its qualified name."""

    name: QName
    value: str

    @classmethod
    def local(cls, name: str, value: str) -> "Attr":
        """Create an unqualified attribute."""
        return cls(QName("", name), value)


def normalize_nsmap(nsmap: Optional[Iterable[Tuple[Optional[str], str]]]) -> NamespaceMap:
    """Return namespace declarations in a stable order, default namespace first.

    The default namespace is always keyed by None; lxml parser targets may
    report it with an empty prefix.
    """
    if not nsmap:
        return ()
    items = nsmap.items() if isinstance(nsmap, dict) else nsmap
    return tuple(sorted(((prefix or None, uri) for prefix, uri in items),
                        key=lambda item: item[0] or ""))


@dataclass(frozen=True)
class StartElement:
    """Element opening with attributes in document order.

    ``nsmap`` holds only the namespace declarations made on this element.
    """

    name: QName
    attrs: Tuple[Attr, ...] = ()
    nsmap: NamespaceMap = ()

    @property
    def type(self) -> TokenType:
        return TokenType.START_ELEMENT

    def end(self) -> "EndElement":
        """Return the matching closing event."""
        return EndElement(self.name)


@dataclass(frozen=True)
class EndElement:
    """Element closing."""

    name: QName

    @property
    def type(self) -> TokenType:
        return TokenType.END_ELEMENT


@dataclass(frozen=True)
class CharData:
    """Character data with entities already resolved."""

    text: str

    @property
    def type(self) -> TokenType:
        return TokenType.CHAR_DATA

    @property
    def is_whitespace(self) -> bool:
        return not self.text.strip()


@dataclass(frozen=True)
class Comment:
    """XML comment body, without the delimiters."""

    text: str

    @property
    def type(self) -> TokenType:
        return TokenType.COMMENT


@dataclass(frozen=True)
class ProcessingInstruction:
    """Processing instruction; the XML declaration uses target ``xml``."""

    target: str
    text: str = ""

    @property
    def type(self) -> TokenType:
        return TokenType.PROCESSING_INSTRUCTION

    @property
    def is_declaration(self) -> bool:
        return self.target == "xml"


Token = Union[StartElement, EndElement, CharData, Comment, ProcessingInstruction]


class TokenSource(Protocol):
    """Pull interface: one event per call, ``None`` at end of stream."""

    def token(self) -> Optional[Token]:
        ...


class TokenSink(Protocol):
    """Push interface accepting the same events a TokenSource yields."""

    def write(self, token: Token) -> None:
        ...

    def flush(self) -> None:
        ...
