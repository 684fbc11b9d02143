"""Structural XML events and their sources and sinks.

Key Components:
    XMLTokenReader: Pull-based event source over bytes, text or file objects
    XMLTokenWriter: Push-based event sink over a binary stream
    TokenReplay: Source replaying a captured event sequence
    StartElement, EndElement, CharData, Comment, ProcessingInstruction: Events
"""

from .events import (
    Attr,
    CharData,
    Comment,
    EndElement,
    NamespaceMap,
    ProcessingInstruction,
    QName,
    StartElement,
    Token,
    TokenSink,
    TokenSource,
    TokenType,
    normalize_nsmap,
)
from .reader import XMLTokenReader
from .replay import TokenReplay
from .writer import XMLTokenWriter, declaration_params

__all__ = [
    "Attr",
    "CharData",
    "Comment",
    "EndElement",
    "NamespaceMap",
    "ProcessingInstruction",
    "QName",
    "StartElement",
    "Token",
    "TokenSink",
    "TokenSource",
    "TokenType",
    "normalize_nsmap",
    "XMLTokenReader",
    "TokenReplay",
    "XMLTokenWriter",
    "declaration_params",
]
