"""Decoder and encoder for GraphML documents.

Key Components:
    Decoder: Recursive-descent decoder enforcing key, id and nesting rules
    Encoder: Mirror-image writer reproducing element and attribute order
    SchemaContext: Key and id tables scoped to one decode pass
"""

from .decoder import NESTING, Decoder, can_skip, decode_tokens
from .encoder import Encoder, encode_tokens
from .schema import SchemaContext

__all__ = [
    "NESTING",
    "Decoder",
    "can_skip",
    "decode_tokens",
    "Encoder",
    "encode_tokens",
    "SchemaContext",
]
