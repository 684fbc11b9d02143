"""GraphML codec.

A lossless decoder/encoder pair for GraphML documents. Decoding builds a
typed document model while enforcing key scoping, id uniqueness and nesting
rules; encoding writes the model back with the original element and attribute
order. Custom attribute payloads are kept as raw XML events and replayed
verbatim.

Progressive API Disclosure:
- Level 1: Simple functions - decode(), decode_string(), decode_file(),
  encode(), encode_string(), encode_file()
- Level 2: Configured codec - Decoder and Encoder over token sources/sinks
"""

__version__ = "0.1.0"
__author__ = "GraphML Codec Team"

# Level 1: Simple functions
from .api import (
    decode,
    decode_file,
    decode_string,
    encode,
    encode_bytes,
    encode_file,
    encode_string,
)

# Level 2: Decoder and encoder over explicit token streams
from .codec import Decoder, Encoder

# Document model
from .model import (
    EXT,
    NAMESPACE,
    Data,
    Document,
    Edge,
    EdgeDir,
    Graph,
    Key,
    Kind,
    Node,
)

# Configuration and errors
from .shared import CodecConfig, DecoderConfig, EncoderConfig, GraphMLError

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple functions
    "decode",
    "decode_file",
    "decode_string",
    "encode",
    "encode_bytes",
    "encode_file",
    "encode_string",

    # Level 2: Decoder and encoder
    "Decoder",
    "Encoder",

    # Document model
    "EXT",
    "NAMESPACE",
    "Data",
    "Document",
    "Edge",
    "EdgeDir",
    "Graph",
    "Key",
    "Kind",
    "Node",

    # Configuration and errors
    "CodecConfig",
    "DecoderConfig",
    "EncoderConfig",
    "GraphMLError",
]
