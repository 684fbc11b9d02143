"""Public decode/encode functions."""

from .codec import (
    decode,
    decode_file,
    decode_string,
    encode,
    encode_bytes,
    encode_file,
    encode_string,
    output_encoding,
)

__all__ = [
    "decode",
    "decode_file",
    "decode_string",
    "encode",
    "encode_bytes",
    "encode_file",
    "encode_string",
    "output_encoding",
]
