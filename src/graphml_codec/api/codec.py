"""Convenience API for decoding and encoding GraphML.

Level 1 functions wire an ``XMLTokenReader``/``XMLTokenWriter`` to the
decoder and encoder so callers can work with bytes, strings, file objects and
paths directly. Files ending in ``.gz`` are transparently (de)compressed.
"""

import gzip
import io
from pathlib import Path
from typing import IO, Any, Optional, Union

from graphml_codec.codec import Decoder, Encoder
from graphml_codec.model import Document
from graphml_codec.shared import CodecConfig, get_logger
from graphml_codec.tokens import XMLTokenReader, XMLTokenWriter, declaration_params
from graphml_codec.tokens.writer import DEFAULT_ENCODING

InputType = Union[str, bytes, IO[Any]]
PathType = Union[str, Path]

GZIP_SUFFIX = ".gz"


def decode(
    input_data: InputType,
    config: Optional[CodecConfig] = None,
    correlation_id: Optional[str] = None,
) -> Document:
    """Decode a GraphML document.

    Args:
        input_data: XML as bytes, str, a file object, or any token source
        config: Codec configuration, defaults to ``CodecConfig()``
        correlation_id: Optional correlation ID for request tracking

    Returns:
        The decoded Document

    Raises:
        GraphMLError: If the input is not a valid document

    Examples:
        >>> doc = decode(b'<graphml xmlns="http://graphml.graphdrawing.org/xmlns">'
        ...              b'<graph id="G"><node id="n0"/></graph></graphml>')
        >>> doc.graphs[0].nodes[0].id
        'n0'
    """
    config = config or CodecConfig()
    if hasattr(input_data, "token"):
        source = input_data
    else:
        source = XMLTokenReader(
            input_data,
            chunk_size=config.decoder.chunk_size,
            correlation_id=correlation_id,
        )
    return Decoder(source, config.decoder, correlation_id).decode()


def decode_string(
    xml_string: str,
    config: Optional[CodecConfig] = None,
    correlation_id: Optional[str] = None,
) -> Document:
    """Decode a GraphML document held in a string."""
    return decode(xml_string, config, correlation_id)


def decode_file(
    file_path: PathType,
    config: Optional[CodecConfig] = None,
    correlation_id: Optional[str] = None,
) -> Document:
    """Decode a GraphML file, gunzipping ``.gz`` files on the fly."""
    path_obj = Path(file_path)
    logger = get_logger(__name__, correlation_id, "decode_file")
    logger.info("Decoding file", extra={"file_path": str(path_obj)})

    opener = gzip.open if path_obj.suffix == GZIP_SUFFIX else open
    with opener(path_obj, "rb") as stream:
        return decode(stream, config, correlation_id)


def output_encoding(doc: Document, config: Optional[CodecConfig] = None) -> str:
    """Pick the output encoding: configured, then declared, then UTF-8."""
    if config is not None and config.encoder.encoding:
        return config.encoder.encoding
    if doc.declaration is not None:
        declared = declaration_params(doc.declaration.text).get("encoding")
        if declared:
            return declared
    return DEFAULT_ENCODING


def encode(
    doc: Document,
    stream: IO[bytes],
    config: Optional[CodecConfig] = None,
    correlation_id: Optional[str] = None,
) -> None:
    """Encode ``doc`` into a binary stream.

    Stream errors propagate unchanged.
    """
    config = config or CodecConfig()
    encoding = output_encoding(doc, config)
    with XMLTokenWriter(stream, encoding=encoding, correlation_id=correlation_id) as sink:
        Encoder(sink, config.encoder, correlation_id).encode(doc)


def encode_bytes(
    doc: Document,
    config: Optional[CodecConfig] = None,
    correlation_id: Optional[str] = None,
) -> bytes:
    """Encode ``doc`` and return the serialized bytes."""
    buffer = io.BytesIO()
    encode(doc, buffer, config, correlation_id)
    return buffer.getvalue()


def encode_string(
    doc: Document,
    config: Optional[CodecConfig] = None,
    correlation_id: Optional[str] = None,
) -> str:
    """Encode ``doc`` and return it as text."""
    return encode_bytes(doc, config, correlation_id).decode(output_encoding(doc, config))


def encode_file(
    doc: Document,
    file_path: PathType,
    config: Optional[CodecConfig] = None,
    correlation_id: Optional[str] = None,
) -> None:
    """Encode ``doc`` to a file, gzipping when the path ends in ``.gz``."""
    path_obj = Path(file_path)
    logger = get_logger(__name__, correlation_id, "encode_file")
    logger.info("Encoding file", extra={"file_path": str(path_obj)})

    opener = gzip.open if path_obj.suffix == GZIP_SUFFIX else open
    with opener(path_obj, "wb") as stream:
        encode(doc, stream, config, correlation_id)
