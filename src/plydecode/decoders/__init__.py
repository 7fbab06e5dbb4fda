"""Encoding-specific decoders for the PLY data section."""

from __future__ import annotations

__all__ = [
    "BaseDataDecoder",
    "BinaryDataDecoder",
    "DecodeResult",
    "TextDataDecoder",
    "get_decoder",
]

import typing as t

from plydecode.decoders.base import BaseDataDecoder, DecodeResult
from plydecode.decoders.binary import BinaryDataDecoder
from plydecode.decoders.text import TextDataDecoder
from plydecode.schema import Encoding

if t.TYPE_CHECKING:
    from plydecode.schema import Schema


#: Mapping of data encodings to their respective decoder classes.
_DECODERS: t.Final[t.Dict[Encoding, t.Type[BaseDataDecoder]]] = {
    Encoding.ASCII: TextDataDecoder,
    Encoding.BINARY_LITTLE_ENDIAN: BinaryDataDecoder,
    Encoding.BINARY_BIG_ENDIAN: BinaryDataDecoder,
}


def get_decoder(schema: Schema, with_colors: bool = False) -> BaseDataDecoder:
    """Get the decoder for the encoding declared by a schema.

    :param schema: The validated schema.
    :param with_colors: Whether the decoder should assemble per-vertex colors.
    :return: An instance of the corresponding data decoder.
    """
    decoder_class = _DECODERS[schema.encoding]
    return decoder_class(schema, with_colors)
