"""
Encoding and decoding between schemas and JSON Schema text.
"""

from __future__ import annotations

from .decoder import SchemaDecoder, decode, decode_value
from .encoder import SchemaEncoder, encode, encode_value

__all__ = [
    "SchemaDecoder",
    "SchemaEncoder",
    "decode",
    "decode_value",
    "encode",
    "encode_value",
]
