"""JSON Schema Toolkit

A Python package for building, encoding, decoding and validating JSON Schema
documents, and for generating random test data that satisfies a schema.
"""

__version__ = "1.0.0"

from .codec import decode, decode_value, encode, encode_value
from .config import FuzzConfig, ToolkitConfig, ValidatorConfig
from .errors import SchemaDecodeError, UnsupportedSchemaError, ValidationError
from .fuzz import Unsupported, draw_samples, fuzz, strategy_for
from .model import Schema, SchemaNode, join, split
from .validator import is_valid, validate

__all__ = [
    "Schema",
    "SchemaNode",
    "split",
    "join",
    "validate",
    "is_valid",
    "ValidationError",
    "fuzz",
    "strategy_for",
    "draw_samples",
    "Unsupported",
    "encode",
    "encode_value",
    "decode",
    "decode_value",
    "SchemaDecodeError",
    "UnsupportedSchemaError",
    "ValidatorConfig",
    "FuzzConfig",
    "ToolkitConfig",
]
