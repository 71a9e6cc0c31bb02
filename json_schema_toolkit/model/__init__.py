"""
Schema data model.

Contains the node definitions and the helpers that move named definitions
between the root of a schema and the recursive traversals.
"""

from __future__ import annotations

from .definitions import Definitions, definition_name, join, merge, ref_path, resolve, split
from .nodes import (
    AllOfNode,
    AnyOfNode,
    ArrayNode,
    BooleanNode,
    CombinatorNode,
    DocumentedNode,
    FallbackNode,
    IntegerNode,
    LazyNode,
    NullNode,
    NumberNode,
    ObjectNode,
    OneOfNode,
    Property,
    RefNode,
    Schema,
    SchemaNode,
    StringFormat,
    StringNode,
    TupleNode,
)

__all__ = [
    "Schema",
    "SchemaNode",
    "DocumentedNode",
    "Property",
    "ObjectNode",
    "ArrayNode",
    "TupleNode",
    "StringNode",
    "StringFormat",
    "IntegerNode",
    "NumberNode",
    "BooleanNode",
    "NullNode",
    "RefNode",
    "CombinatorNode",
    "OneOfNode",
    "AnyOfNode",
    "AllOfNode",
    "LazyNode",
    "FallbackNode",
    "Definitions",
    "split",
    "join",
    "merge",
    "ref_path",
    "definition_name",
    "resolve",
]
