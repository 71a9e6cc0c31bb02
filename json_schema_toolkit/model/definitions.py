"""
Reference resolution for `$ref` nodes.

A complete schema keeps its named definitions in one flat mapping at the
root. `split` and `join` move between that form and the (definitions, root)
pair the recursive traversals work on.
"""

from __future__ import annotations

import logging
from typing import Mapping

from .nodes import Schema, SchemaNode

logger = logging.getLogger(__name__)

Definitions = Mapping[str, SchemaNode]

DEFINITIONS_PREFIX = "#/definitions/"

# Prefixes accepted when looking a reference up by name
_LOCAL_PREFIXES = (DEFINITIONS_PREFIX, "#/$defs/")


def split(schema: Schema | SchemaNode) -> tuple[Definitions, SchemaNode]:
    """
    Split a schema into its definitions and its root body.

    Args:
        schema: A complete schema, or a bare node (which has no definitions)

    Returns:
        Tuple of (definitions, root node)
    """
    if isinstance(schema, Schema):
        return schema.definitions, schema.root
    return {}, schema


def join(definitions: Definitions, root: SchemaNode) -> Schema:
    """Attach a definitions mapping to a root body."""
    return Schema(root=root, definitions=dict(definitions))


def merge(*mappings: Definitions) -> dict[str, SchemaNode]:
    """Union of several definitions mappings, later names win."""
    merged: dict[str, SchemaNode] = {}
    for mapping in mappings:
        for name, body in mapping.items():
            if name in merged and merged[name] != body:
                logger.debug("Definition %r redefined while merging", name)
            merged[name] = body
    return merged


def ref_path(name: str) -> str:
    """Canonical reference string for a definition name."""
    return f"{DEFINITIONS_PREFIX}{name}"


def definition_name(ref: str) -> str:
    """
    Extract the definition name from a reference string.

    "#/definitions/MyClass" and "#/$defs/MyClass" both give "MyClass";
    anything else falls back to its last path segment.
    """
    for prefix in _LOCAL_PREFIXES:
        if ref.startswith(prefix):
            return ref[len(prefix) :]
    return ref.split("/")[-1]


def resolve(definitions: Definitions, ref: str) -> SchemaNode | None:
    """Look a reference up, returning None when it is not defined."""
    body = definitions.get(definition_name(ref))
    if body is None:
        logger.debug("Reference %r not found among %d definitions", ref, len(definitions))
    return body
