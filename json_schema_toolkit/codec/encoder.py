"""
JSON Schema encoder.

Emits one JSON object per node. Absent attributes are left out rather than
written as null, so that decoding the output gives back an equal schema.
"""

from __future__ import annotations

import json
from typing import Any

from ..model import (
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
    RefNode,
    Schema,
    SchemaNode,
    StringFormat,
    StringNode,
    TupleNode,
    ref_path,
    split,
)


def encode(schema: Schema | SchemaNode, indent: int | None = None) -> str:
    """Encode a schema as JSON Schema text."""
    return json.dumps(encode_value(schema), indent=indent)


def encode_value(schema: Schema | SchemaNode) -> Any:
    """Encode a schema as a JSON-compatible value."""
    return SchemaEncoder().encode(schema)


def _put(target: dict[str, Any], key: str, value: Any) -> None:
    if value is not None:
        target[key] = value


class SchemaEncoder:
    """Encodes schemas into JSON Schema documents.

    A lazy node that is reached again while its own body is being encoded is
    written once as a root definition and referenced with `$ref` from there.
    """

    def __init__(self):
        # Thunk -> definition name for lazy nodes on the current encoding path
        self.lazy_names: dict[Any, str] = {}
        self.lazy_reentered: set[str] = set()
        self.lazy_definitions: dict[str, Any] = {}
        # Thunk -> definition name for lazy nodes already written as definitions
        self.lazy_lifted: dict[Any, str] = {}
        self.reserved_names: set[str] = set()

    def encode(self, schema: Schema | SchemaNode) -> Any:
        definitions, root = split(schema)
        self.lazy_names = {}
        self.lazy_reentered = set()
        self.lazy_definitions = {}
        self.lazy_lifted = {}
        self.reserved_names = set(definitions)
        encoded = self.encode_node(root)
        encoded_definitions = {name: self.encode_node(body) for name, body in definitions.items()}
        encoded_definitions.update(self.lazy_definitions)
        if encoded_definitions:
            if not isinstance(encoded, dict):
                # Fallback root that is not an object: nowhere to attach them
                encoded = {"allOf": [encoded]}
            encoded = dict(encoded)
            encoded["definitions"] = encoded_definitions
        return encoded

    def encode_node(self, node: SchemaNode) -> Any:
        if isinstance(node, FallbackNode):
            return node.raw
        if isinstance(node, LazyNode):
            return self._encode_lazy(node)

        encoded: dict[str, Any] = {}
        if isinstance(node, RefNode):
            encoded["$ref"] = node.ref
        elif isinstance(node, CombinatorNode):
            encoded[node.KEYWORD] = [self.encode_node(member) for member in node.schemas]
        else:
            encoded["type"] = self._type_name(node)

        self._encode_docs(node, encoded)

        if isinstance(node, ObjectNode):
            self._encode_object(node, encoded)
        elif isinstance(node, ArrayNode):
            if node.items is not None:
                encoded["items"] = self.encode_node(node.items)
            _put(encoded, "minItems", node.min_items)
            _put(encoded, "maxItems", node.max_items)
        elif isinstance(node, TupleNode):
            encoded["items"] = [self.encode_node(item) for item in node.items]
            if node.additional_items is not None:
                encoded["additionalItems"] = self.encode_node(node.additional_items)
            _put(encoded, "minItems", node.min_items)
            _put(encoded, "maxItems", node.max_items)
        elif isinstance(node, StringNode):
            self._encode_string(node, encoded)
        elif isinstance(node, (IntegerNode, NumberNode)):
            self._encode_enum(node.enum, encoded)
            _put(encoded, "minimum", node.minimum)
            _put(encoded, "maximum", node.maximum)
        elif isinstance(node, BooleanNode):
            self._encode_enum(node.enum, encoded)

        if isinstance(node, DocumentedNode) and node.examples:
            encoded["examples"] = list(node.examples)
        return encoded

    def _encode_lazy(self, node: LazyNode) -> Any:
        name = self.lazy_names.get(node.thunk) or self.lazy_lifted.get(node.thunk)
        if name is not None:
            self.lazy_reentered.add(name)
            return {"$ref": ref_path(name)}

        name = self._fresh_name()
        self.lazy_names[node.thunk] = name
        try:
            body = self.encode_node(node.force())
        finally:
            del self.lazy_names[node.thunk]
        if name not in self.lazy_reentered:
            self.reserved_names.discard(name)
            return body
        self.lazy_definitions[name] = body
        self.lazy_lifted[node.thunk] = name
        return {"$ref": ref_path(name)}

    def _fresh_name(self) -> str:
        index = 0
        while f"lazy{index}" in self.reserved_names:
            index += 1
        name = f"lazy{index}"
        self.reserved_names.add(name)
        return name

    def _type_name(self, node: SchemaNode) -> str:
        if isinstance(node, ObjectNode):
            return "object"
        if isinstance(node, (ArrayNode, TupleNode)):
            return "array"
        if isinstance(node, StringNode):
            return "string"
        if isinstance(node, IntegerNode):
            return "integer"
        if isinstance(node, NumberNode):
            return "number"
        if isinstance(node, BooleanNode):
            return "boolean"
        if isinstance(node, NullNode):
            return "null"
        raise TypeError(f"Unknown schema node: {type(node).__name__}")

    def _encode_docs(self, node: DocumentedNode, encoded: dict[str, Any]) -> None:
        _put(encoded, "title", node.title)
        _put(encoded, "description", node.description)

    def _encode_enum(self, enum: tuple | None, encoded: dict[str, Any]) -> None:
        if enum is not None:
            encoded["enum"] = list(enum)

    def _encode_object(self, node: ObjectNode, encoded: dict[str, Any]) -> None:
        encoded["properties"] = {prop.name: self.encode_node(prop.schema) for prop in node.properties}
        if node.required:
            encoded["required"] = node.required
        _put(encoded, "minProperties", node.min_properties)
        _put(encoded, "maxProperties", node.max_properties)

    def _encode_string(self, node: StringNode, encoded: dict[str, Any]) -> None:
        self._encode_enum(node.enum, encoded)
        _put(encoded, "minLength", node.min_length)
        _put(encoded, "maxLength", node.max_length)
        _put(encoded, "pattern", node.pattern)
        if node.format is not None:
            encoded["format"] = node.format.value if isinstance(node.format, StringFormat) else node.format
