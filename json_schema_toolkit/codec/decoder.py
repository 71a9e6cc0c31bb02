"""
JSON Schema decoder.

Turns JSON Schema documents into schema nodes. Decoding never fails on
well-formed JSON: a node whose shape is not recognized (unknown type, an
attribute of the wrong JSON kind, a non-object schema) becomes a
`FallbackNode` holding the raw value.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from ..errors import SchemaDecodeError
from ..model import (
    AllOfNode,
    AnyOfNode,
    ArrayNode,
    BooleanNode,
    FallbackNode,
    IntegerNode,
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
    merge,
)

logger = logging.getLogger(__name__)


class ShapeMismatch(Exception):
    """An attribute does not have the JSON kind its keyword requires."""

    pass


def decode(text: str) -> Schema:
    """
    Decode JSON Schema text.

    Raises:
        SchemaDecodeError: If the text is not well-formed JSON
    """
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise SchemaDecodeError(f"Schema is not valid JSON: {e}") from e
    return decode_value(raw)


def decode_value(raw: Any) -> Schema:
    """Decode an already parsed JSON Schema document."""
    return SchemaDecoder().decode(raw)


def _is_int(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, int) or (isinstance(value, float) and value.is_integer())


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class SchemaDecoder:
    """Decodes JSON Schema documents into a `Schema`."""

    COMBINATORS = {
        "oneOf": OneOfNode,
        "anyOf": AnyOfNode,
        "allOf": AllOfNode,
    }

    def __init__(self):
        # Definitions hoisted from every level of the document
        self.definitions: dict[str, SchemaNode] = {}

    def decode(self, raw: Any) -> Schema:
        """
        Decode a document.

        Args:
            raw: The JSON Schema document, as produced by `json.loads`

        Returns:
            Schema with the root body and every definition found in the document
        """
        self.definitions = {}
        root = self._parse_schema_node(raw)
        return Schema(root=root, definitions=self.definitions)

    def _parse_schema_node(self, raw: Any) -> SchemaNode:
        """Parse one node, falling back to `FallbackNode` on unknown shapes."""
        if not isinstance(raw, dict):
            return FallbackNode(raw)

        schema = self._hoist_definitions(raw)
        try:
            node = self._parse_known_node(schema)
        except ShapeMismatch as e:
            logger.debug("Keeping schema verbatim: %s", e)
            node = None
        # Fallbacks keep the node verbatim, nested definitions included
        return node if node is not None else FallbackNode(raw)

    def _hoist_definitions(self, raw: dict[str, Any]) -> dict[str, Any]:
        definitions = raw.get("definitions")
        if not isinstance(definitions, dict):
            return raw

        parsed = {name: self._parse_schema_node(body) for name, body in definitions.items()}
        self.definitions = merge(self.definitions, parsed)
        return {key: value for key, value in raw.items() if key != "definitions"}

    def _parse_known_node(self, schema: dict[str, Any]) -> SchemaNode | None:
        if "$ref" in schema:
            return self._parse_ref_node(schema)

        for keyword, node_class in self.COMBINATORS.items():
            if keyword in schema:
                return self._parse_combinator_node(schema, keyword, node_class)

        type_name = schema.get("type")
        if type_name == "object":
            return self._parse_object_node(schema)
        if type_name == "array":
            if isinstance(schema.get("items"), list) or "additionalItems" in schema:
                return self._parse_tuple_node(schema)
            return self._parse_array_node(schema)
        if type_name == "string":
            return self._parse_string_node(schema)
        if type_name == "integer":
            return self._parse_integer_node(schema)
        if type_name == "number":
            return self._parse_number_node(schema)
        if type_name == "boolean":
            return BooleanNode(enum=self._enum(schema, lambda v: isinstance(v, bool)), **self._docs(schema))
        if type_name == "null":
            return NullNode(**self._docs(schema))
        return None

    def _docs(self, schema: dict[str, Any]) -> dict[str, Any]:
        """Extract the documentation attributes every kind carries."""
        examples = schema.get("examples", [])
        if not isinstance(examples, list):
            raise ShapeMismatch("examples must be an array")
        return {
            "title": self._string(schema, "title"),
            "description": self._string(schema, "description"),
            "examples": tuple(examples),
        }

    def _string(self, schema: dict[str, Any], key: str) -> str | None:
        value = schema.get(key)
        if value is not None and not isinstance(value, str):
            raise ShapeMismatch(f"{key} must be a string")
        return value

    def _int(self, schema: dict[str, Any], key: str) -> int | None:
        value = schema.get(key)
        if value is None:
            return None
        if not _is_int(value):
            raise ShapeMismatch(f"{key} must be an integer")
        return int(value)

    def _number(self, schema: dict[str, Any], key: str) -> float | None:
        value = schema.get(key)
        if value is not None and not _is_number(value):
            raise ShapeMismatch(f"{key} must be a number")
        return value

    def _enum(self, schema: dict[str, Any], accepts) -> tuple | None:
        values = schema.get("enum")
        if values is None:
            return None
        if not isinstance(values, list) or not all(accepts(v) for v in values):
            raise ShapeMismatch("enum does not match the schema type")
        return tuple(values)

    def _parse_ref_node(self, schema: dict[str, Any]) -> RefNode:
        ref = schema["$ref"]
        if not isinstance(ref, str):
            raise ShapeMismatch("$ref must be a string")
        return RefNode(ref=ref, **self._docs(schema))

    def _parse_combinator_node(self, schema: dict[str, Any], keyword: str, node_class) -> SchemaNode:
        members = schema[keyword]
        if not isinstance(members, list):
            raise ShapeMismatch(f"{keyword} must be an array")
        docs = self._docs(schema)
        return node_class(schemas=tuple(self._parse_schema_node(member) for member in members), **docs)

    def _parse_object_node(self, schema: dict[str, Any]) -> ObjectNode:
        properties = schema.get("properties", {})
        required = schema.get("required", [])
        if not isinstance(properties, dict):
            raise ShapeMismatch("properties must be an object")
        if not isinstance(required, list) or not all(isinstance(name, str) for name in required):
            raise ShapeMismatch("required must be an array of strings")

        docs = self._docs(schema)
        return ObjectNode(
            properties=tuple(
                Property(name, self._parse_schema_node(prop_schema), name in required)
                for name, prop_schema in properties.items()
            ),
            min_properties=self._int(schema, "minProperties"),
            max_properties=self._int(schema, "maxProperties"),
            **docs,
        )

    def _parse_array_node(self, schema: dict[str, Any]) -> ArrayNode:
        docs = self._docs(schema)
        items = schema.get("items")
        return ArrayNode(
            items=None if items is None else self._parse_schema_node(items),
            min_items=self._int(schema, "minItems"),
            max_items=self._int(schema, "maxItems"),
            **docs,
        )

    def _parse_tuple_node(self, schema: dict[str, Any]) -> TupleNode:
        items = schema.get("items", [])
        if not isinstance(items, list):
            raise ShapeMismatch("items of a tuple must be an array")
        docs = self._docs(schema)
        additional = schema.get("additionalItems")
        return TupleNode(
            items=tuple(self._parse_schema_node(item) for item in items),
            additional_items=None if additional is None else self._parse_schema_node(additional),
            min_items=self._int(schema, "minItems"),
            max_items=self._int(schema, "maxItems"),
            **docs,
        )

    def _parse_string_node(self, schema: dict[str, Any]) -> StringNode:
        format_label = self._string(schema, "format")
        if format_label is not None:
            try:
                format_label = StringFormat(format_label)
            except ValueError:
                pass  # custom label, kept as a plain string

        return StringNode(
            enum=self._enum(schema, lambda v: isinstance(v, str)),
            min_length=self._int(schema, "minLength"),
            max_length=self._int(schema, "maxLength"),
            pattern=self._string(schema, "pattern"),
            format=format_label,
            **self._docs(schema),
        )

    def _parse_integer_node(self, schema: dict[str, Any]) -> IntegerNode:
        enum = self._enum(schema, _is_int)
        return IntegerNode(
            enum=None if enum is None else tuple(int(v) for v in enum),
            minimum=self._int(schema, "minimum"),
            maximum=self._int(schema, "maximum"),
            **self._docs(schema),
        )

    def _parse_number_node(self, schema: dict[str, Any]) -> NumberNode:
        return NumberNode(
            enum=self._enum(schema, _is_number),
            minimum=self._number(schema, "minimum"),
            maximum=self._number(schema, "maximum"),
            **self._docs(schema),
        )
