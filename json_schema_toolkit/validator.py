"""
Validation of JSON values against schemas.

The validator walks the schema and the value together. Every check that
applies at a node runs before the validator descends into children, and every
failure is collected, so one pass reports all the problems in a value.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any

from .config import ValidatorConfig
from .errors import (
    DecodeError,
    DoesNotMatchPattern,
    HasFewerItemsThan,
    HasMoreItemsThan,
    IsLessThan,
    IsLongerThan,
    IsMoreThan,
    IsShorterThan,
    NotInEnumeration,
    Pointer,
    RequiredPropertyMissing,
    TooFewMatches,
    TooManyMatches,
    ValidationError,
    describe_kind,
)
from .model import (
    AllOfNode,
    AnyOfNode,
    ArrayNode,
    BooleanNode,
    Definitions,
    FallbackNode,
    IntegerNode,
    LazyNode,
    NullNode,
    NumberNode,
    ObjectNode,
    OneOfNode,
    RefNode,
    Schema,
    SchemaNode,
    StringNode,
    TupleNode,
    resolve,
    split,
)

logger = logging.getLogger(__name__)


def validate(schema: Schema | SchemaNode, value: Any, config: ValidatorConfig | None = None) -> list[ValidationError]:
    """
    Validate a decoded JSON value against a schema.

    Args:
        schema: The schema, or a bare node without definitions
        value: The value, as produced by `json.loads`
        config: Validation options (defaults to `ValidatorConfig()`)

    Returns:
        Every problem found, in depth-first order; empty when the value is valid
    """
    definitions, root = split(schema)
    return SchemaValidator(definitions, config).check(root, value)


def is_valid(schema: Schema | SchemaNode, value: Any, config: ValidatorConfig | None = None) -> bool:
    return not validate(schema, value, config)


def _decode_failure(pointer: Pointer, expected: str, value: Any) -> list[ValidationError]:
    return [ValidationError(pointer, DecodeError(f"Expected {expected}, got {describe_kind(value)}"))]


def _is_integer(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and value.is_integer()


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _widen(number: int | float) -> float:
    try:
        return float(number)
    except OverflowError:
        return math.inf if number > 0 else -math.inf


class SchemaValidator:
    """Checks values against nodes, with one definitions mapping in scope."""

    def __init__(self, definitions: Definitions, config: ValidatorConfig | None = None):
        """
        Initialize the validator.

        Args:
            definitions: Named definitions `$ref` nodes resolve against
            config: Validation options
        """
        self.definitions = definitions
        self.config = config or ValidatorConfig()
        # (ref, id(value)) pairs being resolved, to stop self-referential definitions
        self._resolving: set[tuple[str, int]] = set()

    def check(self, node: SchemaNode, value: Any, pointer: Pointer = ()) -> list[ValidationError]:
        """Validate `value` against `node`; errors carry absolute pointers."""
        if isinstance(node, ObjectNode):
            return self._check_object(node, value, pointer)
        if isinstance(node, ArrayNode):
            return self._check_array(node, value, pointer)
        if isinstance(node, TupleNode):
            return self._check_tuple(node, value, pointer)
        if isinstance(node, StringNode):
            return self._check_string(node, value, pointer)
        if isinstance(node, IntegerNode):
            if not _is_integer(value):
                return _decode_failure(pointer, "an integer", value)
            return self._check_numeric(node, value, pointer)
        if isinstance(node, NumberNode):
            if not _is_number(value):
                return _decode_failure(pointer, "a number", value)
            return self._check_numeric(node, value, pointer)
        if isinstance(node, BooleanNode):
            return self._check_boolean(node, value, pointer)
        if isinstance(node, NullNode):
            if value is not None:
                return _decode_failure(pointer, "null", value)
            return []
        if isinstance(node, RefNode):
            return self._check_ref(node, value, pointer)
        if isinstance(node, OneOfNode):
            return self._check_one_of(node, value, pointer)
        if isinstance(node, AnyOfNode):
            return self._check_any_of(node, value, pointer)
        if isinstance(node, AllOfNode):
            return self._check_all_of(node, value, pointer)
        if isinstance(node, LazyNode):
            return self.check(node.force(), value, pointer)
        if isinstance(node, FallbackNode):
            return []
        raise TypeError(f"Unknown schema node: {type(node).__name__}")

    def matches(self, node: SchemaNode, value: Any) -> bool:
        return not self.check(node, value)

    def _check_object(self, node: ObjectNode, value: Any, pointer: Pointer) -> list[ValidationError]:
        if not isinstance(value, dict):
            return _decode_failure(pointer, "an object", value)
        if not all(isinstance(key, str) for key in value):
            return [ValidationError(pointer, DecodeError("Expected an object with string keys"))]

        errors = []
        for prop in node.properties:
            if prop.is_required and prop.name not in value:
                errors.append(ValidationError(pointer, RequiredPropertyMissing(prop.name)))

        if self.config.enforce_property_bounds:
            errors.extend(self._check_count(len(value), node.min_properties, node.max_properties, pointer))

        for prop in node.properties:
            if prop.name in value:
                errors.extend(self.check(prop.schema, value[prop.name], pointer + (prop.name,)))
        return errors

    def _check_count(self, count: int, minimum: int | None, maximum: int | None, pointer: Pointer) -> list[ValidationError]:
        errors = []
        if minimum is not None and count < minimum:
            errors.append(ValidationError(pointer, HasFewerItemsThan(minimum)))
        if maximum is not None and count > maximum:
            errors.append(ValidationError(pointer, HasMoreItemsThan(maximum)))
        return errors

    def _check_array(self, node: ArrayNode, value: Any, pointer: Pointer) -> list[ValidationError]:
        if not isinstance(value, list):
            return _decode_failure(pointer, "an array", value)

        errors = self._check_count(len(value), node.min_items, node.max_items, pointer)
        if node.items is not None:
            for index, item in enumerate(value):
                errors.extend(self.check(node.items, item, pointer + (str(index),)))
        return errors

    def _check_tuple(self, node: TupleNode, value: Any, pointer: Pointer) -> list[ValidationError]:
        if not isinstance(value, list):
            return _decode_failure(pointer, "an array", value)

        errors = self._check_count(len(value), node.min_items, node.max_items, pointer)
        for index, item in enumerate(value):
            if index < len(node.items):
                item_schema = node.items[index]
            elif node.additional_items is not None:
                item_schema = node.additional_items
            else:
                break
            errors.extend(self.check(item_schema, item, pointer + (str(index),)))
        return errors

    def _check_string(self, node: StringNode, value: Any, pointer: Pointer) -> list[ValidationError]:
        if not isinstance(value, str):
            return _decode_failure(pointer, "a string", value)

        errors = []
        if node.min_length is not None and len(value) < node.min_length:
            errors.append(ValidationError(pointer, IsShorterThan(node.min_length)))
        if node.max_length is not None and len(value) > node.max_length:
            errors.append(ValidationError(pointer, IsLongerThan(node.max_length)))
        if node.pattern is not None:
            try:
                found = re.search(node.pattern, value)
            except re.error as e:
                logger.warning("Invalid pattern %r in schema: %s", node.pattern, e)
                errors.append(ValidationError(pointer, DecodeError(f"Invalid pattern {node.pattern!r}: {e}")))
            else:
                if found is None:
                    errors.append(ValidationError(pointer, DoesNotMatchPattern(node.pattern)))
        if node.enum is not None and value not in node.enum:
            errors.append(ValidationError(pointer, NotInEnumeration()))
        return errors

    def _check_numeric(self, node: IntegerNode | NumberNode, value: int | float, pointer: Pointer) -> list[ValidationError]:
        errors = []
        if node.enum is not None and value not in node.enum:
            errors.append(ValidationError(pointer, NotInEnumeration()))
        # Integer bounds are compared as floats too
        if node.minimum is not None and _widen(value) < _widen(node.minimum):
            errors.append(ValidationError(pointer, IsLessThan(node.minimum)))
        if node.maximum is not None and _widen(value) > _widen(node.maximum):
            errors.append(ValidationError(pointer, IsMoreThan(node.maximum)))
        return errors

    def _check_boolean(self, node: BooleanNode, value: Any, pointer: Pointer) -> list[ValidationError]:
        if not isinstance(value, bool):
            return _decode_failure(pointer, "a boolean", value)
        if node.enum is not None and value not in node.enum:
            return [ValidationError(pointer, NotInEnumeration())]
        return []

    def _check_ref(self, node: RefNode, value: Any, pointer: Pointer) -> list[ValidationError]:
        body = resolve(self.definitions, node.ref)
        if body is not None:
            key = (node.ref, id(value))
            if key in self._resolving:
                return [ValidationError(pointer, DecodeError(f"Circular reference {node.ref!r}"))]
            self._resolving.add(key)
            try:
                return self.check(body, value, pointer)
            finally:
                self._resolving.discard(key)
        if self.config.strict_refs:
            return [ValidationError(pointer, DecodeError(f"Unresolved reference {node.ref!r}"))]
        logger.warning("Unresolved reference %r accepted without validation", node.ref)
        return []

    def _check_one_of(self, node: OneOfNode, value: Any, pointer: Pointer) -> list[ValidationError]:
        matched = sum(1 for schema in node.schemas if self.matches(schema, value))
        if matched == 0:
            return [ValidationError(pointer, TooFewMatches())]
        if matched > 1:
            return [ValidationError(pointer, TooManyMatches())]
        return []

    def _check_any_of(self, node: AnyOfNode, value: Any, pointer: Pointer) -> list[ValidationError]:
        if any(self.matches(schema, value) for schema in node.schemas):
            return []
        return [ValidationError(pointer, TooFewMatches())]

    def _check_all_of(self, node: AllOfNode, value: Any, pointer: Pointer) -> list[ValidationError]:
        return [ValidationError(pointer, TooFewMatches()) for schema in node.schemas if not self.matches(schema, value)]
