"""
Generation of random values that satisfy a schema.

`fuzz` turns a schema into a Hypothesis search strategy. Every value the
strategy draws passes `validate` against the same schema. Kinds the generator
cannot honor (references, oneOf, allOf, objects with property bounds) produce
an `Unsupported` value instead of a strategy, so callers can branch on it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from hypothesis import HealthCheck, Phase, given, settings
from hypothesis import seed as hypothesis_seed
from hypothesis import strategies as st
from hypothesis.strategies import SearchStrategy

from .config import FuzzConfig
from .errors import Pointer, UnsupportedSchemaError, format_pointer
from .model import (
    AllOfNode,
    AnyOfNode,
    ArrayNode,
    BooleanNode,
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
    split,
)

logger = logging.getLogger(__name__)

# Placeholder for array positions no schema governs
FILLER = None


@dataclass(frozen=True)
class Unsupported:
    """A schema configuration the generator refuses to build."""

    reason: str
    pointer: Pointer = ()

    def __str__(self) -> str:
        return f"{format_pointer(self.pointer)}: {self.reason}"


def fuzz(schema: Schema | SchemaNode, config: FuzzConfig | None = None) -> SearchStrategy | Unsupported:
    """
    Build a strategy drawing values that satisfy `schema`.

    Args:
        schema: The schema, or a bare node
        config: Generation options (defaults to `FuzzConfig()`)

    Returns:
        A Hypothesis strategy, or `Unsupported` describing the first part of
        the schema that cannot be generated
    """
    _, root = split(schema)
    return SchemaFuzzer(config).build(root)


def strategy_for(schema: Schema | SchemaNode, config: FuzzConfig | None = None) -> SearchStrategy:
    """Like `fuzz`, but raise `UnsupportedSchemaError` instead of returning `Unsupported`."""
    result = fuzz(schema, config)
    if isinstance(result, Unsupported):
        raise UnsupportedSchemaError(result)
    return result


def draw_samples(
    schema: Schema | SchemaNode,
    count: int,
    seed: int | None = None,
    config: FuzzConfig | None = None,
) -> list[Any]:
    """
    Draw up to `count` values from the schema's strategy.

    Fewer values come back when the strategy cannot produce that many
    distinct examples (e.g. a single-valued enum).
    """
    strategy = strategy_for(schema, config)
    if count <= 0:
        return []
    samples: list[Any] = []

    @settings(
        max_examples=count,
        database=None,
        deadline=None,
        phases=[Phase.generate],
        suppress_health_check=list(HealthCheck),
    )
    @given(strategy)
    def collect(value):
        samples.append(value)

    if seed is not None:
        collect = hypothesis_seed(seed)(collect)
    collect()
    return samples[:count]


def _fit_length(value: str, min_length: int | None, max_length: int | None) -> str:
    if min_length is not None:
        while len(value) < min_length:
            value = value + value + "x"
    if max_length is not None and len(value) > max_length:
        value = value[:max_length]
    return value


def _concat(parts: list[Any]) -> list[Any]:
    return [item for part in parts for item in part]


class SchemaFuzzer:
    """Builds strategies for nodes."""

    def __init__(self, config: FuzzConfig | None = None):
        self.config = config or FuzzConfig()

    def build(self, node: SchemaNode, pointer: Pointer = ()) -> SearchStrategy | Unsupported:
        """Strategy for `node`, or `Unsupported` for the first refused part."""
        if isinstance(node, ObjectNode):
            return self._build_object(node, pointer)
        if isinstance(node, ArrayNode):
            return self._build_array(node, pointer)
        if isinstance(node, TupleNode):
            return self._build_tuple(node, pointer)
        if isinstance(node, StringNode):
            return self._build_string(node, pointer)
        if isinstance(node, IntegerNode):
            return self._build_integer(node, pointer)
        if isinstance(node, NumberNode):
            return self._build_number(node, pointer)
        if isinstance(node, BooleanNode):
            if node.enum is not None:
                return self._sampled(node.enum, pointer)
            return st.booleans()
        if isinstance(node, NullNode):
            return st.none()
        if isinstance(node, RefNode):
            return self._refuse(f"cannot generate values for reference {node.ref!r}", pointer)
        if isinstance(node, OneOfNode):
            return self._refuse("cannot generate values for oneOf", pointer)
        if isinstance(node, AllOfNode):
            return self._refuse("cannot generate values for allOf", pointer)
        if isinstance(node, AnyOfNode):
            return self._build_any_of(node, pointer)
        if isinstance(node, LazyNode):
            return st.deferred(lambda: self._force(node, pointer))
        if isinstance(node, FallbackNode):
            return st.just(FILLER)
        raise TypeError(f"Unknown schema node: {type(node).__name__}")

    def _refuse(self, reason: str, pointer: Pointer) -> Unsupported:
        unsupported = Unsupported(reason, pointer)
        logger.debug("Refusing to generate: %s", unsupported)
        return unsupported

    def _force(self, node: LazyNode, pointer: Pointer) -> SearchStrategy:
        result = self.build(node.force(), pointer)
        if isinstance(result, Unsupported):
            raise UnsupportedSchemaError(result)
        return result

    def _sampled(self, values, pointer: Pointer) -> SearchStrategy | Unsupported:
        if not values:
            return self._refuse("enumeration is empty", pointer)
        return st.sampled_from(list(values))

    def _build_object(self, node: ObjectNode, pointer: Pointer) -> SearchStrategy | Unsupported:
        if node.min_properties is not None or node.max_properties is not None:
            return self._refuse("cannot generate objects with minProperties or maxProperties", pointer)

        required = {}
        optional = {}
        for prop in node.properties:
            strategy = self.build(prop.schema, pointer + (prop.name,))
            if isinstance(strategy, Unsupported):
                return strategy
            if prop.is_required:
                required[prop.name] = strategy
            else:
                optional[prop.name] = strategy
        return st.fixed_dictionaries(required, optional=optional)

    def _build_array(self, node: ArrayNode, pointer: Pointer) -> SearchStrategy | Unsupported:
        min_size = node.min_items or 0
        if node.max_items is not None and min_size > node.max_items:
            logger.debug("minItems > maxItems at %s, generating an empty array", format_pointer(pointer))
            return st.just([])
        if node.items is None:
            return st.just([FILLER] * min_size)

        items = self.build(node.items, pointer + ("items",))
        if isinstance(items, Unsupported):
            return items
        max_size = node.max_items if node.max_items is not None else min_size + self.config.array_length_slack
        return st.lists(items, min_size=min_size, max_size=max_size)

    def _build_tuple(self, node: TupleNode, pointer: Pointer) -> SearchStrategy | Unsupported:
        min_items = node.min_items
        max_items = node.max_items
        if min_items is not None and max_items is not None and min_items > max_items:
            logger.debug("minItems > maxItems at %s, generating an empty array", format_pointer(pointer))
            return st.just([])

        positional = list(node.items)
        if max_items is not None:
            positional = positional[:max_items]
        count = len(positional)

        # Filler length range for the region after the positional items
        slack = self.config.tuple_filler_slack
        if max_items is None:
            low = max(0, (min_items or 0) - count)
            high = low + slack
        else:
            low = max(0, (min_items or 0) - count)
            high = max_items - count

        strategies = []
        for index, item in enumerate(positional):
            strategy = self.build(item, pointer + (str(index),))
            if isinstance(strategy, Unsupported):
                return strategy
            strategies.append(strategy)

        if node.additional_items is not None:
            filler = self.build(node.additional_items, pointer + ("additionalItems",))
            if isinstance(filler, Unsupported):
                return filler
        else:
            filler = st.just(FILLER)

        head = st.tuples(*strategies).map(list)
        tail = st.lists(filler, min_size=low, max_size=high)
        return st.tuples(head, tail).map(_concat)

    def _build_string(self, node: StringNode, pointer: Pointer) -> SearchStrategy | Unsupported:
        if node.enum is not None:
            return self._sampled(node.enum, pointer)
        return st.text().map(lambda value: _fit_length(value, node.min_length, node.max_length))

    def _build_integer(self, node: IntegerNode, pointer: Pointer) -> SearchStrategy | Unsupported:
        if node.enum is not None:
            return self._sampled(node.enum, pointer)
        minimum, maximum = node.minimum, node.maximum
        offset = self.config.boundary_offset
        if minimum is not None and maximum is not None and minimum > maximum:
            return self._refuse("minimum is greater than maximum", pointer)
        if minimum is not None and maximum is not None:
            return st.integers(min_value=minimum, max_value=maximum)
        if minimum is not None:
            return st.integers(min_value=minimum, max_value=minimum + offset) | st.integers(min_value=minimum)
        if maximum is not None:
            return st.integers(min_value=maximum - offset, max_value=maximum) | st.integers(max_value=maximum)
        return st.integers()

    def _build_number(self, node: NumberNode, pointer: Pointer) -> SearchStrategy | Unsupported:
        if node.enum is not None:
            return self._sampled(node.enum, pointer)
        minimum, maximum = node.minimum, node.maximum
        offset = self.config.boundary_offset
        if minimum is not None and maximum is not None and minimum > maximum:
            return self._refuse("minimum is greater than maximum", pointer)

        def floats(min_value=None, max_value=None):
            return st.floats(min_value=min_value, max_value=max_value, allow_nan=False, allow_infinity=False)

        if minimum is not None and maximum is not None:
            return floats(minimum, maximum)
        if minimum is not None:
            return floats(minimum, minimum + offset) | floats(min_value=minimum)
        if maximum is not None:
            return floats(maximum - offset, maximum) | floats(max_value=maximum)
        return floats()

    def _build_any_of(self, node: AnyOfNode, pointer: Pointer) -> SearchStrategy | Unsupported:
        if not node.schemas:
            return self._refuse("anyOf has no schemas to choose from", pointer)
        members = []
        for index, schema in enumerate(node.schemas):
            strategy = self.build(schema, pointer + ("anyOf", str(index)))
            if isinstance(strategy, Unsupported):
                return strategy
            members.append(strategy)
        return st.one_of(*members)
