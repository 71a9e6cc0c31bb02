"""
Node definitions for the schema data model.

Every JSON Schema kind the toolkit understands has exactly one node class.
Nodes are frozen: a schema is built once and then only read by the
validator, the fuzzer and the encoder.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Mapping


class StringFormat(str, Enum):
    """Named string formats. Any other label is kept as a plain string."""

    DATE_TIME = "date-time"
    EMAIL = "email"
    HOSTNAME = "hostname"
    IPV4 = "ipv4"
    IPV6 = "ipv6"
    URI = "uri"


@dataclass(frozen=True)
class SchemaNode:
    """Base class for all schema nodes."""


@dataclass(frozen=True)
class DocumentedNode(SchemaNode):
    """Node carrying the documentation attributes shared by all kinds."""

    title: str | None = None
    description: str | None = None

    # Opaque JSON values, only used for documentation
    examples: tuple[Any, ...] = ()


@dataclass(frozen=True)
class Property:
    """A named property of an object node."""

    name: str
    schema: SchemaNode
    is_required: bool = False


@dataclass(frozen=True)
class ObjectNode(DocumentedNode):
    properties: tuple[Property, ...] = ()
    min_properties: int | None = None
    max_properties: int | None = None

    @property
    def required(self) -> list[str]:
        return [prop.name for prop in self.properties if prop.is_required]


@dataclass(frozen=True)
class ArrayNode(DocumentedNode):
    items: SchemaNode | None = None  # None = unconstrained items
    min_items: int | None = None
    max_items: int | None = None


@dataclass(frozen=True)
class TupleNode(DocumentedNode):
    """Positional array: one schema per index, then `additional_items`."""

    items: tuple[SchemaNode, ...] = ()
    additional_items: SchemaNode | None = None
    min_items: int | None = None
    max_items: int | None = None


@dataclass(frozen=True)
class StringNode(DocumentedNode):
    enum: tuple[str, ...] | None = None
    min_length: int | None = None
    max_length: int | None = None
    pattern: str | None = None
    format: StringFormat | str | None = None


@dataclass(frozen=True)
class IntegerNode(DocumentedNode):
    enum: tuple[int, ...] | None = None
    minimum: int | None = None
    maximum: int | None = None


@dataclass(frozen=True)
class NumberNode(DocumentedNode):
    enum: tuple[float, ...] | None = None
    minimum: float | None = None
    maximum: float | None = None


@dataclass(frozen=True)
class BooleanNode(DocumentedNode):
    enum: tuple[bool, ...] | None = None


@dataclass(frozen=True)
class NullNode(DocumentedNode):
    pass


@dataclass(frozen=True)
class RefNode(DocumentedNode):
    """A `$ref` to a named definition, e.g. "#/definitions/node"."""

    ref: str = ""


@dataclass(frozen=True)
class CombinatorNode(DocumentedNode):
    """Base class for oneOf/anyOf/allOf."""

    # Wire keyword, overridden by subclasses
    KEYWORD = ""

    schemas: tuple[SchemaNode, ...] = ()


@dataclass(frozen=True)
class OneOfNode(CombinatorNode):
    KEYWORD = "oneOf"


@dataclass(frozen=True)
class AnyOfNode(CombinatorNode):
    KEYWORD = "anyOf"


@dataclass(frozen=True)
class AllOfNode(CombinatorNode):
    KEYWORD = "allOf"


@dataclass(frozen=True)
class LazyNode(DocumentedNode):
    """Deferred node, forced on every traversal.

    The thunk must return a bare node. Definitions produced inside the thunk
    are not visible to the traversal; declare them on the enclosing schema.
    """

    thunk: Callable[[], SchemaNode] | None = field(default=None, compare=False)

    def force(self) -> SchemaNode:
        if self.thunk is None:
            raise ValueError("LazyNode has no thunk")
        return self.thunk()


@dataclass(frozen=True)
class FallbackNode(SchemaNode):
    """Unrecognized schema shape, kept verbatim and accepting any value."""

    raw: Any = None


@dataclass(frozen=True)
class Schema:
    """A complete schema: the root node plus the definitions it refers to.

    The definitions mapping lives only here; nested nodes never carry one.
    """

    root: SchemaNode
    definitions: Mapping[str, SchemaNode] = field(default_factory=dict)
