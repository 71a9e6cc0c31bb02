"""
Constructor functions for building schemas in code.

Each constructor returns a complete `Schema`. Nested schemas may be complete
schemas too; their definitions are hoisted into the definitions of the
schema being built, so only the root ever carries a definitions mapping.

Example:
    tree = recurse(
        "tree",
        lambda tree: object_(
            required("value", integer()),
            optional("children", array(items=tree)),
        ),
    )
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import Any, Callable, Iterable

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
    Property,
    RefNode,
    Schema,
    SchemaNode,
    StringFormat,
    StringNode,
    TupleNode,
    merge,
    ref_path,
    split,
)

SchemaLike = Schema | SchemaNode


@dataclass(frozen=True)
class PropertySpec:
    """A property waiting to be placed into an object schema."""

    name: str
    schema: SchemaLike
    is_required: bool


def required(name: str, schema: SchemaLike) -> PropertySpec:
    return PropertySpec(name, schema, True)


def optional(name: str, schema: SchemaLike) -> PropertySpec:
    return PropertySpec(name, schema, False)


def _unwrap(schemas: Iterable[SchemaLike]) -> tuple[dict[str, SchemaNode], list[SchemaNode]]:
    """Split nested schemas, collecting their definitions into one mapping."""
    collected = []
    nodes = []
    for schema in schemas:
        definitions, node = split(schema)
        collected.append(definitions)
        nodes.append(node)
    return merge(*collected), nodes


def _tuple_or_none(values: Iterable[Any] | None) -> tuple | None:
    return None if values is None else tuple(values)


def object_(
    *properties: PropertySpec,
    title: str | None = None,
    description: str | None = None,
    examples: Iterable[Any] = (),
    min_properties: int | None = None,
    max_properties: int | None = None,
) -> Schema:
    definitions, nodes = _unwrap(prop.schema for prop in properties)
    node = ObjectNode(
        title=title,
        description=description,
        examples=tuple(examples),
        properties=tuple(Property(prop.name, child, prop.is_required) for prop, child in zip(properties, nodes)),
        min_properties=min_properties,
        max_properties=max_properties,
    )
    return Schema(node, definitions)


def array(
    items: SchemaLike | None = None,
    *,
    title: str | None = None,
    description: str | None = None,
    examples: Iterable[Any] = (),
    min_items: int | None = None,
    max_items: int | None = None,
) -> Schema:
    definitions, nodes = _unwrap([] if items is None else [items])
    node = ArrayNode(
        title=title,
        description=description,
        examples=tuple(examples),
        items=nodes[0] if nodes else None,
        min_items=min_items,
        max_items=max_items,
    )
    return Schema(node, definitions)


def tuple_(
    items: Iterable[SchemaLike] = (),
    *,
    additional_items: SchemaLike | None = None,
    title: str | None = None,
    description: str | None = None,
    examples: Iterable[Any] = (),
    min_items: int | None = None,
    max_items: int | None = None,
) -> Schema:
    item_definitions, item_nodes = _unwrap(items)
    extra_definitions, extra_nodes = _unwrap([] if additional_items is None else [additional_items])
    node = TupleNode(
        title=title,
        description=description,
        examples=tuple(examples),
        items=tuple(item_nodes),
        additional_items=extra_nodes[0] if extra_nodes else None,
        min_items=min_items,
        max_items=max_items,
    )
    return Schema(node, merge(item_definitions, extra_definitions))


def string(
    *,
    title: str | None = None,
    description: str | None = None,
    examples: Iterable[Any] = (),
    enum: Iterable[str] | None = None,
    min_length: int | None = None,
    max_length: int | None = None,
    pattern: str | None = None,
    format: StringFormat | str | None = None,
) -> Schema:
    node = StringNode(
        title=title,
        description=description,
        examples=tuple(examples),
        enum=_tuple_or_none(enum),
        min_length=min_length,
        max_length=max_length,
        pattern=pattern,
        format=format,
    )
    return Schema(node)


def integer(
    *,
    title: str | None = None,
    description: str | None = None,
    examples: Iterable[Any] = (),
    enum: Iterable[int] | None = None,
    minimum: int | None = None,
    maximum: int | None = None,
) -> Schema:
    node = IntegerNode(
        title=title,
        description=description,
        examples=tuple(examples),
        enum=_tuple_or_none(enum),
        minimum=minimum,
        maximum=maximum,
    )
    return Schema(node)


def number(
    *,
    title: str | None = None,
    description: str | None = None,
    examples: Iterable[Any] = (),
    enum: Iterable[float] | None = None,
    minimum: float | None = None,
    maximum: float | None = None,
) -> Schema:
    node = NumberNode(
        title=title,
        description=description,
        examples=tuple(examples),
        enum=_tuple_or_none(enum),
        minimum=minimum,
        maximum=maximum,
    )
    return Schema(node)


def boolean(
    *,
    title: str | None = None,
    description: str | None = None,
    examples: Iterable[Any] = (),
    enum: Iterable[bool] | None = None,
) -> Schema:
    node = BooleanNode(title=title, description=description, examples=tuple(examples), enum=_tuple_or_none(enum))
    return Schema(node)


def null(*, title: str | None = None, description: str | None = None, examples: Iterable[Any] = ()) -> Schema:
    return Schema(NullNode(title=title, description=description, examples=tuple(examples)))


def ref(
    target: str,
    *,
    title: str | None = None,
    description: str | None = None,
    examples: Iterable[Any] = (),
) -> Schema:
    """Reference a definition by name ("node") or by full path ("#/definitions/node")."""
    path = target if target.startswith("#") else ref_path(target)
    return Schema(RefNode(title=title, description=description, examples=tuple(examples), ref=path))


def _combinator(node_class, schemas, title, description, examples) -> Schema:
    definitions, nodes = _unwrap(schemas)
    node = node_class(title=title, description=description, examples=tuple(examples), schemas=tuple(nodes))
    return Schema(node, definitions)


def one_of(
    schemas: Iterable[SchemaLike],
    *,
    title: str | None = None,
    description: str | None = None,
    examples: Iterable[Any] = (),
) -> Schema:
    return _combinator(OneOfNode, schemas, title, description, examples)


def any_of(
    schemas: Iterable[SchemaLike],
    *,
    title: str | None = None,
    description: str | None = None,
    examples: Iterable[Any] = (),
) -> Schema:
    return _combinator(AnyOfNode, schemas, title, description, examples)


def all_of(
    schemas: Iterable[SchemaLike],
    *,
    title: str | None = None,
    description: str | None = None,
    examples: Iterable[Any] = (),
) -> Schema:
    return _combinator(AllOfNode, schemas, title, description, examples)


@functools.lru_cache(maxsize=None)
def _lazy_thunk(build: Callable[[], SchemaLike]) -> Callable[[], SchemaNode]:
    return lambda: split(build())[1]


def lazy(build: Callable[[], SchemaLike]) -> Schema:
    """
    Defer building a node until a traversal reaches it.

    Every call with the same `build` function shares one thunk, so the encoder
    can tell when a lazy schema reaches itself again.
    """
    return Schema(LazyNode(thunk=_lazy_thunk(build)))


def fallback(raw: Any) -> Schema:
    return Schema(FallbackNode(raw))


def recurse(name: str, build: Callable[[Schema], SchemaLike]) -> Schema:
    """
    Build a self-referential schema stored under `name`.

    Args:
        name: Definition name, referenced as "#/definitions/<name>"
        build: Receives a reference to the definition being built and returns
            its body

    Returns:
        A reference to the definition, carrying the definitions mapping
    """
    placeholder = ref(name)
    definitions, body = split(build(placeholder))
    return Schema(RefNode(ref=ref_path(name)), merge(definitions, {name: body}))
