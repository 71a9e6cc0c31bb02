"""
Error types.

Validation problems are values (`ValidationError` pairs of pointer and
message) so that one validation pass can report every problem. Exceptions are
reserved for misuse: malformed schema text and refused generation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, NamedTuple

if TYPE_CHECKING:
    from .fuzz import Unsupported

Pointer = tuple[str, ...]


class ErrorMessage(ABC):
    """Base class for validation error kinds."""

    @abstractmethod
    def describe(self) -> str:
        pass

    def __str__(self) -> str:
        return self.describe()


@dataclass(frozen=True)
class IsShorterThan(ErrorMessage):
    length: int

    def describe(self) -> str:
        return f"must be at least {self.length} characters long"


@dataclass(frozen=True)
class IsLongerThan(ErrorMessage):
    length: int

    def describe(self) -> str:
        return f"must be at most {self.length} characters long"


@dataclass(frozen=True)
class DoesNotMatchPattern(ErrorMessage):
    pattern: str

    def describe(self) -> str:
        return f"must match pattern {self.pattern!r}"


@dataclass(frozen=True)
class NotInEnumeration(ErrorMessage):
    def describe(self) -> str:
        return "is not one of the enumerated values"


@dataclass(frozen=True)
class RequiredPropertyMissing(ErrorMessage):
    name: str

    def describe(self) -> str:
        return f"is missing required property {self.name!r}"


@dataclass(frozen=True)
class HasFewerItemsThan(ErrorMessage):
    count: int

    def describe(self) -> str:
        return f"must have at least {self.count} items"


@dataclass(frozen=True)
class HasMoreItemsThan(ErrorMessage):
    count: int

    def describe(self) -> str:
        return f"must have at most {self.count} items"


@dataclass(frozen=True)
class IsLessThan(ErrorMessage):
    bound: float

    def describe(self) -> str:
        return f"must be >= {self.bound}"


@dataclass(frozen=True)
class IsMoreThan(ErrorMessage):
    bound: float

    def describe(self) -> str:
        return f"must be <= {self.bound}"


@dataclass(frozen=True)
class TooManyMatches(ErrorMessage):
    def describe(self) -> str:
        return "matches more than one of the oneOf schemas"


@dataclass(frozen=True)
class TooFewMatches(ErrorMessage):
    def describe(self) -> str:
        return "does not match enough of the combined schemas"


@dataclass(frozen=True)
class DecodeError(ErrorMessage):
    message: str

    def describe(self) -> str:
        return self.message


class ValidationError(NamedTuple):
    """A validation problem and where in the value it was found."""

    pointer: Pointer
    message: ErrorMessage

    def __str__(self) -> str:
        return f"{format_pointer(self.pointer)}: {self.message}"


def format_pointer(pointer: Pointer) -> str:
    """Render a pointer JSON-pointer style; the root is "/"."""
    if not pointer:
        return "/"
    escaped = (segment.replace("~", "~0").replace("/", "~1") for segment in pointer)
    return "/" + "/".join(escaped)


def describe_kind(value: Any) -> str:
    """Name the JSON kind of a decoded value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


class SchemaDecodeError(ValueError):
    """Raised when schema text is not well-formed JSON."""

    pass


class UnsupportedSchemaError(ValueError):
    """Raised when a schema asks for a generator that is not implemented.

    The `unsupported` attribute holds the `Unsupported` value describing
    what was refused and where.
    """

    def __init__(self, unsupported: Unsupported):
        super().__init__(str(unsupported))
        self.unsupported = unsupported
