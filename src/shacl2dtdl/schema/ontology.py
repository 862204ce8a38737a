"""Source-side model: class shapes and resolved properties."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from rdflib import Literal, URIRef

from shacl2dtdl.schema.common import local_name


class ShapeKind(Enum):
    """Special roles a class or shape can play, computed once per graph."""

    VALUE_SHAPE = "ValueShape"
    ENUMERATION = "Enumeration"
    SELF_TYPED = "SelfTyped"
    COMPONENT = "Component"


# Kinds that mark synthetic constructs, never translated on their own
SYNTHETIC_KINDS = frozenset({
    ShapeKind.VALUE_SHAPE,
    ShapeKind.ENUMERATION,
    ShapeKind.SELF_TYPED,
})


class PropertyType(Enum):
    DATA = "Data"
    OBJECT = "Object"


@dataclass(frozen=True)
class ClassShape:
    """A named class that is also a SHACL node shape."""

    uri: URIRef
    labels: tuple = ()
    comments: tuple = ()
    deprecated: bool = False
    kinds: frozenset = frozenset()

    @property
    def name(self) -> str:
        return local_name(self.uri)


@dataclass(eq=False)
class Property:
    """One named predicate as used on a class shape.

    Two properties are equal when their local names match
    case-insensitively; this is the deduplication key.
    """

    predicate: URIRef
    type: PropertyType = PropertyType.OBJECT
    target: Optional[URIRef] = None
    in_values: list = field(default_factory=list)
    min_count: Optional[int] = None
    max_count: Optional[int] = None
    labels: list[Literal] = field(default_factory=list)
    comments: list[Literal] = field(default_factory=list)

    @property
    def name(self) -> str:
        return local_name(self.predicate)

    @property
    def key(self) -> str:
        return self.name.casefold()

    def __hash__(self):
        return hash(self.key)

    def __eq__(self, other):
        if isinstance(other, Property):
            return self.key == other.key
        return False

    def __repr__(self):
        return f"Property({self.name!r}, {self.type.value})"
