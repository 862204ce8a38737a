"""DTDL v3 data model (Interface, contents, schemas).

Each model knows how to render itself as the compacted JSON-LD form used in
DTDL documents, via ``to_dict``. Ordering is applied separately, see
``shacl2dtdl.serializer.json_serializer.order_interface``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Optional, Union

DTDL_CONTEXT = "dtmi:dtdl:context;3"
INITIALIZATION_CONTEXT = "dtmi:dtdl:extension:initialization;1"

# DTDL limits
MAX_EXTENDS = 2
MAX_NAME_LENGTH = 64


class Primitive(Enum):
    BOOLEAN = "boolean"
    DATE = "date"
    DATE_TIME = "dateTime"
    DOUBLE = "double"
    DURATION = "duration"
    FLOAT = "float"
    INTEGER = "integer"
    LONG = "long"
    STRING = "string"
    POLYGON = "polygon"


@dataclass(frozen=True)
class PrimitiveSchema:
    primitive: Primitive = Primitive.STRING

    def to_dict(self) -> str:
        return self.primitive.value


STRING = PrimitiveSchema(Primitive.STRING)


@dataclass
class EnumValue:
    name: str
    enum_value: str

    def to_dict(self) -> dict:
        return {"name": self.name, "enumValue": self.enum_value}


@dataclass
class EnumSchema:
    values: list[EnumValue] = field(default_factory=list)
    value_schema: PrimitiveSchema = STRING

    def to_dict(self) -> dict:
        return {
            "@type": "Enum",
            "valueSchema": self.value_schema.to_dict(),
            "enumValues": [v.to_dict() for v in self.values],
        }


@dataclass
class Field:
    """A named slot in an Object schema, or a Map key/value."""

    name: str
    schema: "Schema" = STRING

    def to_dict(self) -> dict:
        return {"name": self.name, "schema": self.schema.to_dict()}


@dataclass
class ObjectSchema:
    fields: list[Field] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"@type": "Object", "fields": [f.to_dict() for f in self.fields]}


@dataclass
class MapSchema:
    key: Field
    value: Field

    def to_dict(self) -> dict:
        return {
            "@type": "Map",
            "mapKey": self.key.to_dict(),
            "mapValue": self.value.to_dict(),
        }


@dataclass
class ArraySchema:
    element_schema: "Schema" = STRING

    def to_dict(self) -> dict:
        return {"@type": "Array", "elementSchema": self.element_schema.to_dict()}


Schema = Union[PrimitiveSchema, EnumSchema, ObjectSchema, MapSchema, ArraySchema]


class ContentKind(Enum):
    COMPONENT = "Component"
    PROPERTY = "Property"
    RELATIONSHIP = "Relationship"


class Content:
    """Common behaviour of Interface contents."""

    kind: ClassVar[ContentKind]

    def sort_key(self) -> tuple:
        return (self.kind.value, self.name)

    def _header(self, types) -> dict:
        d: dict = {"@type": types, "name": self.name}
        if self.display_names:
            d["displayName"] = dict(self.display_names)
        if self.descriptions:
            d["description"] = dict(self.descriptions)
        return d


@dataclass
class PropertyContent(Content):
    name: str
    schema: Schema = STRING
    writable: bool = True
    initial_values: list[str] = field(default_factory=list)
    display_names: dict = field(default_factory=dict)
    descriptions: dict = field(default_factory=dict)

    kind: ClassVar[ContentKind] = ContentKind.PROPERTY

    def to_dict(self) -> dict:
        if self.initial_values:
            d = self._header(["Property", "Initialized"])
        else:
            d = self._header("Property")
        d["schema"] = self.schema.to_dict()
        d["writable"] = self.writable
        if self.initial_values:
            d["initialValue"] = list(self.initial_values)
        return d


@dataclass
class RelationshipContent(Content):
    name: str
    target: Optional[str] = None
    max_multiplicity: Optional[int] = None
    writable: bool = True
    properties: list[PropertyContent] = field(default_factory=list)
    display_names: dict = field(default_factory=dict)
    descriptions: dict = field(default_factory=dict)

    kind: ClassVar[ContentKind] = ContentKind.RELATIONSHIP

    def to_dict(self) -> dict:
        d = self._header("Relationship")
        if self.target is not None:
            d["target"] = self.target
        # minMultiplicity is always 0 in DTDL and never emitted
        if self.max_multiplicity is not None:
            d["maxMultiplicity"] = self.max_multiplicity
        d["writable"] = self.writable
        if self.properties:
            d["properties"] = [p.to_dict() for p in self.properties]
        return d


@dataclass
class ComponentContent(Content):
    name: str
    schema: str
    display_names: dict = field(default_factory=dict)
    descriptions: dict = field(default_factory=dict)

    kind: ClassVar[ContentKind] = ContentKind.COMPONENT

    def to_dict(self) -> dict:
        d = self._header("Component")
        d["schema"] = self.schema
        return d


AnyContent = Union[PropertyContent, RelationshipContent, ComponentContent]


@dataclass
class Interface:
    dtmi: str
    display_names: dict = field(default_factory=dict)
    descriptions: dict = field(default_factory=dict)
    extends: list[str] = field(default_factory=list)
    contents: list[AnyContent] = field(default_factory=list)

    def content(self, name: str) -> Optional[AnyContent]:
        """Look up a content item by name."""
        return next((c for c in self.contents if c.name == name), None)

    def to_dict(self) -> dict:
        d: dict = {
            "@context": [DTDL_CONTEXT, INITIALIZATION_CONTEXT],
            "@id": self.dtmi,
            "@type": "Interface",
        }
        if self.display_names:
            d["displayName"] = dict(self.display_names)
        if self.descriptions:
            d["description"] = dict(self.descriptions)
        if self.extends:
            d["extends"] = list(self.extends)
        if self.contents:
            d["contents"] = [c.to_dict() for c in self.contents]
        return d
