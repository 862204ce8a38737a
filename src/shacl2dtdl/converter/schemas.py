"""Synthesize DTDL schemas from property ranges.

Branches, tried in order:
1. An explicit list of allowed values (sh:in, owl:oneOf) → Enum
2. A recognized scalar datatype → primitive schema
3. An enumeration datatype or enumeration class → Enum
4. A value shape → its single property's schema, or an Object
5. Anything else → string
"""
from __future__ import annotations

import logging
from typing import Iterable

from rdflib import URIRef

from shacl2dtdl.converter.identifiers import sanitize_name
from shacl2dtdl.converter.properties import (
    deduplicate,
    option_name,
    resolve_property_shape,
)
from shacl2dtdl.errors import AmbiguousRange, UnsupportedPathKind
from shacl2dtdl.parser.shapes_graph import ShapesGraph
from shacl2dtdl.schema.common import local_name
from shacl2dtdl.schema.dtdl import (
    STRING,
    EnumSchema,
    EnumValue,
    Field,
    ObjectSchema,
    Primitive,
    PrimitiveSchema,
    Schema,
)
from shacl2dtdl.schema.ontology import Property, ShapeKind

logger = logging.getLogger(__name__)

# Keyed on datatype local name
PRIMITIVE_TYPES = {
    "boolean": Primitive.BOOLEAN,
    "byte": Primitive.INTEGER,
    "date": Primitive.DATE,
    "dateTime": Primitive.DATE_TIME,
    "dateTimeStamp": Primitive.DATE_TIME,
    "double": Primitive.DOUBLE,
    "duration": Primitive.DURATION,
    "float": Primitive.FLOAT,
    "int": Primitive.INTEGER,
    "integer": Primitive.INTEGER,
    "long": Primitive.LONG,
    "string": Primitive.STRING,
    "Polygon": Primitive.POLYGON,
}


def primitive_for(datatype) -> PrimitiveSchema:
    """Map a datatype onto a DTDL primitive, falling back to string."""
    primitive = PRIMITIVE_TYPES.get(local_name(datatype))
    return PrimitiveSchema(primitive) if primitive else STRING


def enum_schema(options: Iterable[str]) -> EnumSchema:
    """Build a string-valued Enum from raw option texts.

    Option names are sanitized; options that sanitize to nothing are dropped
    and options that collide with an earlier one are merged into it. Both
    are logged as warnings.
    """
    values: list[EnumValue] = []
    seen: set[str] = set()
    for option in options:
        name = sanitize_name(option)
        if not name:
            logger.warning("Dropping enum option %r: empty after sanitization", option)
            continue
        if name in seen:
            logger.warning("Enum option %r collides with %r after sanitization", option, name)
            continue
        seen.add(name)
        values.append(EnumValue(name=name, enum_value=name))
    return EnumSchema(values=values)


class SchemaSynthesizer:
    """Turns property ranges into DTDL schemas using a shapes graph."""

    def __init__(self, shapes: ShapesGraph):
        self.shapes = shapes

    def for_property(self, prop: Property, _visiting: frozenset = frozenset()) -> Schema:
        """Schema for a resolved property; allowed-value lists win."""
        return self.synthesize(prop.target, prop.in_values, _visiting)

    def synthesize(
        self,
        range_node=None,
        in_values: Iterable = (),
        _visiting: frozenset = frozenset(),
    ) -> Schema:
        """Schema for a range node, never failing.

        Args:
            range_node: Datatype, class or value shape; may be None.
            in_values: Explicit allowed values, taking precedence.

        Returns:
            The most specific schema representable, string at worst.
        """
        options = [option_name(v) for v in in_values]
        if options:
            return enum_schema(options)
        try:
            return self._synthesize_range(range_node, _visiting)
        except AmbiguousRange as exc:
            logger.debug("Falling back to string schema: %s", exc)
            return STRING

    def _synthesize_range(self, range_node, visiting: frozenset) -> Schema:
        if range_node is None:
            raise AmbiguousRange("no range given")

        if isinstance(range_node, URIRef) and local_name(range_node) in PRIMITIVE_TYPES:
            return primitive_for(range_node)

        members = self.shapes.enumeration_members(range_node)
        if members:
            return enum_schema(option_name(m) for m in members)

        if self.shapes.has_kind(range_node, ShapeKind.ENUMERATION):
            instances = self.shapes.enumeration_instances(range_node)
            return enum_schema(local_name(i) for i in instances)

        if self.shapes.has_kind(range_node, ShapeKind.VALUE_SHAPE):
            if range_node in visiting:
                raise AmbiguousRange(f"value shape {range_node} contains itself")
            return self.value_shape_schema(range_node, visiting | {range_node})

        raise AmbiguousRange(f"unrecognized range {range_node}")

    def value_shape_schema(self, shape, _visiting: frozenset = frozenset()) -> Schema:
        """Schema for a value shape, built from its property shapes.

        No properties gives string, a single property collapses into that
        property's own schema, and several become fields of an Object.
        """
        properties = deduplicate(self._value_shape_properties(shape))
        if not properties:
            return STRING
        if len(properties) == 1:
            return self.for_property(properties[0], _visiting)
        return ObjectSchema(fields=[
            Field(name=p.name, schema=self.for_property(p, _visiting))
            for p in properties
        ])

    def _value_shape_properties(self, shape) -> list[Property]:
        properties = []
        for node in self.shapes.property_shapes(shape):
            try:
                properties.append(resolve_property_shape(self.shapes, node, shape))
            except UnsupportedPathKind as exc:
                logger.warning("Skipping value shape property: %s", exc)
        return properties

