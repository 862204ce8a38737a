"""Schema models for the source ontology and the DTDL output."""
from shacl2dtdl.schema.common import local_name, namespace_of
from shacl2dtdl.schema.ontology import ClassShape, Property, PropertyType, ShapeKind
from shacl2dtdl.schema.dtdl import (
    ArraySchema,
    ComponentContent,
    EnumSchema,
    EnumValue,
    Field,
    Interface,
    MapSchema,
    ObjectSchema,
    Primitive,
    PrimitiveSchema,
    PropertyContent,
    RelationshipContent,
)
