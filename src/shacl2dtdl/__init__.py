"""shacl2dtdl: translate SHACL-shaped OWL ontologies into DTDL Interfaces."""
__version__ = "0.1.0"

from shacl2dtdl.config import RunConfig, load_ignore_file
from shacl2dtdl.errors import (
    AmbiguousRange,
    IdentifierCollision,
    OntologyLoadError,
    PlacementCollision,
    TranslationError,
    UnsupportedPathKind,
)
from shacl2dtdl.schema.dtdl import Interface
from shacl2dtdl.schema.ontology import ClassShape, Property, PropertyType, ShapeKind

from shacl2dtdl.parser.shapes_graph import ShapesGraph, load_ontology

from shacl2dtdl.converter.identifiers import mint_dtmi
from shacl2dtdl.converter.shacl_to_dtdl import InterfaceSynthesizer, convert_shacl_to_dtdl

from shacl2dtdl.serializer.json_serializer import serialize_interface
from shacl2dtdl.serializer.placement import place, write_interface

__all__ = [
    # Config & errors
    "RunConfig", "load_ignore_file",
    "TranslationError", "UnsupportedPathKind", "AmbiguousRange",
    "IdentifierCollision", "OntologyLoadError", "PlacementCollision",
    # Schema
    "Interface", "ClassShape", "Property", "PropertyType", "ShapeKind",
    # Parser
    "ShapesGraph", "load_ontology",
    # Converters
    "mint_dtmi", "InterfaceSynthesizer", "convert_shacl_to_dtdl",
    # Serializers
    "serialize_interface", "place", "write_interface",
]
