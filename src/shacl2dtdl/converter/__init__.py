"""Converters from SHACL shapes to DTDL models."""
from shacl2dtdl.converter.identifiers import mint_dtmi
from shacl2dtdl.converter.properties import (
    deduplicate,
    resolve_ontology_property,
    resolve_property_shape,
)
from shacl2dtdl.converter.schemas import SchemaSynthesizer
from shacl2dtdl.converter.shacl_to_dtdl import InterfaceSynthesizer, convert_shacl_to_dtdl
