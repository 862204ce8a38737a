"""Tests for schema synthesis from property ranges."""
import logging
import os

import pytest
from rdflib import Graph, Literal, Namespace, URIRef
from rdflib.namespace import XSD

from shacl2dtdl.converter.schemas import SchemaSynthesizer, enum_schema, primitive_for
from shacl2dtdl.parser.shapes_graph import ShapesGraph, load_ontology
from shacl2dtdl.schema.dtdl import (
    STRING,
    EnumSchema,
    ObjectSchema,
    Primitive,
    PrimitiveSchema,
)
from shacl2dtdl.schema.ontology import Property, PropertyType

DATA_DIR = os.path.join(os.path.dirname(__file__), "data")
BUILDING = os.path.join(DATA_DIR, "building.ttl")

EX = Namespace("https://example.org/ontology/building#")


@pytest.fixture(scope="module")
def synthesizer():
    return SchemaSynthesizer(ShapesGraph(load_ontology(BUILDING)))


def _enum_names(schema):
    assert isinstance(schema, EnumSchema)
    return [v.name for v in schema.values]


class TestPrimitives:

    @pytest.mark.parametrize("datatype, expected", [
        (XSD.boolean, Primitive.BOOLEAN),
        (XSD.dateTime, Primitive.DATE_TIME),
        (XSD.double, Primitive.DOUBLE),
        (XSD.int, Primitive.INTEGER),
        (XSD.integer, Primitive.INTEGER),
        (XSD.string, Primitive.STRING),
    ])
    def test_xsd(self, datatype, expected):
        assert primitive_for(datatype) == PrimitiveSchema(expected)

    def test_unknown_datatype(self):
        assert primitive_for(XSD.anyURI) == STRING

    def test_synthesize_primitive(self, synthesizer):
        assert synthesizer.synthesize(XSD.float) == PrimitiveSchema(Primitive.FLOAT)


class TestEnums:

    def test_sanitized_names(self):
        schema = enum_schema(["In use", "1st floor", "vacant"])
        assert _enum_names(schema) == ["Inuse", "stfloor", "vacant"]
        assert schema.values[0].enum_value == "Inuse"
        assert schema.value_schema == STRING

    def test_empty_names_dropped(self, caplog):
        with caplog.at_level(logging.WARNING):
            schema = enum_schema(["42", "!!", "ok"])
        assert _enum_names(schema) == ["ok"]
        assert "empty after sanitization" in caplog.text

    def test_collisions_collapsed(self, caplog):
        with caplog.at_level(logging.WARNING):
            schema = enum_schema(["a b", "ab", "a-b"])
        assert _enum_names(schema) == ["ab"]
        assert "collides" in caplog.text

    def test_in_values_win(self, synthesizer):
        schema = synthesizer.synthesize(XSD.integer, [Literal("low"), Literal("high")])
        assert _enum_names(schema) == ["low", "high"]

    def test_uri_options(self, synthesizer):
        schema = synthesizer.synthesize(None, [URIRef("http://qudt.org/vocab/unit/DEG_C")])
        assert _enum_names(schema) == ["DEG_C"]

    def test_enumeration_class(self, synthesizer):
        schema = synthesizer.synthesize(EX.OccupancyLevel)
        assert sorted(_enum_names(schema)) == ["High", "Low"]

    def test_one_of_datatype(self, synthesizer):
        prop = Property(
            predicate=EX.mode,
            type=PropertyType.DATA,
            in_values=[Literal("heat"), Literal("cool")],
        )
        assert _enum_names(synthesizer.for_property(prop)) == ["heat", "cool"]


class TestValueShapes:

    def test_several_properties_make_object(self, synthesizer):
        schema = synthesizer.synthesize(EX.Temperature_Value)
        assert isinstance(schema, ObjectSchema)
        fields = {f.name: f.schema for f in schema.fields}
        assert set(fields) == {"value", "unit"}
        assert fields["value"] == PrimitiveSchema(Primitive.DOUBLE)
        assert _enum_names(fields["unit"]) == ["DEG_C", "DEG_F"]

    def test_single_property_collapses(self, synthesizer):
        assert synthesizer.synthesize(EX.Humidity_Value) == PrimitiveSchema(Primitive.FLOAT)

    def test_no_properties_is_string(self, synthesizer):
        assert synthesizer.synthesize(EX.Empty_Value) == STRING


class TestFallback:

    def test_no_range(self, synthesizer):
        assert synthesizer.synthesize(None) == STRING

    def test_unknown_class(self, synthesizer):
        assert synthesizer.synthesize(EX.Building) == STRING

    def test_self_referencing_value_shape(self):
        g = Graph()
        g.parse(data="""
            @prefix ex: <http://example.org/> .
            @prefix bsh: <https://brickschema.org/schema/BrickShape#> .
            @prefix owl: <http://www.w3.org/2002/07/owl#> .
            @prefix rdfs: <http://www.w3.org/2000/01/rdf-schema#> .
            @prefix sh: <http://www.w3.org/ns/shacl#> .
            ex:Loop a owl:Class, sh:NodeShape ;
                rdfs:subClassOf bsh:ValueShape ;
                sh:property [ sh:path ex:next ; sh:class ex:Loop ] .
        """, format="turtle")
        schema = SchemaSynthesizer(ShapesGraph(g)).synthesize(URIRef("http://example.org/Loop"))
        assert schema == STRING
