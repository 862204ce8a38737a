"""Tests for the read-only shapes graph view."""
import os

import pytest
from rdflib import Graph, Literal, Namespace, URIRef
from rdflib.namespace import OWL, RDFS, XSD

from shacl2dtdl.config import RunConfig
from shacl2dtdl.errors import OntologyLoadError
from shacl2dtdl.parser.shapes_graph import ShapesGraph, load_ontology
from shacl2dtdl.schema.ontology import ShapeKind

DATA_DIR = os.path.join(os.path.dirname(__file__), "data")
BUILDING = os.path.join(DATA_DIR, "building.ttl")

EX = Namespace("https://example.org/ontology/building#")


@pytest.fixture(scope="module")
def shapes():
    return ShapesGraph(load_ontology(BUILDING))


def _names(shape_list):
    return {s.name for s in shape_list}


class TestLoad:

    def test_load_file(self):
        g = load_ontology(BUILDING)
        assert len(g) > 0

    def test_missing_file(self, tmp_path):
        with pytest.raises(OntologyLoadError):
            load_ontology(str(tmp_path / "missing.ttl"))

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "broken.ttl"
        path.write_text("@prefix ex: <http://example.org/> .\nex:a ex:b", encoding="utf-8")
        with pytest.raises(OntologyLoadError):
            load_ontology(str(path), format="turtle")

    def test_fresh_graph_per_call(self):
        assert load_ontology(BUILDING) is not load_ontology(BUILDING)


class TestEligibility:

    def test_class_shapes(self, shapes):
        assert _names(shapes.class_shapes()) == {
            "Location", "Building", "Room", "Bookable", "Space",
            "Conference_Room", "Thermostat", "Sensor", "Ignored_Thing",
        }

    def test_all_shapes_include_synthetic(self, shapes):
        names = _names(shapes.all_shapes())
        assert {"Legacy_Room", "SelfTyped", "Temperature_Value", "OccupancyLevel"} <= names

    def test_deprecated_excluded(self, shapes):
        assert shapes.shape(EX.Legacy_Room).deprecated
        assert not shapes.is_eligible(shapes.shape(EX.Legacy_Room))

    def test_ignored_excluded(self):
        config = RunConfig(ignored_uris=frozenset({"Ignored_Thing"}))
        shapes = ShapesGraph(load_ontology(BUILDING), config)
        assert "Ignored_Thing" not in _names(shapes.class_shapes())
        assert "Location" in _names(shapes.class_shapes())

    def test_not_a_class(self):
        g = Graph()
        g.parse(data="""
            @prefix ex: <http://example.org/> .
            @prefix sh: <http://www.w3.org/ns/shacl#> .
            ex:PersonShape a sh:NodeShape .
        """, format="turtle")
        assert ShapesGraph(g).class_shapes() == []


class TestKinds:

    def test_value_shape(self, shapes):
        assert shapes.has_kind(EX.Temperature_Value, ShapeKind.VALUE_SHAPE)
        assert shapes.has_kind(EX.Empty_Value, ShapeKind.VALUE_SHAPE)
        assert not shapes.has_kind(EX.Room, ShapeKind.VALUE_SHAPE)

    def test_enumeration(self, shapes):
        assert shapes.has_kind(EX.OccupancyLevel, ShapeKind.ENUMERATION)
        assert set(shapes.enumeration_instances(EX.OccupancyLevel)) == {EX.High, EX.Low}

    def test_self_typed(self, shapes):
        assert shapes.has_kind(EX.SelfTyped, ShapeKind.SELF_TYPED)

    def test_component(self, shapes):
        assert shapes.has_kind(EX.Thermostat, ShapeKind.COMPONENT)
        assert shapes.is_eligible(shapes.shape(EX.Thermostat))

    def test_literals_and_none_have_no_kinds(self, shapes):
        assert not shapes.has_kind(None, ShapeKind.VALUE_SHAPE)
        assert not shapes.has_kind(Literal("x"), ShapeKind.ENUMERATION)

    def test_cached(self, shapes):
        assert shapes.kinds(EX.Room) is shapes.kinds(EX.Room)


class TestHierarchy:

    def test_named_supers_skip_top_thing(self, shapes):
        assert shapes.direct_super_shapes(EX.Location) == [OWL.Thing]
        assert shapes.named_super_shapes(EX.Location) == []
        assert shapes.is_root(EX.Location)

    def test_multiple_supers(self, shapes):
        assert set(shapes.named_super_shapes(EX.Conference_Room)) == {
            EX.Room, EX.Bookable, EX.Space,
        }

    def test_transitive_supers(self, shapes):
        supers = shapes.super_shapes(EX.Conference_Room)
        assert {EX.Room, EX.Location, EX.Bookable, EX.Space} <= set(supers)

    def test_sub_shapes(self, shapes):
        assert set(shapes.direct_sub_shapes(EX.Room)) == {EX.Conference_Room, EX.Legacy_Room}
        assert EX.Conference_Room in shapes.sub_shapes(EX.Location)

    def test_longest_path(self, shapes):
        assert shapes.longest_super_shape_path(EX.Conference_Room) == [EX.Location, EX.Room]
        assert shapes.longest_super_shape_path(EX.Room) == [EX.Location]
        assert shapes.longest_super_shape_path(EX.Location) == []

    def test_longest_path_survives_cycle(self):
        g = Graph()
        g.parse(data="""
            @prefix ex: <http://example.org/> .
            @prefix owl: <http://www.w3.org/2002/07/owl#> .
            @prefix rdfs: <http://www.w3.org/2000/01/rdf-schema#> .
            ex:A a owl:Class ; rdfs:subClassOf ex:B .
            ex:B a owl:Class ; rdfs:subClassOf ex:A .
        """, format="turtle")
        path = ShapesGraph(g).longest_super_shape_path(URIRef("http://example.org/A"))
        assert path[-1] == URIRef("http://example.org/B")


class TestAnnotations:

    def test_labels_per_language(self, shapes):
        labels = {(str(l), l.language) for l in shapes.labels(EX.Location)}
        assert labels == {("Location", "en"), ("Plats", "sv")}

    def test_tags(self, shapes):
        assert sorted(shapes.tags(EX.Conference_Room)) == ["Conference", "Room"]
        assert shapes.tags(EX.Building) == []

    def test_types_include_functional(self, shapes):
        assert OWL.FunctionalProperty in shapes.types(EX.floorCount)

    def test_annotation_properties(self, shapes):
        assert shapes.annotation_properties_for(EX.feeds) == [(EX.feedRate, XSD.double)]
        assert shapes.annotation_properties_for(EX.floorCount) == []

    def test_enumeration_members(self, shapes):
        range_node = shapes.graph.value(EX.mode, RDFS.range)
        members = shapes.enumeration_members(range_node)
        assert [str(m) for m in members] == ["heat", "cool", "auto"]
        assert shapes.enumeration_members(EX.Room) is None
