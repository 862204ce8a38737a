"""Ontology loading and the read-only shapes graph view."""
from shacl2dtdl.parser.shapes_graph import ShapesGraph, load_ontology
