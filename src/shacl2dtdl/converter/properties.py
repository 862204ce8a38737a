"""Resolve property shapes and ontology properties into ``Property`` models.

Classification of a SHACL property shape, first match wins:
- sh:datatype, or sh:nodeKind sh:Literal → Data, target = the datatype
- sh:class, or sh:nodeKind sh:IRI        → Object, target = the class
- anything else                           → Object, no target

Only simple predicate paths are supported.
"""
from __future__ import annotations

import logging
from typing import Iterable

from rdflib import Literal, URIRef
from rdflib.namespace import RDFS, SH

from shacl2dtdl.errors import UnsupportedPathKind
from shacl2dtdl.parser.shapes_graph import ShapesGraph
from shacl2dtdl.schema.common import is_xsd_type, local_name
from shacl2dtdl.schema.ontology import Property, PropertyType

logger = logging.getLogger(__name__)


def _literals(shapes: ShapesGraph, node, predicate) -> list[Literal]:
    return [o for o in shapes.graph.objects(node, predicate) if isinstance(o, Literal)]


def _int_value(shapes: ShapesGraph, node, predicate):
    """Integer value of ``predicate`` on ``node``; None if absent or not a number."""
    value = shapes.graph.value(node, predicate)
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring non-integer %s %r on %s", local_name(predicate), str(value), node)
        return None


def resolve_property_shape(shapes: ShapesGraph, node, owner=None) -> Property:
    """Build a Property from a SHACL property shape.

    Args:
        shapes: The shapes graph holding the property shape.
        node: The property shape node (usually a blank node).
        owner: The node shape the property shape hangs off, for messages.

    Raises:
        UnsupportedPathKind: if ``sh:path`` is not a named predicate.
    """
    g = shapes.graph
    path = g.value(node, SH.path)
    if not isinstance(path, URIRef):
        raise UnsupportedPathKind(path, owner)

    prop = Property(predicate=path)

    # Documentation from the shape, falling back to the predicate itself
    prop.labels = _literals(shapes, node, SH.name) or shapes.labels(path)
    prop.comments = _literals(shapes, node, SH.description) or shapes.comments(path)

    datatype = g.value(node, SH.datatype)
    node_kind = g.value(node, SH.nodeKind)
    classes = [c for c in g.objects(node, SH["class"]) if isinstance(c, URIRef)]

    if isinstance(datatype, URIRef) or node_kind == SH.Literal:
        prop.type = PropertyType.DATA
        prop.target = datatype if isinstance(datatype, URIRef) else None
    elif classes or node_kind == SH.IRI:
        prop.type = PropertyType.OBJECT
        # More than one class leaves the target open
        prop.target = classes[0] if len(classes) == 1 else None
    else:
        prop.type = PropertyType.OBJECT

    prop.in_values = shapes.rdf_list(g.value(node, SH["in"]))
    prop.min_count = _int_value(shapes, node, SH.minCount)
    prop.max_count = _int_value(shapes, node, SH.maxCount)
    return prop


def resolve_ontology_property(shapes: ShapesGraph, predicate) -> Property:
    """Build a Property from a plain OWL/RDFS property declaration.

    Raises:
        UnsupportedPathKind: if ``predicate`` is not a named resource.
    """
    if not isinstance(predicate, URIRef):
        raise UnsupportedPathKind(predicate)

    prop = Property(
        predicate=predicate,
        labels=shapes.labels(predicate),
        comments=shapes.comments(predicate),
    )

    ranges = list(shapes.graph.objects(predicate, RDFS.range))
    if len(ranges) == 1:
        if isinstance(ranges[0], URIRef):
            prop.target = ranges[0]
        members = shapes.enumeration_members(ranges[0])
        if members:
            prop.in_values = members

    type_names = {local_name(t) for t in shapes.types(predicate)}
    if "DatatypeProperty" in type_names or (
        prop.target is not None and is_xsd_type(prop.target)
    ):
        prop.type = PropertyType.DATA
    else:
        prop.type = PropertyType.OBJECT

    if "FunctionalProperty" in type_names:
        prop.min_count = prop.max_count = 1
    return prop


def deduplicate(properties: Iterable[Property]) -> list[Property]:
    """Keep the first property seen for each case-insensitive name."""
    kept: dict[str, Property] = {}
    for prop in properties:
        kept.setdefault(prop.key, prop)
    return list(kept.values())


def option_name(value) -> str:
    """Raw enumeration option text: literal value or URI local name."""
    if isinstance(value, URIRef):
        return local_name(value)
    return str(value)
