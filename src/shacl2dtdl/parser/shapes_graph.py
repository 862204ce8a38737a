"""Load an ontology with rdflib and expose a read-only view of its shapes.

The view answers every question the translator asks of the source graph:
class hierarchy traversal, shape membership, annotations and the special
roles (value shape, enumeration, ...) a class can play. Roles are computed
once per resource and cached; the underlying graph is never modified.
"""
from __future__ import annotations

import logging
from typing import Optional

from rdflib import RDF, BNode, Graph, Literal, URIRef
from rdflib.collection import Collection
from rdflib.namespace import OWL, RDFS, SH

from shacl2dtdl.config import RunConfig
from shacl2dtdl.errors import OntologyLoadError
from shacl2dtdl.schema.common import (
    BRICK,
    COMPONENT_MARKER,
    VALUE_SHAPE_MARKER,
    fragment,
)
from shacl2dtdl.schema.ontology import SYNTHETIC_KINDS, ClassShape, ShapeKind

logger = logging.getLogger(__name__)

CLASS_TYPES = (OWL.Class, RDFS.Class)
TOP_THINGS = frozenset({OWL.Thing, RDFS.Resource})


def load_ontology(source: str, format: Optional[str] = None) -> Graph:
    """Parse a local file path or a URI into a fresh rdflib Graph.

    A new Graph is created on every call, so nothing is cached between runs.

    Args:
        source: File path or URI of the root ontology.
        format: RDF format; guessed by rdflib when omitted.

    Returns:
        The loaded graph.
    """
    g = Graph()
    logger.info("Loading %s", source)
    try:
        g.parse(source=source, format=format)
    except Exception as exc:
        raise OntologyLoadError(f"Could not load {source}: {exc}") from exc
    logger.info("Loaded %d triples from %s", len(g), source)
    return g


def _unique(nodes) -> list:
    seen = set()
    result = []
    for node in nodes:
        if node not in seen:
            seen.add(node)
            result.append(node)
    return result


class ShapesGraph:
    """Read-only query surface over a loaded ontology graph."""

    def __init__(self, graph: Graph, config: Optional[RunConfig] = None):
        self.graph = graph
        self.config = config or RunConfig()
        self._kinds: dict[URIRef, frozenset] = {}
        self._longest_paths: dict[URIRef, list[URIRef]] = {}
        self._shapes: dict[URIRef, ClassShape] = {}

        for node in _unique(graph.subjects(RDF.type, SH.NodeShape)):
            if isinstance(node, URIRef) and self.is_class(node):
                self._shapes[node] = ClassShape(
                    uri=node,
                    labels=tuple(self.labels(node)),
                    comments=tuple(self.comments(node)),
                    deprecated=self.is_deprecated(node),
                    kinds=self.kinds(node),
                )
        logger.debug("Found %d class shapes", len(self._shapes))

    # ── Shapes ──────────────────────────────────────────────────────

    def shape(self, uri) -> Optional[ClassShape]:
        return self._shapes.get(uri)

    def all_shapes(self) -> list[ClassShape]:
        """Every named class that is also a node shape, eligible or not."""
        return list(self._shapes.values())

    def class_shapes(self) -> list[ClassShape]:
        """Class shapes eligible for translation, in graph enumeration order."""
        return [s for s in self._shapes.values() if self.is_eligible(s)]

    def is_eligible(self, shape: ClassShape) -> bool:
        if shape.deprecated or self.config.is_ignored(shape.uri):
            return False
        return not (shape.kinds & SYNTHETIC_KINDS)

    # ── Resource properties ─────────────────────────────────────────

    def is_class(self, uri) -> bool:
        return any((uri, RDF.type, t) in self.graph for t in CLASS_TYPES)

    def is_node_shape(self, uri) -> bool:
        return (uri, RDF.type, SH.NodeShape) in self.graph

    def is_top_thing(self, uri) -> bool:
        return uri in TOP_THINGS

    def is_deprecated(self, uri) -> bool:
        for value in self.graph.objects(uri, OWL.deprecated):
            if isinstance(value, Literal) and (
                value.toPython() is True or str(value).lower() == "true"
            ):
                return True
        return False

    def labels(self, uri) -> list[Literal]:
        return [o for o in self.graph.objects(uri, RDFS.label) if isinstance(o, Literal)]

    def comments(self, uri) -> list[Literal]:
        return [o for o in self.graph.objects(uri, RDFS.comment) if isinstance(o, Literal)]

    def tags(self, uri) -> list[str]:
        """Fragment identifiers of the ``brick:hasAssociatedTag`` values."""
        return [
            fragment(o)
            for o in self.graph.objects(uri, BRICK.hasAssociatedTag)
            if isinstance(o, URIRef)
        ]

    def types(self, uri) -> list[URIRef]:
        """Direct and inherited ``rdf:type`` values of ``uri``."""
        direct = [t for t in self.graph.objects(uri, RDF.type) if isinstance(t, URIRef)]
        result = list(direct)
        for t in direct:
            result.extend(self.super_shapes(t))
        return _unique(result)

    # ── Hierarchy ───────────────────────────────────────────────────

    def direct_super_shapes(self, uri) -> list[URIRef]:
        return _unique(
            o for o in self.graph.objects(uri, RDFS.subClassOf) if isinstance(o, URIRef)
        )

    def named_super_shapes(self, uri) -> list[URIRef]:
        """Direct superclasses, minus the top class and deprecated classes."""
        return [
            s for s in self.direct_super_shapes(uri)
            if s != uri and not self.is_top_thing(s) and not self.is_deprecated(s)
        ]

    def direct_sub_shapes(self, uri) -> list[URIRef]:
        return _unique(
            s for s in self.graph.subjects(RDFS.subClassOf, uri)
            if isinstance(s, URIRef) and s != uri
        )

    def super_shapes(self, uri) -> list[URIRef]:
        """All transitive superclasses, nearest first."""
        return self._closure(uri, self.direct_super_shapes)

    def sub_shapes(self, uri) -> list[URIRef]:
        """All transitive subclasses, nearest first."""
        return self._closure(uri, self.direct_sub_shapes)

    @staticmethod
    def _closure(uri, step) -> list[URIRef]:
        seen = {uri}
        result = []
        queue = [uri]
        while queue:
            current = queue.pop(0)
            for nxt in step(current):
                if nxt not in seen:
                    seen.add(nxt)
                    result.append(nxt)
                    queue.append(nxt)
        return result

    def is_root(self, uri) -> bool:
        return not self.named_super_shapes(uri)

    def longest_super_shape_path(self, uri) -> list[URIRef]:
        """Longest chain of named superclasses, root-most first.

        Ties go to the superclass discovered first.
        """
        return list(self._longest_path(uri, frozenset()))

    def _longest_path(self, uri, visiting: frozenset) -> list[URIRef]:
        if uri in self._longest_paths:
            return self._longest_paths[uri]
        best: list[URIRef] = []
        for parent in self.named_super_shapes(uri):
            if parent in visiting:
                continue
            candidate = self._longest_path(parent, visiting | {uri}) + [parent]
            if len(candidate) > len(best):
                best = candidate
        self._longest_paths[uri] = best
        return best

    # ── Properties ──────────────────────────────────────────────────

    def property_shapes(self, uri) -> list:
        return _unique(self.graph.objects(uri, SH.property))

    def domain_properties(self, uri) -> list[URIRef]:
        """Named predicates declaring ``uri`` as their ``rdfs:domain``."""
        return _unique(
            p for p in self.graph.subjects(RDFS.domain, uri) if isinstance(p, URIRef)
        )

    def annotation_properties_for(self, predicate) -> list[tuple[URIRef, object]]:
        """Annotation properties with one range whose domain includes ``predicate``.

        Returns:
            (annotation property, its single range) pairs.
        """
        result = []
        for prop in _unique(self.graph.subjects(RDF.type, OWL.AnnotationProperty)):
            if not isinstance(prop, URIRef):
                continue
            ranges = _unique(self.graph.objects(prop, RDFS.range))
            if len(ranges) != 1:
                continue
            if predicate in set(self.graph.objects(prop, RDFS.domain)):
                result.append((prop, ranges[0]))
        return result

    def rdf_list(self, head) -> list:
        if head is None or head == RDF.nil:
            return []
        return list(Collection(self.graph, head))

    def enumeration_members(self, node) -> Optional[list]:
        """Members of an enumeration datatype (``owl:oneOf``), or None."""
        head = self.graph.value(node, OWL.oneOf)
        if head is None:
            for equivalent in self.graph.objects(node, OWL.equivalentClass):
                head = self.graph.value(equivalent, OWL.oneOf)
                if head is not None:
                    break
        if head is None:
            return None
        return self.rdf_list(head)

    def enumeration_instances(self, uri) -> list[URIRef]:
        """Named individuals typed as ``uri`` or any of its subclasses."""
        members = []
        for cls in [uri] + self.sub_shapes(uri):
            members.extend(
                s for s in self.graph.subjects(RDF.type, cls) if isinstance(s, URIRef)
            )
        return _unique(members)

    # ── Kinds ───────────────────────────────────────────────────────

    def kinds(self, uri) -> frozenset:
        """The special roles ``uri`` plays; computed once and cached."""
        if uri not in self._kinds:
            self._kinds[uri] = self._compute_kinds(uri)
        return self._kinds[uri]

    def has_kind(self, uri, kind: ShapeKind) -> bool:
        if uri is None or isinstance(uri, (Literal, BNode)):
            return False
        return kind in self.kinds(uri)

    def _compute_kinds(self, uri) -> frozenset:
        kinds = set()
        if self.is_node_shape(uri) and any(
            VALUE_SHAPE_MARKER in str(s) for s in self.super_shapes(uri)
        ):
            kinds.add(ShapeKind.VALUE_SHAPE)
        if (uri, RDF.type, uri) in self.graph:
            kinds.add(ShapeKind.SELF_TYPED)
        if self.enumeration_instances(uri):
            kinds.add(ShapeKind.ENUMERATION)
        if any(COMPONENT_MARKER in str(t) for t in self.graph.objects(uri, RDF.type)):
            kinds.add(ShapeKind.COMPONENT)
        return frozenset(kinds)
