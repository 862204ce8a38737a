"""Convert SHACL class shapes into DTDL Interfaces.

Mapping rules:
- Every eligible class shape → one Interface, identified by its DTMI
- rdfs:label / rdfs:comment → displayName / description, one per language
- rdfs:subClassOf → extends (at most two, a DTDL limit); root classes get
  generic name, externalIds and customTags properties instead
- brick:hasAssociatedTag → read-only, initialized "tags" property
- Data properties, value shapes and enumerations → Property
- Targets typed as DTDL Components → Component
- Other object properties → Relationship, with annotation properties on the
  predicate as nested relationship properties
"""
from __future__ import annotations

import logging
from typing import Iterator, Optional

from rdflib import Literal, URIRef
from rdflib.namespace import SH

from shacl2dtdl.config import RunConfig
from shacl2dtdl.converter.identifiers import IdentifierRegistry, mint_dtmi
from shacl2dtdl.converter.properties import (
    deduplicate,
    resolve_ontology_property,
    resolve_property_shape,
)
from shacl2dtdl.converter.schemas import SchemaSynthesizer
from shacl2dtdl.errors import UnsupportedPathKind
from shacl2dtdl.parser.shapes_graph import ShapesGraph
from shacl2dtdl.schema.common import (
    DEFAULT_LANGUAGE,
    DESCRIPTION_LIMIT,
    DISPLAY_NAME_LIMIT,
    local_name,
)
from shacl2dtdl.schema.dtdl import (
    MAX_EXTENDS,
    MAX_NAME_LENGTH,
    STRING,
    AnyContent,
    ArraySchema,
    ComponentContent,
    Field,
    Interface,
    MapSchema,
    PropertyContent,
    RelationshipContent,
)
from shacl2dtdl.schema.ontology import ClassShape, Property, PropertyType, ShapeKind

logger = logging.getLogger(__name__)

TAGS_DESCRIPTION = "Brick tags associated with this interface."


def language_map(literals, limit: int) -> dict[str, str]:
    """Keep one text per language tag (last wins), truncated to ``limit``.

    Untagged literals are filed under English, since DTDL needs a language.
    """
    result: dict[str, str] = {}
    for lit in literals:
        language = lit.language if isinstance(lit, Literal) and lit.language else DEFAULT_LANGUAGE
        result[language] = str(lit)[:limit]
    return result


def bootstrap_contents() -> list[PropertyContent]:
    """Generic contents for root interfaces, which DTDL cannot give a common base."""
    return [
        PropertyContent(
            name="name",
            schema=STRING,
            display_names={DEFAULT_LANGUAGE: "name"},
        ),
        PropertyContent(
            name="externalIds",
            schema=MapSchema(
                key=Field("externalIdName", STRING),
                value=Field("externalIdValue", STRING),
            ),
            display_names={DEFAULT_LANGUAGE: "External IDs"},
        ),
        PropertyContent(
            name="customTags",
            schema=MapSchema(
                key=Field("tagName", STRING),
                value=Field("tagValue", STRING),
            ),
            display_names={DEFAULT_LANGUAGE: "Custom Tags"},
        ),
    ]


class InterfaceSynthesizer:
    """Builds one Interface per class shape.

    All per-interface state lives in locals of ``synthesize``; the only
    state kept between calls is the read-only shapes graph and config, and
    the registry used to detect DTMI collisions.
    """

    def __init__(self, shapes: ShapesGraph, config: Optional[RunConfig] = None):
        self.shapes = shapes
        self.config = config or shapes.config
        self.schemas = SchemaSynthesizer(shapes)
        self.registry = IdentifierRegistry()

    def mint(self, uri) -> str:
        return mint_dtmi(uri, self.config.ontology_source)

    def synthesize(self, shape: ClassShape) -> Interface:
        """Translate one class shape.

        Raises:
            IdentifierCollision: if another shape already minted this DTMI.
        """
        dtmi = self.mint(shape.uri)
        self.registry.register(dtmi, shape.uri)
        logger.debug("* %s", dtmi)

        interface = Interface(
            dtmi=dtmi,
            display_names=language_map(shape.labels, DISPLAY_NAME_LIMIT),
            descriptions=language_map(shape.comments, DESCRIPTION_LIMIT),
        )

        supers = self.shapes.named_super_shapes(shape.uri)
        if supers:
            # Extra superclasses are dropped
            interface.extends = [self.mint(s) for s in supers[:MAX_EXTENDS]]
        else:
            interface.contents.extend(bootstrap_contents())

        tags = self.tags_content(shape)
        if tags is not None:
            interface.contents.append(tags)

        inherited = self.inherited_property_names(shape)
        for prop in self.collect_properties(shape):
            if prop.key in inherited:
                continue
            if prop.target is not None and self.shapes.is_deprecated(prop.target):
                continue
            interface.contents.append(self.property_content(prop))

        return interface

    def iter_interfaces(self) -> Iterator[tuple[ClassShape, Interface]]:
        for shape in self.shapes.class_shapes():
            yield shape, self.synthesize(shape)

    # ── Properties ──────────────────────────────────────────────────

    def collect_properties(self, shape: ClassShape) -> list[Property]:
        """Properties from property shapes, then from rdfs:domain declarations.

        Property shapes come first, so they win deduplication.
        """
        candidates = []
        for node in self.shapes.property_shapes(shape.uri):
            try:
                candidates.append(resolve_property_shape(self.shapes, node, shape.uri))
            except UnsupportedPathKind as exc:
                logger.warning("Skipping property: %s", exc)
        for predicate in self.shapes.domain_properties(shape.uri):
            candidates.append(resolve_ontology_property(self.shapes, predicate))
        return deduplicate(candidates)

    def inherited_property_names(self, shape: ClassShape) -> set[str]:
        """Dedup keys of properties already declared on any ancestor."""
        names = set()
        for ancestor in self.shapes.super_shapes(shape.uri):
            for node in self.shapes.property_shapes(ancestor):
                path = self.shapes.graph.value(node, SH.path)
                if isinstance(path, URIRef):
                    names.add(local_name(path).casefold())
            for predicate in self.shapes.domain_properties(ancestor):
                names.add(local_name(predicate).casefold())
        return names

    def property_content(self, prop: Property) -> AnyContent:
        display_names = language_map(prop.labels, DISPLAY_NAME_LIMIT)
        descriptions = language_map(prop.comments, DESCRIPTION_LIMIT)
        target = prop.target

        if (
            prop.type is PropertyType.DATA
            or self.shapes.has_kind(target, ShapeKind.VALUE_SHAPE)
            or self.shapes.has_kind(target, ShapeKind.ENUMERATION)
        ):
            return PropertyContent(
                name=prop.name,
                schema=self.schemas.for_property(prop),
                writable=True,
                display_names=display_names,
                descriptions=descriptions,
            )

        if self.shapes.has_kind(target, ShapeKind.COMPONENT):
            return ComponentContent(
                name=prop.name,
                schema=self.mint(target),
                display_names=display_names,
                descriptions=descriptions,
            )

        return RelationshipContent(
            name=prop.name,
            target=self.mint(target) if target is not None else None,
            max_multiplicity=prop.max_count,
            writable=True,
            properties=self.annotation_properties(prop),
            display_names=display_names,
            descriptions=descriptions,
        )

    def annotation_properties(self, prop: Property) -> list[PropertyContent]:
        """Nested relationship properties from annotation properties on the predicate."""
        nested = []
        for annotation, range_node in self.shapes.annotation_properties_for(prop.predicate):
            nested.append(PropertyContent(
                name=local_name(annotation)[:MAX_NAME_LENGTH],
                schema=self.schemas.synthesize(range_node),
                writable=True,
                display_names=language_map(self.shapes.labels(annotation), DISPLAY_NAME_LIMIT),
                descriptions=language_map(self.shapes.comments(annotation), DESCRIPTION_LIMIT),
            ))
        return nested

    # ── Tags ────────────────────────────────────────────────────────

    def tags_content(self, shape: ClassShape) -> Optional[PropertyContent]:
        """Read-only tag list, only on the lowest tagged level of a hierarchy."""
        tags = self.shapes.tags(shape.uri)
        if not tags:
            return None
        if any(self.shapes.tags(sub) for sub in self.shapes.direct_sub_shapes(shape.uri)):
            return None
        return PropertyContent(
            name="tags",
            schema=ArraySchema(element_schema=STRING),
            writable=False,
            initial_values=tags,
            display_names={DEFAULT_LANGUAGE: "Tags"},
            descriptions={DEFAULT_LANGUAGE: TAGS_DESCRIPTION},
        )


def convert_shacl_to_dtdl(
    shapes: ShapesGraph,
    config: Optional[RunConfig] = None,
) -> list[Interface]:
    """Convert every eligible class shape into a DTDL Interface.

    Args:
        shapes: The shapes graph to convert.
        config: Run configuration; defaults to the shapes graph's own.

    Returns:
        Interfaces in shape enumeration order.
    """
    synthesizer = InterfaceSynthesizer(shapes, config)
    return [interface for _, interface in synthesizer.iter_interfaces()]
