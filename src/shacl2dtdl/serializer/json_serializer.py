"""Serialize DTDL Interfaces to deterministic JSON documents."""
from __future__ import annotations

import json
import re

from shacl2dtdl.schema.dtdl import (
    ArraySchema,
    EnumSchema,
    Interface,
    MapSchema,
    ObjectSchema,
    PropertyContent,
    RelationshipContent,
    Schema,
)

# e.g. "dtmi:dtdl:property:initialValue;3": → "initialValue":
_RESERVED_KEY = re.compile(r'"dtmi:dtdl:[A-Za-z0-9]*:([A-Za-z0-9]*);[0-9]+"(\s*):')


def _order_schema(schema: Schema) -> None:
    if isinstance(schema, EnumSchema):
        schema.values.sort(key=lambda v: v.name)
    elif isinstance(schema, ObjectSchema):
        for f in schema.fields:
            _order_schema(f.schema)
    elif isinstance(schema, MapSchema):
        _order_schema(schema.key.schema)
        _order_schema(schema.value.schema)
    elif isinstance(schema, ArraySchema):
        _order_schema(schema.element_schema)


def order_interface(interface: Interface) -> Interface:
    """Sort contents by (kind, name) and enum values by name, in place."""
    interface.contents.sort(key=lambda c: c.sort_key())
    for content in interface.contents:
        if isinstance(content, PropertyContent):
            _order_schema(content.schema)
        elif isinstance(content, RelationshipContent):
            content.properties.sort(key=lambda p: p.name)
            for nested in content.properties:
                _order_schema(nested.schema)
    return interface


def compact_reserved_keys(text: str) -> str:
    """Rewrite fully-qualified DTDL keys down to their bare local name."""
    return _RESERVED_KEY.sub(r'"\1"\2:', text)


def interface_to_dict(interface: Interface) -> dict:
    """Ordered, compacted JSON-LD form of an Interface."""
    return order_interface(interface).to_dict()


def serialize_interface(interface: Interface) -> str:
    """Serialize an Interface to a JSON string.

    Output is deterministic: contents sorted by kind then name, enum values
    sorted by name, and consistent indentation.

    Args:
        interface: The interface to serialize.

    Returns:
        Pretty-printed JSON string.
    """
    text = json.dumps(interface_to_dict(interface), indent=2, ensure_ascii=False)
    return compact_reserved_keys(text)
