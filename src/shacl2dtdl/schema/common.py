"""Shared vocabulary and URI helpers."""
from __future__ import annotations

from urllib.parse import urldefrag

from rdflib import Namespace
from rdflib.namespace import XSD

BRICK = Namespace("https://brickschema.org/schema/Brick#")

# Substring markers, matched against full URIs
VALUE_SHAPE_MARKER = "https://brickschema.org/schema/BrickShape#ValueShape"
COMPONENT_MARKER = "dtmi:dtdl:class:Component"

DISPLAY_NAME_LIMIT = 64
DESCRIPTION_LIMIT = 512
DEFAULT_LANGUAGE = "en"


def local_name(uri) -> str:
    """Return the part of ``uri`` after its last ``#`` or ``/``.

    E.g., 'https://brickschema.org/schema/Brick#Air_Temperature_Sensor'
    → 'Air_Temperature_Sensor'
    """
    value = str(uri)
    if "#" in value:
        return value.rsplit("#", 1)[-1]
    return value.rsplit("/", 1)[-1]


def namespace_of(uri) -> str:
    """Return ``uri`` minus its local name (separator included)."""
    value = str(uri)
    return value[: len(value) - len(local_name(value))]


def fragment(uri) -> str:
    """Return the fragment identifier of ``uri`` without the ``#``."""
    return urldefrag(str(uri)).fragment.strip("#")


def is_xsd_type(uri) -> bool:
    return str(uri).startswith(str(XSD))
