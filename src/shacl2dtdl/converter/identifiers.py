"""Mint Digital Twin Model Identifiers (DTMIs) for ontology resources.

A DTMI is built from the reversed host name and path of the resource's
namespace, followed by its local name:

    https://brickschema.org/schema/Brick#Air_Temperature_Sensor
    → dtmi:org:brickschema:schema:Brick:Air_Temperature_Sensor;1

The last namespace component is the ontology name; everything before it
forms the ontology source, which a run may override.
"""
from __future__ import annotations

import re
from typing import Optional
from urllib.parse import urlsplit

from shacl2dtdl.errors import IdentifierCollision
from shacl2dtdl.schema.common import local_name, namespace_of

DTMI_PREFIX = "dtmi:"
DTMI_VERSION = 1

_DISALLOWED = re.compile(r"[^A-Za-z0-9_]")
_DIGITS = "0123456789"


def sanitize_name(text: str) -> str:
    """Strip characters outside ``[A-Za-z0-9_]`` and any leading digits.

    Shared by DTMI segments and enum value names.
    """
    return _DISALLOWED.sub("", text).lstrip(_DIGITS)


def sanitize_segment(text: str) -> str:
    """Sanitize one colon-delimited DTMI segment.

    Same as ``sanitize_name``, but trailing underscores are trimmed too.
    """
    return _DISALLOWED.sub("", text).rstrip("_").lstrip(_DIGITS)


def namespace_components(uri) -> list[str]:
    """Reversed host labels followed by the namespace path segments."""
    parts = urlsplit(namespace_of(uri))
    host = parts.hostname or ""
    components = list(reversed(host.split("."))) if host else []
    components.extend(p for p in parts.path.strip("#/").split("/") if p)
    return components


def mint_dtmi(uri, ontology_source: Optional[str] = None) -> str:
    """Generate the DTMI for a named resource.

    Args:
        uri: The resource to mint an identifier for.
        ontology_source: Replaces the namespace-derived ontology source.

    Returns:
        The DTMI, e.g. ``dtmi:org:example:building:Room;1``.
    """
    components = namespace_components(uri)
    ontology_name = components[-1] if components else ""
    if ontology_source is not None:
        source = ontology_source
    else:
        source = ":".join(components[:-1])

    candidate = f"{source}:{ontology_name}:{local_name(uri)}"
    # Resources without host or path leave empty leading segments
    segments = [s for s in map(sanitize_segment, candidate.split(":")) if s]
    return f"{DTMI_PREFIX}{':'.join(segments)};{DTMI_VERSION}"


class IdentifierRegistry:
    """Records which resource each DTMI was minted for during one run."""

    def __init__(self):
        self._owners: dict[str, str] = {}

    def register(self, dtmi: str, uri) -> None:
        """Claim ``dtmi`` for ``uri``.

        Raises:
            IdentifierCollision: if a different resource already owns it.
        """
        owner = self._owners.setdefault(dtmi, str(uri))
        if owner != str(uri):
            raise IdentifierCollision(dtmi, owner, str(uri))

    def __contains__(self, dtmi: str) -> bool:
        return dtmi in self._owners

    def __len__(self) -> int:
        return len(self._owners)
