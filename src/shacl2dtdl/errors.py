"""Exceptions raised while translating SHACL shapes into DTDL interfaces."""
from __future__ import annotations


class TranslationError(Exception):
    """Base class for all translation failures."""


class UnsupportedPathKind(TranslationError):
    """A property shape path is not a simple named predicate.

    Only the offending property is skipped; the owning interface is still
    produced.
    """

    def __init__(self, path, owner=None):
        self.path = path
        self.owner = owner
        where = f" on {owner}" if owner is not None else ""
        super().__init__(f"Property path {path!s}{where} is not a URI node")


class AmbiguousRange(TranslationError):
    """No usable range information; callers degrade to a string schema."""


class IdentifierCollision(TranslationError):
    """Two distinct resources minted the same DTMI."""

    def __init__(self, dtmi: str, existing: str, incoming: str):
        self.dtmi = dtmi
        self.existing = existing
        self.incoming = incoming
        super().__init__(
            f"{incoming} mints to {dtmi}, which is already used by {existing}"
        )


class OntologyLoadError(TranslationError):
    """The source ontology could not be loaded or parsed."""


class PlacementCollision(TranslationError):
    """Two distinct resources would be written to the same output file."""

    def __init__(self, path, existing: str, incoming: str):
        self.path = path
        self.existing = existing
        self.incoming = incoming
        super().__init__(
            f"{incoming} would be written to {path}, which already holds {existing}"
        )
