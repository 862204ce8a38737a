"""Run configuration for a single translation."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunConfig:
    """Settings shared, read-only, by every step of one run."""

    source: str = ""
    output_path: Path = field(default_factory=lambda: Path("."))
    ignored_uris: frozenset = frozenset()
    ontology_source: Optional[str] = None
    no_imports: bool = False
    merged_output: bool = False

    def is_ignored(self, uri) -> bool:
        """True if any ignore-list entry is a substring of ``uri``."""
        value = str(uri)
        return any(ignored in value for ignored in self.ignored_uris)


def parse_ignore_lines(lines: Iterable[str]) -> frozenset:
    """Extract the first ``;``-delimited field of every non-blank line."""
    ignored = set()
    for line in lines:
        first = line.split(";", 1)[0].strip()
        if first:
            ignored.add(first)
    return frozenset(ignored)


def load_ignore_file(path) -> frozenset:
    """Read an ignore file whose first column lists (partial) IRIs to skip."""
    with open(path, "r", encoding="utf-8") as f:
        ignored = parse_ignore_lines(f)
    logger.info("Loaded %d ignored IRI patterns from %s", len(ignored), path)
    return ignored
