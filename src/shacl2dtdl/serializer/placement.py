"""Decide where each Interface document goes, and write it there."""
from __future__ import annotations

import os
from pathlib import Path, PurePosixPath

from shacl2dtdl.parser.shapes_graph import ShapesGraph
from shacl2dtdl.schema.common import local_name
from shacl2dtdl.schema.ontology import ClassShape


def place(shapes: ShapesGraph, shape: ClassShape) -> PurePosixPath:
    """Relative output path for a shape's Interface document.

    The directory mirrors the shape's longest superclass chain. A shape with
    subclasses gets its own directory, so it sits next to its children.

    E.g., Equipment > HVAC_Equipment > AHU, where AHU has subclasses
    → Equipment/HVAC_Equipment/AHU/AHU.json
    """
    parts = [local_name(p) for p in shapes.longest_super_shape_path(shape.uri)]
    if shapes.direct_sub_shapes(shape.uri):
        parts.append(shape.name)
    return PurePosixPath(*parts, f"{shape.name}.json")


def write_interface(output_dir, relative_path: PurePosixPath, document: str) -> Path:
    """Write a serialized Interface below ``output_dir``.

    Intermediate directories are created as needed. The document is written
    to a temporary file first, so a failed write never leaves a partial file
    under the final name.

    Returns:
        The path written.
    """
    target = Path(output_dir).joinpath(*relative_path.parts)
    target.parent.mkdir(parents=True, exist_ok=True)
    tmp = target.with_name(target.name + ".tmp")
    with open(tmp, "w", encoding="utf-8") as f:
        f.write(document)
    os.replace(tmp, target)
    return target
