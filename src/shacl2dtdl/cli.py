"""SHACL -> DTDL Translator — CLI entry point.

Usage:
    shacl2dtdl --file-path FILE --outputPath DIR [--ignorefile CSV] [--ontologySource SRC]
    shacl2dtdl --uri-path URI --outputPath DIR [--no-imports] [--merged-output]
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from shacl2dtdl.config import RunConfig, load_ignore_file
from shacl2dtdl.converter.shacl_to_dtdl import InterfaceSynthesizer
from shacl2dtdl.errors import OntologyLoadError, PlacementCollision, TranslationError
from shacl2dtdl.parser.shapes_graph import ShapesGraph, load_ontology
from shacl2dtdl.serializer.json_serializer import serialize_interface
from shacl2dtdl.serializer.placement import place, write_interface

logger = logging.getLogger(__name__)


def translate(config: RunConfig) -> tuple[int, int]:
    """Load the ontology and write one DTDL document per class shape.

    Each interface is synthesized completely before it is serialized and
    written; a shape that fails is reported and skipped.

    Returns:
        (success_count, failure_count)

    Raises:
        OntologyLoadError: if the ontology cannot be loaded.
        OSError: if an output document cannot be written.
    """
    if not config.no_imports:
        logger.info("owl:imports declarations are not followed")
    if config.merged_output:
        logger.warning("Merged output is not implemented; writing one file per interface")

    graph = load_ontology(config.source)
    shapes = ShapesGraph(graph, config)
    synthesizer = InterfaceSynthesizer(shapes, config)

    print("Generating DTDL Interface declarations:")
    ok = 0
    fail = 0
    placed = {}
    for shape in shapes.class_shapes():
        try:
            interface = synthesizer.synthesize(shape)
            relative_path = place(shapes, shape)
            if relative_path in placed:
                raise PlacementCollision(relative_path, placed[relative_path], str(shape.uri))
        except TranslationError as e:
            print(f"  FAIL {shape.uri}: {e}")
            fail += 1
            continue

        placed[relative_path] = str(shape.uri)
        write_interface(config.output_path, relative_path, serialize_interface(interface))
        print(f"  OK  {interface.dtmi} -> {relative_path}")
        ok += 1

    return ok, fail


def build_config(args: argparse.Namespace) -> RunConfig:
    ignored = load_ignore_file(args.ignorefile) if args.ignorefile else frozenset()
    return RunConfig(
        source=args.file_path or args.uri_path,
        output_path=Path(args.outputPath),
        ignored_uris=ignored,
        ontology_source=args.ontologySource,
        no_imports=args.no_imports,
        merged_output=args.merged_output,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shacl2dtdl",
        description="SHACL -> DTDL Translator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--file-path", "-f",
        help="Path to the on-disk root ontology file to translate",
    )
    source.add_argument(
        "--uri-path", "-u",
        help="URI of the root ontology file to translate",
    )
    parser.add_argument(
        "--outputPath", "-o",
        required=True,
        help="Directory in which to create DTDL models",
    )
    parser.add_argument(
        "--ignorefile", "-i",
        help="CSV file whose first (;-separated) column lists whole or partial "
             "IRIs that should not be translated",
    )
    parser.add_argument(
        "--ontologySource", "-s",
        help="Ontology source used in DTMIs: "
             "dtmi:{ontologySource}:{ontologyName}:{interfaceName};1",
    )
    parser.add_argument(
        "--no-imports", "-n",
        action="store_true",
        help="Do not follow owl:imports declarations",
    )
    parser.add_argument(
        "--merged-output", "-m",
        action="store_true",
        help="Output one merged JSON-LD file for batch import (not implemented)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log every generated DTMI",
    )
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = build_config(args)
        ok, fail = translate(config)
    except OntologyLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"\nGenerated {ok} interfaces, {fail} failed")
    return 1 if fail else 0


if __name__ == "__main__":
    sys.exit(main())
