"""SHACL -> DTDL Translator — CLI entry point.

Usage:
    python main.py --file-path FILE --outputPath DIR [--ignorefile CSV] [--ontologySource SRC]
    python main.py --uri-path URI --outputPath DIR
"""
import sys

from shacl2dtdl.cli import main

if __name__ == "__main__":
    sys.exit(main())
