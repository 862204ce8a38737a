"""Serializers and writers for DTDL documents."""
from shacl2dtdl.serializer.json_serializer import serialize_interface
from shacl2dtdl.serializer.placement import place, write_interface
