"""STL decoding for stlview."""

from stlview.processing.ascii_parser import parse_ascii
from stlview.processing.binary_parser import BINARY_MESH_NAME, parse_binary
from stlview.processing.mesh_loader import MeshLoader, MeshSession, load_mesh, load_stl
from stlview.processing.sniffer import StlFormat, sniff_format

__all__ = [
    "StlFormat",
    "sniff_format",
    "parse_ascii",
    "parse_binary",
    "BINARY_MESH_NAME",
    "load_mesh",
    "MeshLoader",
    "MeshSession",
    "load_stl",
]
