"""stlview - decode ASCII and binary STL files into triangle meshes."""

from stlview.core import (
    Mesh,
    Point3,
    StlParseError,
    StlViewError,
    Triangle,
    bounding_radius,
    camera_distance,
)
from stlview.processing import MeshLoader, MeshSession, load_mesh, load_stl

__version__ = "0.1.0"

__all__ = [
    "Point3",
    "Triangle",
    "Mesh",
    "load_mesh",
    "load_stl",
    "MeshLoader",
    "MeshSession",
    "bounding_radius",
    "camera_distance",
    "StlViewError",
    "StlParseError",
    "__version__",
]
