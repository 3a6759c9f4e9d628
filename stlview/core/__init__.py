"""Core data model, configuration and errors for stlview."""

from stlview.core.config import (
    Config,
    LoaderConfig,
    LoggingConfig,
    ViewConfig,
    get_default_config,
    load_config,
)
from stlview.core.exceptions import (
    ConfigurationError,
    GrammarError,
    MalformedHeaderError,
    MeshLoadError,
    NumericLiteralError,
    StlParseError,
    StlViewError,
    TruncatedBinaryError,
)
from stlview.core.geometry import bounding_radius, camera_distance
from stlview.core.mesh import Mesh, Point3, Triangle

__all__ = [
    # Data model
    "Point3",
    "Triangle",
    "Mesh",
    # Geometry
    "bounding_radius",
    "camera_distance",
    # Config classes
    "Config",
    "LoaderConfig",
    "ViewConfig",
    "LoggingConfig",
    # Config functions
    "get_default_config",
    "load_config",
    # Exceptions
    "StlViewError",
    "ConfigurationError",
    "MeshLoadError",
    "StlParseError",
    "MalformedHeaderError",
    "GrammarError",
    "NumericLiteralError",
    "TruncatedBinaryError",
]
