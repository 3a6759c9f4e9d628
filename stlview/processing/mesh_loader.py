"""STL mesh loading: format dispatch, file reading and reload sessions."""

from pathlib import Path
from typing import Optional, Union

from stlview.core.config import LoaderConfig
from stlview.core.exceptions import MeshLoadError, StlViewError
from stlview.core.mesh import Mesh
from stlview.processing.ascii_parser import parse_ascii
from stlview.processing.binary_parser import parse_binary
from stlview.processing.sniffer import StlFormat, sniff_format
from stlview.utils.logging import StructuredLogger, get_logger

logger = get_logger(__name__)

_PARSERS = {
    StlFormat.ASCII: parse_ascii,
    StlFormat.BINARY: parse_binary,
}


def load_mesh(data: bytes) -> Mesh:
    """Decode a fully buffered STL file into a Mesh.

    Exactly one of the ASCII or binary parsers runs, chosen by
    :func:`sniff_format`. No partial mesh is ever returned.

    Args:
        data: Complete file content

    Returns:
        Decoded mesh

    Raises:
        StlParseError: Subclass describing why the bytes are not a valid STL
    """
    return _PARSERS[sniff_format(data)](bytes(data))


class MeshLoader:
    """Reads STL files from disk and decodes them."""

    def __init__(self, config: Optional[LoaderConfig] = None):
        """Initialize mesh loader.

        Args:
            config: Loader configuration
        """
        self.config = config or LoaderConfig()

    def read(self, file_path: Union[str, Path]) -> bytes:
        """Read the whole file into memory.

        Raises:
            MeshLoadError: If the file is missing, too large or unreadable
        """
        file_path = Path(file_path)
        try:
            self._validate_file(file_path)
            return file_path.read_bytes()
        except OSError as e:
            raise MeshLoadError(file_path, e.strerror or str(e)) from e

    def load(self, file_path: Union[str, Path]) -> Mesh:
        """Load and decode an STL file.

        Args:
            file_path: Path to STL file

        Returns:
            Decoded mesh

        Raises:
            MeshLoadError: If file cannot be read
            StlParseError: If the content is not a valid STL
        """
        file_path = Path(file_path)
        with StructuredLogger(logger, "mesh_load", path=str(file_path)) as op:
            data = self.read(file_path)
            mesh = load_mesh(data)
            op.update_context(
                name=mesh.name,
                triangles=mesh.triangle_count,
                size_bytes=len(data),
            )
        logger.info(
            "mesh_loaded",
            name=mesh.name,
            triangles=mesh.triangle_count,
        )
        return mesh

    def _validate_file(self, file_path: Path) -> None:
        """Validate file before reading.

        Raises:
            MeshLoadError: If file validation fails
            OSError: If the path cannot be inspected at all
        """
        if not file_path.exists():
            raise MeshLoadError(file_path, "File does not exist")

        if not file_path.is_file():
            raise MeshLoadError(file_path, "Path is not a file")

        file_size = file_path.stat().st_size
        if file_size > self.config.max_file_size:
            raise MeshLoadError(
                file_path,
                f"File too large ({file_size} bytes > {self.config.max_file_size} limit)",
            )

        if self.config.require_stl_extension and file_path.suffix.lower() != ".stl":
            raise MeshLoadError(
                file_path,
                f"Unsupported file extension: {file_path.suffix}",
            )


def load_stl(
    file_path: Union[str, Path],
    config: Optional[LoaderConfig] = None,
) -> Mesh:
    """Convenience function to load an STL file.

    Raises:
        MeshLoadError: If file cannot be read
        StlParseError: If the content is not a valid STL
    """
    return MeshLoader(config).load(file_path)


class MeshSession:
    """Holds the last successfully loaded mesh of one file across reloads.

    Not thread safe; drive it from a single loop.
    """

    def __init__(self, file_path: Union[str, Path], loader: Optional[MeshLoader] = None):
        self.file_path = Path(file_path)
        self.loader = loader or MeshLoader()
        self.mesh: Optional[Mesh] = None

    def load(self) -> Mesh:
        """Initial load; errors propagate to the caller."""
        self.mesh = self.loader.load(self.file_path)
        return self.mesh

    def reload(self) -> bool:
        """Load the file again, replacing the current mesh on success.

        Returns:
            True if a new mesh replaced the old one, False if loading failed
            and the previous mesh was kept
        """
        try:
            mesh = self.loader.load(self.file_path)
        except StlViewError as e:
            logger.warning(
                "mesh_reload_failed",
                path=str(self.file_path),
                error=str(e),
                error_type=type(e).__name__,
                kept_previous=self.mesh is not None,
            )
            return False
        self.mesh = mesh
        return True
