"""Shared test fixtures and configuration."""

import shutil
import struct
import tempfile
from pathlib import Path
from typing import Callable, Generator, Optional, Sequence

import pytest


# (normal, v0, v1, v2)
Facet = tuple[Sequence[float], Sequence[float], Sequence[float], Sequence[float]]

UNIT_FACET: Facet = ((0, 0, 1), (0, 0, 0), (1, 0, 0), (0, 1, 0))

SIMPLE_ASCII = (
    b"solid t\n"
    b"facet normal 0 0 1\n"
    b"outer loop\n"
    b"vertex 0 0 0\n"
    b"vertex 2 0 0\n"
    b"vertex 0 2 0\n"
    b"endloop\n"
    b"endfacet\n"
    b"endsolid"
)


def build_binary_stl(
    facets: Sequence[Facet],
    header: bytes = b"\x00" * 80,
    count: Optional[int] = None,
    attribute: int = 0,
) -> bytes:
    """Pack facets into a little-endian binary STL buffer."""
    assert len(header) == 80
    body = b"".join(
        struct.pack("<12fH", *normal, *v0, *v1, *v2, attribute)
        for normal, v0, v1, v2 in facets
    )
    declared = len(facets) if count is None else count
    return header + struct.pack("<I", declared) + body


def build_ascii_stl(facets: Sequence[Facet], name: str = "part") -> bytes:
    """Render facets as ASCII STL text."""
    lines = [f"solid {name}"]
    for normal, v0, v1, v2 in facets:
        lines.append("  facet normal {} {} {}".format(*normal))
        lines.append("    outer loop")
        for vertex in (v0, v1, v2):
            lines.append("      vertex {} {} {}".format(*vertex))
        lines.append("    endloop")
        lines.append("  endfacet")
    lines.append(f"endsolid {name}")
    return ("\n".join(lines) + "\n").encode("utf-8")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path)


@pytest.fixture
def binary_stl() -> Callable[..., bytes]:
    return build_binary_stl


@pytest.fixture
def ascii_stl() -> Callable[..., bytes]:
    return build_ascii_stl


@pytest.fixture
def unit_facet() -> Facet:
    return UNIT_FACET


@pytest.fixture
def simple_ascii() -> bytes:
    """ASCII STL with one facet named "t" reaching 2.0 from the origin."""
    return SIMPLE_ASCII


@pytest.fixture
def sample_binary_path(temp_dir: Path) -> Path:
    """Binary STL file holding the unit triangle."""
    path = temp_dir / "unit.stl"
    path.write_bytes(build_binary_stl([UNIT_FACET]))
    return path


@pytest.fixture
def sample_ascii_path(temp_dir: Path) -> Path:
    """ASCII STL file holding one triangle named "t"."""
    path = temp_dir / "simple.stl"
    path.write_bytes(SIMPLE_ASCII)
    return path


# Markers for different test categories
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests that test individual components"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests that test multiple components"
    )
