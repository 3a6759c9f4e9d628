"""Classify STL bytes as ASCII or binary."""

from enum import Enum

from stlview.core.exceptions import MalformedHeaderError

ASCII_MAGIC = "solid"


class StlFormat(str, Enum):
    """STL encodings."""
    ASCII = "ascii"
    BINARY = "binary"


def sniff_format(data: bytes) -> StlFormat:
    """Decide which STL grammar applies to ``data``.

    ASCII STL files start with "solid". A binary file whose 80 byte header
    happens to start with "solid" is also classified as ASCII and will fail
    in the ASCII parser. Only the first five bytes are inspected.

    Args:
        data: Full file content

    Returns:
        StlFormat.ASCII or StlFormat.BINARY

    Raises:
        MalformedHeaderError: If fewer than 5 bytes are available
    """
    if len(data) < len(ASCII_MAGIC):
        raise MalformedHeaderError(len(data), required=len(ASCII_MAGIC))

    try:
        lead = data[: len(ASCII_MAGIC)].decode("utf-8")
    except UnicodeDecodeError:
        return StlFormat.BINARY

    if lead == ASCII_MAGIC:
        return StlFormat.ASCII
    return StlFormat.BINARY
