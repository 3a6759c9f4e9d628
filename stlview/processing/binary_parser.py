"""Decoder for the fixed-layout binary STL encoding."""

import numpy as np

from stlview.core.exceptions import TruncatedBinaryError
from stlview.core.mesh import Mesh, Point3, Triangle

# Binary files carry no usable name
BINARY_MESH_NAME = "binary"

HEADER_SIZE = 80
COUNT_SIZE = 4

# Little-endian record: normal, three vertices, attribute byte count
RECORD_DTYPE = np.dtype(
    [
        ("normal", "<f4", (3,)),
        ("vertices", "<f4", (3, 3)),
        ("attribute", "<u2"),
    ]
)
RECORD_SIZE = RECORD_DTYPE.itemsize  # 50 bytes


def parse_binary(data: bytes) -> Mesh:
    """Parse binary STL bytes into a Mesh named "binary".

    The 80 byte header is ignored. A triangle count of zero yields an empty
    mesh. Bytes past the last declared record are ignored.

    Raises:
        TruncatedBinaryError: If the header, count or any record is cut short
    """
    body_start = HEADER_SIZE + COUNT_SIZE
    if len(data) < body_start:
        raise TruncatedBinaryError(None, body_start, len(data))

    count = int(np.frombuffer(data, dtype="<u4", count=1, offset=HEADER_SIZE)[0])
    required = body_start + count * RECORD_SIZE
    if len(data) < required:
        raise TruncatedBinaryError(count, required, len(data))
    if count == 0:
        return Mesh(name=BINARY_MESH_NAME, triangles=())

    records = np.frombuffer(data, dtype=RECORD_DTYPE, count=count, offset=body_start)

    triangles = tuple(
        Triangle(
            vertices=tuple(Point3(*vertex) for vertex in vertices),
            normal=Point3(*normal),
        )
        for normal, vertices in zip(
            records["normal"].tolist(), records["vertices"].tolist()
        )
    )
    return Mesh(name=BINARY_MESH_NAME, triangles=triangles)
