"""Derived geometric properties of a decoded mesh."""

from stlview.core.mesh import Mesh

# Lower bound of bounding_radius
MIN_RADIUS = 1.0


def bounding_radius(mesh: Mesh) -> float:
    """Return the origin-centred radius enclosing every vertex of the mesh.

    The result is never below 1.0; an empty mesh yields exactly 1.0.
    """
    radius = MIN_RADIUS
    for vertex in mesh.iter_vertices():
        radius = max(radius, vertex.norm())
    return radius


def camera_distance(mesh: Mesh, factor: float = 3.0) -> float:
    """Distance from the origin at which a camera frames the whole mesh.

    Args:
        mesh: Decoded mesh
        factor: Multiplier applied to the bounding radius

    Returns:
        ``bounding_radius(mesh) * factor``

    Raises:
        ValueError: If factor is not positive
    """
    if factor <= 0:
        raise ValueError(f"Camera distance factor must be positive, got {factor}")
    return bounding_radius(mesh) * factor
