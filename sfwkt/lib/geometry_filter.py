from collections.abc import Callable
from math import isfinite

from sfwkt.models.geometry import Geometry, Point
from sfwkt.models.geometry_type import GeometryType

type GeometryFilter = Callable[[GeometryType | None, Geometry], bool]
"""Decide whether a candidate is attached to its containing type (None at the root)."""


def apply_filter(
    geometry_filter: GeometryFilter | None,
    containing_type: GeometryType | None,
    geometry: Geometry,
) -> bool:
    """Check if the geometry passes the filter, accepting everything without one."""
    return geometry_filter is None or geometry_filter(containing_type, geometry)


def finite_point_filter(*, z: bool = False, m: bool = False) -> GeometryFilter:
    """
    Create a filter rejecting points with non-finite (NaN or infinite) ordinates.

    X and Y are always checked, Z and M only when requested.
    Non-point geometries are always accepted.

    >>> finite = finite_point_filter()
    >>> finite(None, Point(1, float('nan')))
    False
    >>> finite(None, Point(1, 2, float('inf'), has_z=True))
    True
    """

    def geometry_filter(containing_type: GeometryType | None, geometry: Geometry) -> bool:
        if not isinstance(geometry, Point):
            return True
        if not (isfinite(geometry.x) and isfinite(geometry.y)):
            return False
        if z and geometry.has_z and not isfinite(geometry.z):  # type: ignore
            return False
        if m and geometry.has_m and not isfinite(geometry.m):  # type: ignore
            return False
        return True

    return geometry_filter
