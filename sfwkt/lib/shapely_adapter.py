import shapely
from shapely import get_coordinates
from shapely.geometry.base import BaseGeometry

from sfwkt.lib.exceptions_context import raise_for
from sfwkt.models.geometry import (
    Geometry,
    GeometryCollection,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)
from sfwkt.models.geometry_type import GeometryType


def to_shapely(geometry: Geometry) -> BaseGeometry:
    """
    Convert a geometry to its shapely equivalent.

    Only the seven basic geometry types with optional Z are supported by shapely.

    >>> to_shapely(Point(1, 2))
    <POINT (1 2)>
    """
    if geometry.has_m:
        raise_for.unsupported_measure('shapely')

    match geometry.geometry_type:
        case GeometryType.POINT:
            return shapely.Point(geometry.coords)  # type: ignore
        case GeometryType.LINESTRING:
            return shapely.LineString(_coords(geometry.points))  # type: ignore
        case GeometryType.POLYGON:
            return _polygon(geometry)  # type: ignore
        case GeometryType.MULTIPOINT:
            return shapely.MultiPoint(_coords(geometry.geometries))  # type: ignore
        case GeometryType.MULTILINESTRING:
            return shapely.MultiLineString([_coords(line.points) for line in geometry.geometries])  # type: ignore
        case GeometryType.MULTIPOLYGON:
            return shapely.MultiPolygon([_polygon(polygon) for polygon in geometry.geometries])  # type: ignore
        case GeometryType.GEOMETRYCOLLECTION:
            return shapely.GeometryCollection([to_shapely(member) for member in geometry.geometries])  # type: ignore
        case _:
            raise_for.unsupported_conversion(geometry.geometry_type, 'shapely')


def from_shapely(geometry: BaseGeometry) -> Geometry | None:
    """
    Convert a shapely geometry to the geometry model.

    Returns None for an empty point, which the model cannot represent.
    """
    has_z: bool = geometry.has_z
    match geometry.geom_type:
        case 'Point':
            if geometry.is_empty:
                return None
            return _points(geometry, has_z)[0]
        case 'LineString' | 'LinearRing':
            return LineString(points=_points(geometry, has_z), has_z=has_z)
        case 'Polygon':
            return _from_polygon(geometry, has_z)  # type: ignore
        case 'MultiPoint':
            return MultiPoint(geometries=_points(geometry, has_z), has_z=has_z)  # type: ignore
        case 'MultiLineString':
            return MultiLineString(
                geometries=[
                    LineString(points=_points(line, has_z), has_z=has_z)
                    for line in geometry.geoms  # type: ignore
                ],
                has_z=has_z,
            )
        case 'MultiPolygon':
            return MultiPolygon(
                geometries=[_from_polygon(polygon, has_z) for polygon in geometry.geoms],  # type: ignore
                has_z=has_z,
            )
        case 'GeometryCollection':
            members = (from_shapely(member) for member in geometry.geoms)  # type: ignore
            return GeometryCollection(
                geometries=[member for member in members if member is not None],
                has_z=has_z,
            )
        case _:
            raise_for.unsupported_conversion(geometry.geom_type, 'the geometry model')


def _coords(points: list[Point]) -> list[tuple[float, ...]]:
    return [point.coords for point in points]


def _polygon(polygon: Polygon) -> shapely.Polygon:
    if not polygon.rings:
        return shapely.Polygon()
    shell, *holes = (_coords(ring.points) for ring in polygon.rings)  # type: ignore
    return shapely.Polygon(shell, holes)


def _points(geometry: BaseGeometry, has_z: bool) -> list[Point]:
    return [Point(*coords, has_z=has_z) for coords in get_coordinates(geometry, include_z=has_z).tolist()]


def _from_polygon(polygon: shapely.Polygon, has_z: bool) -> Polygon:
    if polygon.is_empty:
        return Polygon(has_z=has_z)
    rings = (polygon.exterior, *polygon.interiors)
    return Polygon(
        rings=[LineString(points=_points(ring, has_z), has_z=has_z) for ring in rings],
        has_z=has_z,
    )
