from collections.abc import Sequence
from typing import ClassVar

import msgspec

from sfwkt.models.geometry_type import GeometryType


class Geometry(msgspec.Struct, kw_only=True):
    """
    Base of the Simple Features geometry model.

    Every value carries its own dimension flags; containers built by the reader
    share the flags of their outermost header.
    """

    geometry_type: ClassVar[GeometryType] = GeometryType.GEOMETRY

    has_z: bool = False
    has_m: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.children

    @property
    def children(self) -> Sequence['Geometry']:
        return ()


class Point(Geometry):
    geometry_type: ClassVar[GeometryType] = GeometryType.POINT

    x: float
    y: float
    z: float | None = None
    m: float | None = None

    @property
    def is_empty(self) -> bool:
        return False

    @property
    def coords(self) -> tuple[float, ...]:
        """
        Get the ordinates declared by the dimension flags.

        >>> Point(1, 2, 3, has_z=True).coords
        (1, 2, 3)
        """
        result = [self.x, self.y]
        if self.has_z:
            result.append(self.z)  # type: ignore
        if self.has_m:
            result.append(self.m)  # type: ignore
        return tuple(result)


class Curve(Geometry):
    geometry_type: ClassVar[GeometryType] = GeometryType.CURVE


class LineString(Curve):
    geometry_type: ClassVar[GeometryType] = GeometryType.LINESTRING

    points: list[Point] = msgspec.field(default_factory=list)

    @property
    def children(self) -> Sequence[Point]:
        return self.points


class CircularString(LineString):
    geometry_type: ClassVar[GeometryType] = GeometryType.CIRCULARSTRING


class CompoundCurve(Curve):
    geometry_type: ClassVar[GeometryType] = GeometryType.COMPOUNDCURVE

    line_strings: list[LineString] = msgspec.field(default_factory=list)

    @property
    def children(self) -> Sequence[LineString]:
        return self.line_strings


class Surface(Geometry):
    geometry_type: ClassVar[GeometryType] = GeometryType.SURFACE


class CurvePolygon(Surface):
    geometry_type: ClassVar[GeometryType] = GeometryType.CURVEPOLYGON

    rings: list[Curve] = msgspec.field(default_factory=list)

    @property
    def children(self) -> Sequence[Curve]:
        return self.rings


class Polygon(CurvePolygon):
    """Curve polygon whose rings are all line strings."""

    geometry_type: ClassVar[GeometryType] = GeometryType.POLYGON

    rings: list[LineString] = msgspec.field(default_factory=list)  # type: ignore


class Triangle(Polygon):
    geometry_type: ClassVar[GeometryType] = GeometryType.TRIANGLE


class PolyhedralSurface(Surface):
    geometry_type: ClassVar[GeometryType] = GeometryType.POLYHEDRALSURFACE

    polygons: list[Polygon] = msgspec.field(default_factory=list)

    @property
    def children(self) -> Sequence[Polygon]:
        return self.polygons


class TIN(PolyhedralSurface):
    geometry_type: ClassVar[GeometryType] = GeometryType.TIN


class GeometryCollection(Geometry):
    geometry_type: ClassVar[GeometryType] = GeometryType.GEOMETRYCOLLECTION

    geometries: list[Geometry] = msgspec.field(default_factory=list)

    @property
    def children(self) -> Sequence[Geometry]:
        return self.geometries


class MultiPoint(GeometryCollection):
    geometry_type: ClassVar[GeometryType] = GeometryType.MULTIPOINT


class MultiCurve(GeometryCollection):
    geometry_type: ClassVar[GeometryType] = GeometryType.MULTICURVE


class MultiLineString(MultiCurve):
    geometry_type: ClassVar[GeometryType] = GeometryType.MULTILINESTRING


class MultiSurface(GeometryCollection):
    geometry_type: ClassVar[GeometryType] = GeometryType.MULTISURFACE


class MultiPolygon(MultiSurface):
    geometry_type: ClassVar[GeometryType] = GeometryType.MULTIPOLYGON
