import logging
from collections.abc import Callable, Sequence
from io import StringIO
from typing import Self, TextIO

import cython
from sizestr import sizestr

from sfwkt.lib.exceptions_context import raise_for
from sfwkt.models.geometry import (
    TIN,
    CircularString,
    CompoundCurve,
    Curve,
    CurvePolygon,
    Geometry,
    GeometryCollection,
    LineString,
    MultiCurve,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    MultiSurface,
    Point,
    Polygon,
    PolyhedralSurface,
    Surface,
    Triangle,
)
from sfwkt.models.geometry_type import GeometryType

_logger = logging.getLogger(__name__)


@cython.cfunc
def _format_number(value: cython.double) -> str:
    # shortest text that reads back to the same double, independent of locale
    return repr(float(value))


class WKTWriter:
    """
    Writer of Well-Known Text geometries.

    Output goes to the given text sink, or to an in-memory buffer by default.
    On errors, whatever was already written to the sink is left as-is.
    """

    __slots__ = ('_sink',)

    def __init__(self, sink: TextIO | None = None) -> None:
        self._sink: TextIO = sink if sink is not None else StringIO()

    @staticmethod
    def write_geometry(geometry: Geometry) -> str:
        """
        Write the geometry to a string.

        >>> WKTWriter.write_geometry(Point(1.0, 1.0))
        'POINT (1.0 1.0)'
        """
        with WKTWriter() as writer:
            writer.write(geometry)
            result = writer.getvalue()
        _logger.debug('Wrote %s WKT string', sizestr(len(result)))
        return result

    @staticmethod
    def write_to(sink: TextIO, geometry: Geometry) -> None:
        """Write the geometry to the caller-owned sink, which is left open."""
        WKTWriter(sink).write(geometry)

    @property
    def sink(self) -> TextIO:
        return self._sink

    def getvalue(self) -> str:
        """Get the text written so far, available for in-memory sinks only."""
        sink = self._sink
        if not isinstance(sink, StringIO):
            raise TypeError(f'Sink {type(sink).__qualname__} does not hold written text')
        return sink.getvalue()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *_) -> None:
        self.close()

    def close(self) -> None:
        self._sink.close()

    def write(self, geometry: Geometry) -> None:
        """Write the geometry including its type header."""
        geometry_type = geometry.geometry_type
        if geometry_type.is_abstract:
            raise_for.wkt_abstract_type(geometry_type)

        write = self._sink.write
        write(geometry_type.value)
        write(' ')

        if geometry.has_z or geometry.has_m:
            if geometry.has_z:
                write('Z')
            if geometry.has_m:
                write('M')
            write(' ')

        match geometry_type:
            case GeometryType.POINT:
                self.write_point_text(geometry)  # type: ignore
            case GeometryType.LINESTRING:
                self.write_line_string(geometry)  # type: ignore
            case GeometryType.POLYGON:
                self.write_polygon(geometry)  # type: ignore
            case GeometryType.MULTIPOINT:
                self.write_multi_point(geometry)  # type: ignore
            case GeometryType.MULTILINESTRING:
                self.write_multi_line_string(geometry)  # type: ignore
            case GeometryType.MULTIPOLYGON:
                self.write_multi_polygon(geometry)  # type: ignore
            case GeometryType.GEOMETRYCOLLECTION:
                self.write_geometry_collection(geometry)  # type: ignore
            case GeometryType.MULTICURVE:
                self.write_multi_curve(geometry)  # type: ignore
            case GeometryType.MULTISURFACE:
                self.write_multi_surface(geometry)  # type: ignore
            case GeometryType.CIRCULARSTRING:
                self.write_circular_string(geometry)  # type: ignore
            case GeometryType.COMPOUNDCURVE:
                self.write_compound_curve(geometry)  # type: ignore
            case GeometryType.CURVEPOLYGON:
                self.write_curve_polygon(geometry)  # type: ignore
            case GeometryType.POLYHEDRALSURFACE:
                self.write_polyhedral_surface(geometry)  # type: ignore
            case GeometryType.TIN:
                self.write_tin(geometry)  # type: ignore
            case GeometryType.TRIANGLE:
                self.write_triangle(geometry)  # type: ignore

    def write_point_text(self, point: Point) -> None:
        write = self._sink.write
        write('(')
        self.write_point(point)
        write(')')

    def write_point(self, point: Point) -> None:
        write = self._sink.write
        write(_format_number(point.x))
        write(' ')
        write(_format_number(point.y))
        if point.has_z:
            write(' ')
            write(_format_number(point.z))  # type: ignore
        if point.has_m:
            write(' ')
            write(_format_number(point.m))  # type: ignore

    def write_line_string(self, line_string: LineString) -> None:
        self._write_members(line_string.points, Point, self.write_point)

    def write_circular_string(self, circular_string: CircularString) -> None:
        self._write_members(circular_string.points, Point, self.write_point)

    def write_polygon(self, polygon: Polygon) -> None:
        self._write_members(polygon.rings, LineString, self.write_line_string)

    def write_triangle(self, triangle: Triangle) -> None:
        self._write_members(triangle.rings, LineString, self.write_line_string)

    def write_multi_point(self, multi_point: MultiPoint) -> None:
        self._write_members(multi_point.geometries, Point, self.write_point_text)

    def write_multi_line_string(self, multi_line_string: MultiLineString) -> None:
        self._write_members(multi_line_string.geometries, LineString, self.write_line_string)

    def write_multi_polygon(self, multi_polygon: MultiPolygon) -> None:
        self._write_members(multi_polygon.geometries, Polygon, self.write_polygon)

    def write_geometry_collection(self, geometry_collection: GeometryCollection) -> None:
        self._write_members(geometry_collection.geometries, Geometry, self.write)

    def write_multi_curve(self, multi_curve: MultiCurve) -> None:
        self._write_members(multi_curve.geometries, Curve, self.write)

    def write_multi_surface(self, multi_surface: MultiSurface) -> None:
        self._write_members(multi_surface.geometries, Surface, self.write)

    def write_compound_curve(self, compound_curve: CompoundCurve) -> None:
        self._write_members(compound_curve.line_strings, LineString, self.write)

    def write_curve_polygon(self, curve_polygon: CurvePolygon) -> None:
        self._write_members(curve_polygon.rings, Curve, self.write)

    def write_polyhedral_surface(self, polyhedral_surface: PolyhedralSurface) -> None:
        self._write_members(polyhedral_surface.polygons, Polygon, self.write_polygon)

    def write_tin(self, tin: TIN) -> None:
        self._write_members(tin.polygons, Polygon, self.write_polygon)

    def _write_members[T: Geometry](
        self,
        members: Sequence[Geometry],
        member_type: type[T],
        write_member: Callable[[T], None],
    ) -> None:
        write = self._sink.write
        if not members:
            write('EMPTY')
            return
        write('(')
        for i, member in enumerate(members):
            if not isinstance(member, member_type):
                raise_for.wkt_type_mismatch(member_type.geometry_type.value, member.geometry_type)
            if i:
                write(', ')
            write_member(member)
        write(')')
