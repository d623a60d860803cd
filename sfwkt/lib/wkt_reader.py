from collections.abc import Callable, Iterator
from typing import Self, TextIO

import cython

from sfwkt.config import WKT_NESTING_MAX_DEPTH
from sfwkt.lib.exceptions_context import raise_for
from sfwkt.lib.geometry_filter import GeometryFilter, apply_filter
from sfwkt.lib.geometry_type_resolver import resolve_geometry_type
from sfwkt.lib.text_reader import TextReader
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
from sfwkt.models.geometry_type_info import GeometryTypeInfo

type ExpectedType = GeometryType | type[Geometry]


@cython.cfunc
def _upper(token: str | None) -> str:
    return token.upper() if token is not None else ''


@cython.cfunc
def _has_coordinates(geometry: Geometry) -> cython.bint:
    if isinstance(geometry, Point):
        return True
    for child in geometry.children:
        if _has_coordinates(child):
            return True
    return False


@cython.cfunc
def _set_dimensions(geometry: Geometry, has_z: cython.bint, has_m: cython.bint) -> None:
    # only called on values without coordinates
    geometry.has_z = bool(has_z)
    geometry.has_m = bool(has_m)
    for child in geometry.children:
        _set_dimensions(child, has_z, has_m)


@cython.cfunc
def _filtered(
    geometry_filter: GeometryFilter | None,
    containing_type: GeometryType,
    geometry: Geometry | None,
) -> Geometry | None:
    if geometry is None or not apply_filter(geometry_filter, containing_type, geometry):
        return None
    return geometry


@cython.cfunc
def _is_expected(geometry: Geometry, expected_type: ExpectedType) -> cython.bint:
    if isinstance(expected_type, GeometryType):
        return geometry.geometry_type.is_a(expected_type)
    return isinstance(geometry, expected_type)


@cython.cfunc
def _expected_name(expected_type: ExpectedType) -> str:
    if isinstance(expected_type, GeometryType):
        return expected_type.value
    return expected_type.geometry_type.value


class WKTReader:
    """
    Recursive-descent reader of Well-Known Text geometries.

    Each production consumes either the EMPTY literal or a parenthesized, comma-separated
    list of members. Every built member is passed through the optional geometry filter
    together with its containing type and is attached only when accepted.
    """

    __slots__ = ('_depth', '_reader')

    def __init__(self, source: str | TextIO | TextReader) -> None:
        self._reader = source if isinstance(source, TextReader) else TextReader(source)
        self._depth: int = 0

    @staticmethod
    def read_geometry(
        source: str | TextIO,
        geometry_filter: GeometryFilter | None = None,
        expected_type: ExpectedType | None = None,
    ) -> Geometry | None:
        """
        Read a single geometry from the text.

        Returns None for the EMPTY literal (and for POINT EMPTY) or when the filter
        rejects the geometry. The reader is always closed, on errors too.

        >>> WKTReader.read_geometry('POINT (1.0 1.0)')
        Point(x=1.0, y=1.0, z=None, m=None, has_z=False, has_m=False)
        """
        with WKTReader(source) as reader:
            geometry = reader.read(geometry_filter, expected_type=expected_type)
            token = reader.text_reader.next_token()
            if token is not None:
                raise_for.wkt_trailing_data(token)
        return geometry

    @property
    def text_reader(self) -> TextReader:
        return self._reader

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *_) -> None:
        self.close()

    def close(self) -> None:
        self._reader.close()

    def read(
        self,
        geometry_filter: GeometryFilter | None = None,
        containing_type: GeometryType | None = None,
        expected_type: ExpectedType | None = None,
        has_z: bool = False,
        has_m: bool = False,
    ) -> Geometry | None:
        """
        Read a geometry including its type header.

        The given dimensions apply when the header declares none,
        which is how members inherit the dimensions of their container.
        """
        type_info = self.read_geometry_type()
        if type_info is None:
            return None
        if type_info.has_z or type_info.has_m:
            has_z = type_info.has_z
            has_m = type_info.has_m

        self._depth += 1
        if self._depth > WKT_NESTING_MAX_DEPTH:
            raise_for.wkt_nesting_too_deep()
        try:
            geometry = self._read_body(type_info.type, has_z, has_m, geometry_filter)
        finally:
            self._depth -= 1

        if geometry is None or not apply_filter(geometry_filter, containing_type, geometry):
            return None

        if expected_type is not None and not _is_expected(geometry, expected_type):
            raise_for.wkt_type_mismatch(_expected_name(expected_type), geometry.geometry_type)

        return geometry

    def read_geometry_type(self) -> GeometryTypeInfo | None:
        """Read the geometry type header, None when it is EMPTY or missing."""
        return resolve_geometry_type(self._reader.next_token(), self._reader)

    def _read_body(
        self,
        geometry_type: GeometryType,
        has_z: bool,
        has_m: bool,
        geometry_filter: GeometryFilter | None,
    ) -> Geometry | None:
        match geometry_type:
            case GeometryType.POINT:
                return self.read_point_text(has_z, has_m)
            case GeometryType.LINESTRING:
                return self.read_line_string(has_z, has_m, geometry_filter)
            case GeometryType.POLYGON:
                return self.read_polygon(has_z, has_m, geometry_filter)
            case GeometryType.MULTIPOINT:
                return self.read_multi_point(has_z, has_m, geometry_filter)
            case GeometryType.MULTILINESTRING:
                return self.read_multi_line_string(has_z, has_m, geometry_filter)
            case GeometryType.MULTIPOLYGON:
                return self.read_multi_polygon(has_z, has_m, geometry_filter)
            case GeometryType.GEOMETRYCOLLECTION:
                return self.read_geometry_collection(has_z, has_m, geometry_filter)
            case GeometryType.MULTICURVE:
                return self.read_multi_curve(has_z, has_m, geometry_filter)
            case GeometryType.MULTISURFACE:
                return self.read_multi_surface(has_z, has_m, geometry_filter)
            case GeometryType.CIRCULARSTRING:
                return self.read_circular_string(has_z, has_m, geometry_filter)
            case GeometryType.COMPOUNDCURVE:
                return self.read_compound_curve(has_z, has_m, geometry_filter)
            case GeometryType.CURVEPOLYGON:
                return self.read_curve_polygon(has_z, has_m, geometry_filter)
            case GeometryType.POLYHEDRALSURFACE:
                return self.read_polyhedral_surface(has_z, has_m, geometry_filter)
            case GeometryType.TIN:
                return self.read_tin(has_z, has_m, geometry_filter)
            case GeometryType.TRIANGLE:
                return self.read_triangle(has_z, has_m, geometry_filter)
            case GeometryType.GEOMETRY | GeometryType.CURVE | GeometryType.SURFACE:
                raise_for.wkt_abstract_type(geometry_type)

    def read_point_text(self, has_z: bool, has_m: bool) -> Point | None:
        """Read a parenthesized point, None when it is EMPTY."""
        if not self._left_parenthesis_or_empty():
            return None
        point = self.read_point(has_z, has_m)
        self._right_parenthesis()
        return point

    def read_point(self, has_z: bool, has_m: bool) -> Point:
        """
        Read bare point ordinates.

        Without declared dimensions, up to two extra ordinates are still read (as Z, then M)
        while the following token is not a delimiter.
        """
        reader = self._reader
        x = reader.next_number()
        y = reader.next_number()
        z: float | None = None
        m: float | None = None

        if has_z or has_m:
            if has_z:
                z = reader.next_number()
            if has_m:
                m = reader.next_number()
        elif not self._is_comma_or_right_parenthesis():
            z = reader.next_number()
            has_z = True
            if not self._is_comma_or_right_parenthesis():
                m = reader.next_number()
                has_m = True

        return Point(x, y, z, m, has_z=has_z, has_m=has_m)

    def read_line_string(self, has_z: bool, has_m: bool, geometry_filter: GeometryFilter | None = None) -> LineString:
        points, dimensions = self._read_points(GeometryType.LINESTRING, has_z, has_m, geometry_filter)
        return LineString(points=points, **dimensions)

    def read_circular_string(
        self, has_z: bool, has_m: bool, geometry_filter: GeometryFilter | None = None
    ) -> CircularString:
        points, dimensions = self._read_points(GeometryType.CIRCULARSTRING, has_z, has_m, geometry_filter)
        return CircularString(points=points, **dimensions)

    def read_polygon(self, has_z: bool, has_m: bool, geometry_filter: GeometryFilter | None = None) -> Polygon:
        rings, dimensions = self._read_line_strings(GeometryType.POLYGON, has_z, has_m, geometry_filter)
        return Polygon(rings=rings, **dimensions)

    def read_triangle(self, has_z: bool, has_m: bool, geometry_filter: GeometryFilter | None = None) -> Triangle:
        rings, dimensions = self._read_line_strings(GeometryType.TRIANGLE, has_z, has_m, geometry_filter)
        return Triangle(rings=rings, **dimensions)

    def read_multi_point(self, has_z: bool, has_m: bool, geometry_filter: GeometryFilter | None = None) -> MultiPoint:
        def read_member(has_z: bool, has_m: bool) -> Geometry | None:
            # members are either parenthesized or bare ordinates
            point = (
                self.read_point_text(has_z, has_m)
                if self._is_left_parenthesis_or_empty()
                else self.read_point(has_z, has_m)
            )
            return _filtered(geometry_filter, GeometryType.MULTIPOINT, point)

        points, dimensions = self._read_members(has_z, has_m, read_member)
        return MultiPoint(geometries=points, **dimensions)

    def read_multi_line_string(
        self, has_z: bool, has_m: bool, geometry_filter: GeometryFilter | None = None
    ) -> MultiLineString:
        line_strings, dimensions = self._read_line_strings(
            GeometryType.MULTILINESTRING, has_z, has_m, geometry_filter
        )
        return MultiLineString(geometries=line_strings, **dimensions)  # type: ignore

    def read_multi_polygon(self, has_z: bool, has_m: bool, geometry_filter: GeometryFilter | None = None) -> MultiPolygon:
        polygons, dimensions = self._read_polygons(GeometryType.MULTIPOLYGON, has_z, has_m, geometry_filter)
        return MultiPolygon(geometries=polygons, **dimensions)  # type: ignore

    def read_polyhedral_surface(
        self, has_z: bool, has_m: bool, geometry_filter: GeometryFilter | None = None
    ) -> PolyhedralSurface:
        polygons, dimensions = self._read_polygons(GeometryType.POLYHEDRALSURFACE, has_z, has_m, geometry_filter)
        return PolyhedralSurface(polygons=polygons, **dimensions)

    def read_tin(self, has_z: bool, has_m: bool, geometry_filter: GeometryFilter | None = None) -> TIN:
        polygons, dimensions = self._read_polygons(GeometryType.TIN, has_z, has_m, geometry_filter)
        return TIN(polygons=polygons, **dimensions)

    def read_geometry_collection(
        self, has_z: bool, has_m: bool, geometry_filter: GeometryFilter | None = None
    ) -> GeometryCollection:
        """
        Read headered members of any concrete type.

        A member header without dimensions inherits those of the collection, so
        GEOMETRYCOLLECTION M (POINT (1 2 3)) holds a point with M=3.
        """

        def read_member(has_z: bool, has_m: bool) -> Geometry | None:
            return self.read(geometry_filter, GeometryType.GEOMETRYCOLLECTION, GeometryType.GEOMETRY, has_z, has_m)

        geometries, dimensions = self._read_members(has_z, has_m, read_member)
        return GeometryCollection(geometries=geometries, **dimensions)

    def read_multi_curve(self, has_z: bool, has_m: bool, geometry_filter: GeometryFilter | None = None) -> MultiCurve:
        def read_member(has_z: bool, has_m: bool) -> Geometry | None:
            if self._is_left_parenthesis_or_empty():
                line_string = self.read_line_string(has_z, has_m, geometry_filter)
                return _filtered(geometry_filter, GeometryType.MULTICURVE, line_string)
            return self.read(geometry_filter, GeometryType.MULTICURVE, Curve, has_z, has_m)

        curves, dimensions = self._read_members(has_z, has_m, read_member)
        return MultiCurve(geometries=curves, **dimensions)

    def read_multi_surface(
        self, has_z: bool, has_m: bool, geometry_filter: GeometryFilter | None = None
    ) -> MultiSurface:
        def read_member(has_z: bool, has_m: bool) -> Geometry | None:
            if self._is_left_parenthesis_or_empty():
                polygon = self.read_polygon(has_z, has_m, geometry_filter)
                return _filtered(geometry_filter, GeometryType.MULTISURFACE, polygon)
            return self.read(geometry_filter, GeometryType.MULTISURFACE, Surface, has_z, has_m)

        surfaces, dimensions = self._read_members(has_z, has_m, read_member)
        return MultiSurface(geometries=surfaces, **dimensions)

    def read_compound_curve(
        self, has_z: bool, has_m: bool, geometry_filter: GeometryFilter | None = None
    ) -> CompoundCurve:
        def read_member(has_z: bool, has_m: bool) -> Geometry | None:
            if self._is_left_parenthesis_or_empty():
                line_string = self.read_line_string(has_z, has_m, geometry_filter)
                return _filtered(geometry_filter, GeometryType.COMPOUNDCURVE, line_string)
            return self.read(geometry_filter, GeometryType.COMPOUNDCURVE, LineString, has_z, has_m)

        line_strings, dimensions = self._read_members(has_z, has_m, read_member)
        return CompoundCurve(line_strings=line_strings, **dimensions)  # type: ignore

    def read_curve_polygon(
        self, has_z: bool, has_m: bool, geometry_filter: GeometryFilter | None = None
    ) -> CurvePolygon:
        def read_member(has_z: bool, has_m: bool) -> Geometry | None:
            if self._is_left_parenthesis_or_empty():
                ring = self.read_line_string(has_z, has_m, geometry_filter)
                return _filtered(geometry_filter, GeometryType.CURVEPOLYGON, ring)
            return self.read(geometry_filter, GeometryType.CURVEPOLYGON, Curve, has_z, has_m)

        rings, dimensions = self._read_members(has_z, has_m, read_member)
        return CurvePolygon(rings=rings, **dimensions)  # type: ignore

    def _read_points(
        self,
        containing_type: GeometryType,
        has_z: bool,
        has_m: bool,
        geometry_filter: GeometryFilter | None,
    ) -> tuple[list[Point], dict[str, bool]]:
        def read_member(has_z: bool, has_m: bool) -> Geometry | None:
            return _filtered(geometry_filter, containing_type, self.read_point(has_z, has_m))

        return self._read_members(has_z, has_m, read_member)  # type: ignore

    def _read_line_strings(
        self,
        containing_type: GeometryType,
        has_z: bool,
        has_m: bool,
        geometry_filter: GeometryFilter | None,
    ) -> tuple[list[LineString], dict[str, bool]]:
        def read_member(has_z: bool, has_m: bool) -> Geometry | None:
            return _filtered(geometry_filter, containing_type, self.read_line_string(has_z, has_m, geometry_filter))

        return self._read_members(has_z, has_m, read_member)  # type: ignore

    def _read_polygons(
        self,
        containing_type: GeometryType,
        has_z: bool,
        has_m: bool,
        geometry_filter: GeometryFilter | None,
    ) -> tuple[list[Polygon], dict[str, bool]]:
        def read_member(has_z: bool, has_m: bool) -> Geometry | None:
            return _filtered(geometry_filter, containing_type, self.read_polygon(has_z, has_m, geometry_filter))

        return self._read_members(has_z, has_m, read_member)  # type: ignore

    def _read_members(
        self,
        has_z: bool,
        has_m: bool,
        read_member: Callable[[bool, bool], Geometry | None],
    ) -> tuple[list[Geometry], dict[str, bool]]:
        """
        Read the accepted members of a parenthesized list together with the list's dimensions.

        Without declared dimensions, the first member with coordinates or its own
        dimensions decides them, and the following members are read as declared with them.
        Members read before that carry no coordinates and are updated to match.
        """
        members: list[Geometry] = []
        decided = has_z or has_m
        for _ in self._members():
            member = read_member(has_z, has_m)
            if member is None:
                continue
            if decided:
                if member.has_z != has_z or member.has_m != has_m:
                    raise_for.wkt_dimension_mismatch(has_z, has_m, member.has_z, member.has_m)
            elif member.has_z or member.has_m or _has_coordinates(member):
                has_z = member.has_z
                has_m = member.has_m
                decided = True
                for previous in members:
                    _set_dimensions(previous, has_z, has_m)
            members.append(member)
        return members, {'has_z': bool(has_z), 'has_m': bool(has_m)}

    def _members(self) -> Iterator[None]:
        """Yield once per member of a parenthesized list, consuming the delimiters around it."""
        if not self._left_parenthesis_or_empty():
            return
        yield
        while self._comma_or_right_parenthesis():
            yield

    def _left_parenthesis_or_empty(self) -> bool:
        """Consume '(' (returns True) or EMPTY (returns False)."""
        token = self._reader.next_token()
        match _upper(token):
            case '(':
                return True
            case 'EMPTY':
                return False
            case _:
                raise_for.wkt_unexpected_token("'EMPTY' or '('", token)

    def _comma_or_right_parenthesis(self) -> bool:
        """Consume ',' (returns True) or ')' (returns False)."""
        token = self._reader.next_token()
        match token:
            case ',':
                return True
            case ')':
                return False
            case _:
                raise_for.wkt_unexpected_token("',' or ')'", token)

    def _right_parenthesis(self) -> None:
        token = self._reader.next_token()
        if token != ')':
            raise_for.wkt_unexpected_token("')'", token)

    def _is_left_parenthesis_or_empty(self) -> bool:
        return _upper(self._reader.peek_token()) in {'(', 'EMPTY'}

    def _is_comma_or_right_parenthesis(self) -> bool:
        return self._reader.peek_token() in {',', ')'}
