from io import StringIO

import pytest

from sfwkt.exceptions.wkt_error import AbstractTypeError, TypeMismatchError
from sfwkt.lib.wkt_writer import WKTWriter
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

_RING = LineString(points=[Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 0)])


@pytest.mark.parametrize(
    ('geometry', 'expected'),
    [
        (Point(1, 1), 'POINT (1.0 1.0)'),
        (Point(1, 2, 3, has_z=True), 'POINT Z (1.0 2.0 3.0)'),
        (Point(1, 2, m=4, has_m=True), 'POINT M (1.0 2.0 4.0)'),
        (Point(1, 2, 3, 4, has_z=True, has_m=True), 'POINT ZM (1.0 2.0 3.0 4.0)'),
        (Point(0.1, -2.5e-7), 'POINT (0.1 -2.5e-07)'),
        (Point(1, 2, 3), 'POINT (1.0 2.0)'),
        (Point(float('nan'), float('inf')), 'POINT (nan inf)'),
        (LineString(), 'LINESTRING EMPTY'),
        (LineString(has_z=True), 'LINESTRING Z EMPTY'),
        (LineString(points=[Point(0, 0), Point(1, 1)]), 'LINESTRING (0.0 0.0, 1.0 1.0)'),
        (CircularString(points=[Point(0, 0), Point(1, 1), Point(2, 0)]), 'CIRCULARSTRING (0.0 0.0, 1.0 1.0, 2.0 0.0)'),
        (Polygon(), 'POLYGON EMPTY'),
        (Polygon(rings=[_RING, LineString()]), 'POLYGON ((0.0 0.0, 1.0 0.0, 1.0 1.0, 0.0 0.0), EMPTY)'),
        (Triangle(rings=[_RING]), 'TRIANGLE ((0.0 0.0, 1.0 0.0, 1.0 1.0, 0.0 0.0))'),
        (MultiPoint(), 'MULTIPOINT EMPTY'),
        (MultiPoint(geometries=[Point(0, 0), Point(1, 1)]), 'MULTIPOINT ((0.0 0.0), (1.0 1.0))'),
        (
            MultiLineString(geometries=[LineString(points=[Point(0, 0), Point(1, 1)]), LineString()]),
            'MULTILINESTRING ((0.0 0.0, 1.0 1.0), EMPTY)',
        ),
        (MultiPolygon(), 'MULTIPOLYGON EMPTY'),
        (
            MultiPolygon(geometries=[Polygon(rings=[_RING])]),
            'MULTIPOLYGON (((0.0 0.0, 1.0 0.0, 1.0 1.0, 0.0 0.0)))',
        ),
        (
            PolyhedralSurface(polygons=[Polygon(rings=[_RING])]),
            'POLYHEDRALSURFACE (((0.0 0.0, 1.0 0.0, 1.0 1.0, 0.0 0.0)))',
        ),
        (TIN(), 'TIN EMPTY'),
        (
            GeometryCollection(geometries=[Point(1, 2), LineString()]),
            'GEOMETRYCOLLECTION (POINT (1.0 2.0), LINESTRING EMPTY)',
        ),
        (
            MultiCurve(
                geometries=[
                    LineString(points=[Point(0, 0), Point(1, 1)]),
                    CircularString(points=[Point(0, 0), Point(1, 1), Point(2, 0)]),
                ]
            ),
            'MULTICURVE (LINESTRING (0.0 0.0, 1.0 1.0), CIRCULARSTRING (0.0 0.0, 1.0 1.0, 2.0 0.0))',
        ),
        (
            MultiSurface(geometries=[Polygon(), CurvePolygon()]),
            'MULTISURFACE (POLYGON EMPTY, CURVEPOLYGON EMPTY)',
        ),
        (
            CompoundCurve(line_strings=[LineString(points=[Point(0, 0), Point(1, 1)])]),
            'COMPOUNDCURVE (LINESTRING (0.0 0.0, 1.0 1.0))',
        ),
        (
            CurvePolygon(rings=[CompoundCurve(), _RING]),
            'CURVEPOLYGON (COMPOUNDCURVE EMPTY, LINESTRING (0.0 0.0, 1.0 0.0, 1.0 1.0, 0.0 0.0))',
        ),
    ],
)
def test_write(geometry, expected):
    assert WKTWriter.write_geometry(geometry) == expected


def test_write_nested_dimensions():
    geometry = GeometryCollection(
        geometries=[Point(1, 2, 3, has_z=True)],
        has_z=True,
    )
    assert WKTWriter.write_geometry(geometry) == 'GEOMETRYCOLLECTION Z (POINT Z (1.0 2.0 3.0))'


@pytest.mark.parametrize('geometry', [Geometry(), Curve(), Surface()])
def test_write_abstract(geometry):
    with pytest.raises(AbstractTypeError):
        WKTWriter.write_geometry(geometry)


def test_write_to_keeps_sink_open():
    sink = StringIO()
    WKTWriter.write_to(sink, Point(1, 2))
    sink.write('\n')
    WKTWriter.write_to(sink, LineString())
    assert sink.getvalue() == 'POINT (1.0 2.0)\nLINESTRING EMPTY'


def test_partial_output_on_error():
    sink = StringIO()
    with pytest.raises(AbstractTypeError):
        WKTWriter.write_to(sink, GeometryCollection(geometries=[Point(1, 2), Curve()]))
    assert sink.getvalue() == 'GEOMETRYCOLLECTION (POINT (1.0 2.0), '


def test_per_kind_writer():
    writer = WKTWriter()
    writer.write_point(Point(1, 2))
    writer.sink.write(' ')
    writer.write_line_string(LineString())
    assert writer.getvalue() == '1.0 2.0 EMPTY'


def test_getvalue_requires_in_memory_sink(tmp_path):
    with (tmp_path / 'out.wkt').open('w') as f:
        writer = WKTWriter(f)
        writer.write(Point(1, 2))
        with pytest.raises(TypeError):
            writer.getvalue()
    assert (tmp_path / 'out.wkt').read_text() == 'POINT (1.0 2.0)'


@pytest.mark.parametrize(
    'geometry',
    [
        Polygon(rings=[CompoundCurve()]),  # type: ignore
        MultiPoint(geometries=[LineString()]),
        MultiCurve(geometries=[Point(1, 2)]),
        MultiSurface(geometries=[LineString()]),
        CompoundCurve(line_strings=[CompoundCurve()]),  # type: ignore
        TIN(polygons=[CurvePolygon()]),  # type: ignore
    ],
)
def test_write_member_type_mismatch(geometry):
    with pytest.raises(TypeMismatchError, match='Unexpected geometry type'):
        WKTWriter.write_geometry(geometry)
