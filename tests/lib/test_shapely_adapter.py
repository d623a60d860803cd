import pytest
import shapely

from sfwkt.exceptions.wkt_error import TypeMismatchError
from sfwkt.lib.shapely_adapter import from_shapely, to_shapely
from sfwkt.lib.wkt_reader import WKTReader
from sfwkt.models.geometry import LineString, MultiCurve, MultiPoint, Point, Polygon


@pytest.mark.parametrize(
    'text',
    [
        'POINT (1 2)',
        'POINT Z (1 2 3)',
        'LINESTRING (0 0, 1 1, 2 0)',
        'POLYGON ((0 0, 4 0, 4 4, 0 0), (1 1, 2 1, 2 2, 1 1))',
        'MULTIPOINT ((0 0), (1 1))',
        'MULTILINESTRING ((0 0, 1 1), (2 2, 3 3))',
        'MULTIPOLYGON (((0 0, 1 0, 1 1, 0 0)), ((5 5, 6 5, 6 6, 5 5)))',
        'GEOMETRYCOLLECTION (POINT (1 2), LINESTRING (0 0, 1 1))',
    ],
)
def test_to_shapely(text):
    geometry = WKTReader.read_geometry(text)
    assert geometry is not None
    assert to_shapely(geometry).equals_exact(shapely.from_wkt(text), tolerance=0)


@pytest.mark.parametrize(
    'text',
    [
        'POINT (1 2)',
        'POINT Z (1 2 3)',
        'LINESTRING Z (0 0 1, 1 1 2)',
        'POLYGON ((0 0, 4 0, 4 4, 0 0), (1 1, 2 1, 2 2, 1 1))',
        'MULTIPOINT ((0 0), (1 1))',
        'MULTILINESTRING ((0 0, 1 1), (2 2, 3 3))',
        'MULTIPOLYGON (((0 0, 1 0, 1 1, 0 0)))',
        'GEOMETRYCOLLECTION (POINT (1 2), POLYGON EMPTY)',
    ],
)
def test_from_shapely(text):
    assert from_shapely(shapely.from_wkt(text)) == WKTReader.read_geometry(text)


@pytest.mark.parametrize(
    ('geometry', 'geom_type'),
    [
        (LineString(), 'LineString'),
        (Polygon(), 'Polygon'),
        (MultiPoint(), 'MultiPoint'),
    ],
)
def test_to_shapely_empty(geometry, geom_type):
    result = to_shapely(geometry)
    assert result.is_empty
    assert result.geom_type == geom_type


def test_from_shapely_empty_point():
    assert from_shapely(shapely.Point()) is None


def test_from_shapely_linear_ring():
    ring = shapely.LinearRing([(0, 0), (1, 0), (1, 1)])
    assert from_shapely(ring) == LineString(points=[Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 0)])


@pytest.mark.parametrize(
    'geometry',
    [
        Point(1, 2, m=3, has_m=True),
        MultiCurve(),
        WKTReader.read_geometry('CIRCULARSTRING (0 0, 1 1, 2 0)'),
    ],
)
def test_to_shapely_unsupported(geometry):
    with pytest.raises(TypeMismatchError):
        to_shapely(geometry)
