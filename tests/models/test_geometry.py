from sfwkt.models.geometry import (
    CircularString,
    Geometry,
    GeometryCollection,
    LineString,
    MultiPoint,
    Point,
    Polygon,
)
from sfwkt.models.geometry_type import GeometryType


def _subclasses(cls: type[Geometry]) -> list[type[Geometry]]:
    return [cls, *(sub for direct in cls.__subclasses__() for sub in _subclasses(direct))]


def test_geometry_classes_cover_all_types():
    classes = {cls.geometry_type: cls for cls in _subclasses(Geometry)}
    assert set(classes) == set(GeometryType)
    for geometry_type, cls in classes.items():
        assert cls.geometry_type == geometry_type
        if geometry_type.parent is not None:
            assert issubclass(cls, classes[geometry_type.parent])


def test_point_coords():
    assert Point(1, 2).coords == (1, 2)
    assert Point(1, 2, 3, has_z=True).coords == (1, 2, 3)
    assert Point(1, 2, m=4, has_m=True).coords == (1, 2, 4)
    assert Point(1, 2, 3, 4, has_z=True, has_m=True).coords == (1, 2, 3, 4)


def test_is_empty():
    assert not Point(0, 0).is_empty
    assert LineString().is_empty
    assert not LineString(points=[Point(0, 0)]).is_empty
    assert Polygon(has_z=True).is_empty
    assert GeometryCollection().is_empty


def test_equality_is_structural_and_typed():
    points = [Point(0, 0), Point(1, 1)]
    assert LineString(points=points) == LineString(points=[Point(0.0, 0.0), Point(1.0, 1.0)])
    assert LineString(points=points) != CircularString(points=points)
    assert LineString(points=points) != LineString(points=points, has_z=True)
    assert MultiPoint(geometries=[Point(1, 1)]) != GeometryCollection(geometries=[Point(1, 1)])


def test_children():
    points = [Point(0, 0), Point(1, 1)]
    assert LineString(points=points).children == points
    assert Point(0, 0).children == ()
