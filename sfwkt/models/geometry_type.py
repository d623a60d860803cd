from functools import cache

from sfwkt.models.base_enum import BaseEnum


class GeometryType(BaseEnum):
    GEOMETRY = 'GEOMETRY'
    POINT = 'POINT'
    LINESTRING = 'LINESTRING'
    POLYGON = 'POLYGON'
    MULTIPOINT = 'MULTIPOINT'
    MULTILINESTRING = 'MULTILINESTRING'
    MULTIPOLYGON = 'MULTIPOLYGON'
    GEOMETRYCOLLECTION = 'GEOMETRYCOLLECTION'
    MULTICURVE = 'MULTICURVE'
    MULTISURFACE = 'MULTISURFACE'
    CURVE = 'CURVE'
    SURFACE = 'SURFACE'
    CIRCULARSTRING = 'CIRCULARSTRING'
    COMPOUNDCURVE = 'COMPOUNDCURVE'
    CURVEPOLYGON = 'CURVEPOLYGON'
    POLYHEDRALSURFACE = 'POLYHEDRALSURFACE'
    TIN = 'TIN'
    TRIANGLE = 'TRIANGLE'

    @classmethod
    def find(cls, name: str | None) -> 'GeometryType | None':
        """
        Find the geometry type by its case-insensitive name.

        >>> GeometryType.find('MultiPolygon')
        <GeometryType.MULTIPOLYGON: 'MULTIPOLYGON'>
        >>> GeometryType.find('POINTZ') is None
        True
        """
        if not name:
            return None
        return cls._value2member_map_.get(name.upper())  # type: ignore

    @property
    def is_abstract(self) -> bool:
        """Check if the type is abstract and never appears as a concrete value."""
        return self in _ABSTRACT

    @property
    def parent(self) -> 'GeometryType | None':
        """
        Get the direct supertype in the Simple Features hierarchy.

        >>> GeometryType.TIN.parent
        <GeometryType.POLYHEDRALSURFACE: 'POLYHEDRALSURFACE'>
        >>> GeometryType.GEOMETRY.parent is None
        True
        """
        return _PARENTS.get(self)

    def is_a(self, other: 'GeometryType') -> bool:
        """
        Check if the type is the other type or one of its subtypes.

        >>> GeometryType.CIRCULARSTRING.is_a(GeometryType.CURVE)
        True
        >>> GeometryType.POLYGON.is_a(GeometryType.MULTIPOLYGON)
        False
        """
        return other in _ancestors(self)


_ABSTRACT = frozenset((GeometryType.GEOMETRY, GeometryType.CURVE, GeometryType.SURFACE))

_PARENTS: dict[GeometryType, GeometryType] = {
    GeometryType.POINT: GeometryType.GEOMETRY,
    GeometryType.CURVE: GeometryType.GEOMETRY,
    GeometryType.LINESTRING: GeometryType.CURVE,
    GeometryType.CIRCULARSTRING: GeometryType.LINESTRING,
    GeometryType.COMPOUNDCURVE: GeometryType.CURVE,
    GeometryType.SURFACE: GeometryType.GEOMETRY,
    GeometryType.CURVEPOLYGON: GeometryType.SURFACE,
    GeometryType.POLYGON: GeometryType.CURVEPOLYGON,
    GeometryType.TRIANGLE: GeometryType.POLYGON,
    GeometryType.POLYHEDRALSURFACE: GeometryType.SURFACE,
    GeometryType.TIN: GeometryType.POLYHEDRALSURFACE,
    GeometryType.GEOMETRYCOLLECTION: GeometryType.GEOMETRY,
    GeometryType.MULTIPOINT: GeometryType.GEOMETRYCOLLECTION,
    GeometryType.MULTICURVE: GeometryType.GEOMETRYCOLLECTION,
    GeometryType.MULTILINESTRING: GeometryType.MULTICURVE,
    GeometryType.MULTISURFACE: GeometryType.GEOMETRYCOLLECTION,
    GeometryType.MULTIPOLYGON: GeometryType.MULTISURFACE,
}


@cache
def _ancestors(geometry_type: GeometryType) -> frozenset[GeometryType]:
    result: list[GeometryType] = []
    current: GeometryType | None = geometry_type
    while current is not None:
        result.append(current)
        current = _PARENTS.get(current)
    return frozenset(result)
