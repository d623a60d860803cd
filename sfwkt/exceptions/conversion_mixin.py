from typing import NoReturn

from sfwkt.exceptions.wkt_error import TypeMismatchError


class ConversionExceptionsMixin:
    def unsupported_conversion(self, geometry_type: str, target: str) -> NoReturn:
        raise TypeMismatchError(f'Geometry type {geometry_type} cannot be converted to {target}')

    def unsupported_measure(self, target: str) -> NoReturn:
        raise TypeMismatchError(f'Geometries with M values cannot be converted to {target}')

    def bad_geometry_value(self, value_type: str) -> NoReturn:
        raise TypeMismatchError(f'Expected WKT text or a geometry, found: {value_type}')
