from typing import NoReturn

from sizestr import sizestr

from sfwkt.config import WKT_NESTING_MAX_DEPTH, WKT_PARSE_MAX_SIZE
from sfwkt.exceptions.wkt_error import (
    AbstractTypeError,
    GrammarError,
    InputTooBigError,
    LexicalError,
    TypeMismatchError,
    UnknownTypeError,
)
from sfwkt.models.geometry_type import GeometryType


def _found(token: str | None) -> str:
    return 'end of text' if token is None else f"'{token}'"


def _dimension_name(has_z: bool, has_m: bool) -> str:
    return 'XY' + ('Z' if has_z else '') + ('M' if has_m else '')


class WKTExceptionsMixin:
    def wkt_input_too_big(self, size: int) -> NoReturn:
        raise InputTooBigError(
            f'Input size {sizestr(size)} exceeds the limit of {sizestr(WKT_PARSE_MAX_SIZE)}'
        )

    def wkt_bad_number(self, token: str | None) -> NoReturn:
        raise LexicalError(f'Invalid token, expected a number. found: {_found(token)}')

    def wkt_unexpected_token(self, expected: str, token: str | None) -> NoReturn:
        raise GrammarError(f'Invalid token, expected {expected}. found: {_found(token)}')

    def wkt_trailing_data(self, token: str) -> NoReturn:
        raise GrammarError(f"Unexpected data after the geometry, found: '{token}'")

    def wkt_nesting_too_deep(self) -> NoReturn:
        raise GrammarError(f'Geometry nesting exceeds the limit of {WKT_NESTING_MAX_DEPTH}')

    def wkt_dimension_mismatch(self, expected_z: bool, expected_m: bool, has_z: bool, has_m: bool) -> NoReturn:
        raise GrammarError(
            f'Inconsistent coordinate dimensions, expected: {_dimension_name(expected_z, expected_m)}, '
            f'found: {_dimension_name(has_z, has_m)}'
        )

    def wkt_unknown_type(self, token: str) -> NoReturn:
        raise UnknownTypeError(f"Expected a valid geometry type, found: '{token}'")

    def wkt_invalid_modifier(self, type_token: str, token: str | None) -> NoReturn:
        raise UnknownTypeError(
            f"Invalid value following geometry type: '{type_token}', value: {_found(token)}"
        )

    def wkt_abstract_type(self, geometry_type: GeometryType) -> NoReturn:
        raise AbstractTypeError(f'Unexpected geometry type of {geometry_type} which is abstract')

    def wkt_type_mismatch(self, expected: str, actual: GeometryType) -> NoReturn:
        raise TypeMismatchError(f'Unexpected geometry type. Expected: {expected}, Actual: {actual}')
