import cython

from sfwkt.lib.exceptions_context import raise_for
from sfwkt.lib.text_reader import TextReader
from sfwkt.models.geometry_type import GeometryType
from sfwkt.models.geometry_type_info import GeometryTypeInfo

# longest suffix first
_SUFFIXES: tuple[tuple[str, bool, bool], ...] = (
    ('ZM', True, True),
    ('Z', True, False),
    ('M', False, True),
)


@cython.cfunc
def _upper(token: str | None) -> str:
    return token.upper() if token is not None else ''


def resolve_geometry_type(token: str | None, reader: TextReader) -> GeometryTypeInfo | None:
    """
    Resolve a geometry header token into its type and dimension flags.

    Dimensions are given either fused to the type name ('POINTZ') or as the following
    token ('POINT Z'), in which case the modifier token is consumed from the reader.
    Returns None when the header is missing or is the EMPTY literal.
    """
    if token is None or _upper(token) == 'EMPTY':
        return None

    has_z = False
    has_m = False
    geometry_type = GeometryType.find(token)

    if geometry_type is None:
        token_upper = _upper(token)
        for suffix, suffix_z, suffix_m in _SUFFIXES:
            if token_upper.endswith(suffix):
                geometry_type = GeometryType.find(token_upper[: -len(suffix)])
                has_z = suffix_z
                has_m = suffix_m
                break
        if geometry_type is None:
            raise_for.wkt_unknown_type(token)

    if not has_z and not has_m:
        modifier = reader.peek_token()
        match _upper(modifier):
            case 'Z':
                has_z = True
            case 'M':
                has_m = True
            case 'ZM':
                has_z = True
                has_m = True
            case '(' | 'EMPTY':
                pass
            case _:
                raise_for.wkt_invalid_modifier(token, modifier)

        if has_z or has_m:
            reader.next_token()

    if geometry_type.is_abstract:
        raise_for.wkt_abstract_type(geometry_type)

    return GeometryTypeInfo(geometry_type, has_z, has_m)
