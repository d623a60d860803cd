import msgspec

from sfwkt.models.geometry_type import GeometryType


class GeometryTypeInfo(msgspec.Struct, frozen=True, array_like=True):
    type: GeometryType
    has_z: bool = False
    has_m: bool = False
