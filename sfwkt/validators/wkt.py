from typing import Annotated, Any

from pydantic import BeforeValidator, PlainSerializer

from sfwkt.lib.exceptions_context import raise_for
from sfwkt.lib.wkt_reader import WKTReader
from sfwkt.lib.wkt_writer import WKTWriter
from sfwkt.models.geometry import Geometry


def validate_wkt_geometry(value: Any) -> Geometry | None:
    """Validate a geometry given as WKT text or as an already built value."""
    if isinstance(value, Geometry):
        return value
    if isinstance(value, str):
        return WKTReader.read_geometry(value)
    raise_for.bad_geometry_value(type(value).__qualname__)


WKTGeometryValidator = BeforeValidator(validate_wkt_geometry)

WKTGeometry = Annotated[
    Geometry,
    WKTGeometryValidator,
    PlainSerializer(WKTWriter.write_geometry, return_type=str),
]
