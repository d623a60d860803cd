from sfwkt.exceptions.conversion_mixin import ConversionExceptionsMixin
from sfwkt.exceptions.wkt_mixin import WKTExceptionsMixin


class Exceptions(
    ConversionExceptionsMixin,
    WKTExceptionsMixin,
): ...
