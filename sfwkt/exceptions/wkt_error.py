class WKTError(ValueError):
    """Base of all errors raised while reading or writing Well-Known Text."""


class LexicalError(WKTError):
    """Token has an unexpected shape, e.g. a non-numeric ordinate."""


class GrammarError(WKTError):
    """Delimiters or tokens appear in an invalid sequence."""


class UnknownTypeError(WKTError):
    """Header token is not a known geometry type or carries an unknown modifier."""


class AbstractTypeError(WKTError):
    """Header resolved to GEOMETRY, CURVE or SURFACE."""


class TypeMismatchError(WKTError):
    """Geometry type is incompatible with the slot or type it is required to fill."""


class InputTooBigError(WKTError):
    """Input text exceeds the configured size limit."""
