import logging
import re
from collections.abc import Iterator
from typing import Self, TextIO

import cython
from sizestr import sizestr

from sfwkt.config import WKT_PARSE_MAX_SIZE
from sfwkt.lib.exceptions_context import raise_for

_logger = logging.getLogger(__name__)

# delimiters are always single tokens, everything else splits on whitespace
_TOKEN_RE = re.compile(r'[(),]|[^\s(),]+')
_NUMBER_RE = re.compile(
    r'[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|nan|inf(?:inity)?)',
    re.IGNORECASE,
)


@cython.cfunc
def _parse_number(token: str | None) -> cython.double:
    if token is None or _NUMBER_RE.fullmatch(token) is None:
        raise_for.wkt_bad_number(token)
    return float(token)


class TextReader:
    """
    Token source over Well-Known Text.

    >>> reader = TextReader('POINT(1 2)')
    >>> reader.next_token(), reader.peek_token(), reader.next_token()
    ('POINT', '(', '(')
    >>> reader.next_number(), reader.next_number()
    (1.0, 2.0)
    """

    __slots__ = ('_peeked', '_tokens')

    def __init__(self, source: str | TextIO) -> None:
        if isinstance(source, str):
            text = source
        else:
            text = source.read(WKT_PARSE_MAX_SIZE + 1)

        if len(text) > WKT_PARSE_MAX_SIZE:
            raise_for.wkt_input_too_big(len(text))

        _logger.debug('Reading %s WKT string', sizestr(len(text)))
        self._tokens: Iterator[str] = (match[0] for match in _TOKEN_RE.finditer(text))
        self._peeked: list[str] = []

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *_) -> None:
        self.close()

    def next_token(self) -> str | None:
        """Consume the next token, None if the text is exhausted."""
        if self._peeked:
            return self._peeked.pop()
        return next(self._tokens, None)

    def peek_token(self) -> str | None:
        """Return the next token without consuming it."""
        if not self._peeked:
            token = next(self._tokens, None)
            if token is None:
                return None
            self._peeked.append(token)
        return self._peeked[0]

    def next_number(self) -> float:
        """Consume the next token as a number."""
        return _parse_number(self.next_token())

    def is_exhausted(self) -> bool:
        return self.peek_token() is None

    def close(self) -> None:
        """Release the remaining tokens."""
        self._tokens = iter(())
        self._peeked.clear()
