from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, cast, override

from sfwkt.exceptions import Exceptions

# library use needs no setup, so a default implementation is always installed
_CTX: ContextVar[Exceptions] = ContextVar('Exceptions', default=Exceptions())  # noqa: B039


@contextmanager
def exceptions_context(implementation: Exceptions):
    """
    Raise errors through the given implementation within the context.

    Readers and writers look the implementation up on every raise,
    so the override also applies to instances created before the context.
    """
    token = _CTX.set(implementation)
    try:
        yield
    finally:
        _CTX.reset(token)


class _RaiseFor:
    @override
    def __getattribute__(self, name: str) -> Any:
        return getattr(_CTX.get(), name)


raise_for = cast(Exceptions, cast(object, _RaiseFor()))
"""Proxy to the exceptions implementation active in the current context."""

__all__ = ('exceptions_context', 'raise_for')
