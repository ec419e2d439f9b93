"""
Type inspection over error chains.

Matches are by exact runtime type: a subclass or a same-named type from a
different module never matches. A mismatch yields None, never an exception.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from enum import Enum
from typing import Any, TypeVar

from witcher.error import Error

E = TypeVar("E", bound=BaseException)
R = TypeVar("R")


class ChainPosition(str, Enum):
    """Where in a chain to inspect."""

    FIRST = "first"
    EXTERNAL = "external"
    LAST = "last"


def at(value: BaseException, position: ChainPosition | str = ChainPosition.FIRST) -> BaseException:
    """Resolve the error at a chain position.

    Args:
        value: Error to inspect; foreign errors resolve to themselves
        position: FIRST (outermost), EXTERNAL (first foreign cause) or LAST (root cause)
    """
    position = ChainPosition(position)
    if not isinstance(value, Error):
        return value
    if position is ChainPosition.EXTERNAL:
        return value.ext()
    if position is ChainPosition.LAST:
        return value.last()
    return value.first()


def is_type(
    value: BaseException,
    target: type[BaseException],
    position: ChainPosition | str = ChainPosition.FIRST,
) -> bool:
    """Check whether the error at position is exactly of type target."""
    return type(at(value, position)) is target


def downcast(
    value: BaseException,
    target: type[E],
    position: ChainPosition | str = ChainPosition.FIRST,
) -> E | None:
    """Get the error at position typed as target, or None on mismatch.

    Example:
        >>> err = Error.wrap(OSError("disk full"), "Failed to save")
        >>> downcast(err, OSError, ChainPosition.LAST)
        OSError('disk full')
        >>> downcast(err, ValueError, ChainPosition.LAST) is None
        True
    """
    found = at(value, position)
    if type(found) is target:
        return found  # type: ignore[return-value]
    return None


def match_err(
    value: BaseException,
    arms: Sequence[tuple[type[BaseException], Callable[[Any], R]]],
    default: Callable[[BaseException], R],
    position: ChainPosition | str = ChainPosition.FIRST,
) -> R:
    """Dispatch on the exact type of the error at position.

    Arms are tried in order and the first matching type wins.

    Args:
        value: Error to inspect
        arms: (type, handler) pairs; the handler receives the typed error
        default: Handler for no match; receives the inspected error
        position: Chain position to inspect

    Returns:
        Whatever the invoked handler returns
    """
    found = at(value, position)
    for target, handler in arms:
        if type(found) is target:
            return handler(found)
    return default(found)
