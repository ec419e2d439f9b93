"""
Wrap escaping exceptions with context.
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from types import TracebackType
from typing import Any, TypeVar

from witcher.error import Error

F = TypeVar("F", bound=Callable[..., Any])


class wrap:
    """Re-raise any exception leaving the block as an `Error` with message.

    Works as a context manager and as a decorator. The original exception
    becomes the cause of the new chain node, and the node's frames start in
    the function holding the `with` block or in the decorated function.

    Example:
        >>> with wrap("Failed to slay beast"):
        ...     swing_sword()

        >>> @wrap("Failed during sword swing")
        ... def swing_sword(): ...
    """

    def __init__(self, message: object) -> None:
        self.message = message

    def __enter__(self) -> wrap:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        if not isinstance(exc, Exception):
            return False
        frame = tb.tb_frame if tb is not None else None
        raise Error.wrap(exc, self.message, frame=frame) from exc

    def __call__(self, func: F) -> F:
        @functools.wraps(func)
        def inner(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except Exception as exc:
                # First entry is this wrapper, the next one is func
                site = exc.__traceback__.tb_next if exc.__traceback__ else None
                frame = site.tb_frame if site is not None else None
                raise Error.wrap(exc, self.message, frame=frame) from exc

        return inner  # type: ignore[return-value]
