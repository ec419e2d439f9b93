"""错误链节点：携带消息、回溯帧与原因的错误值。

Error chain node.

`Error` is a wrapper around lower level errors that adds context:
- a message supplied at every origin or wrap site
- a simplified backtrace captured when the node is constructed
- a label naming the wrapped cause's type
- exact-type inspection anywhere in the chain

Each node owns at most one cause, which is either another `Error` or any
foreign exception. Chains only grow by constructing a new outer node.
"""

from __future__ import annotations

import sys
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any, TypeVar

from witcher.backtrace import Frame, capture

if TYPE_CHECKING:
    from types import FrameType

    from witcher.config import RenderOptions
    from witcher.inspector import ChainPosition

E = TypeVar("E", bound=BaseException)

ERROR_TYPE = "witcher.Error"

_CANONICAL_NAMES = frozenset({
    "witcher.error.Error",
    "witcher.Error",
    "Exception",
    "BaseException",
})


def normalize_type_name(name: str) -> str:
    """Clean up a dotted type name for display.

    Strips reference sigils and generic parameters, collapses `<locals>`
    scopes, drops the `builtins.` namespace and substitutes the canonical
    label for this library's error and the generic exception types.

    Example:
        >>> normalize_type_name("builtins.OSError")
        'OSError'
        >>> normalize_type_name("app.load.<locals>.Missing")
        'app.load.Missing'
    """
    name = name.lstrip("&*").split("[", 1)[0]
    name = name.replace(".<locals>", "")
    if name.startswith("builtins."):
        name = name[len("builtins."):]
    if name in _CANONICAL_NAMES:
        return ERROR_TYPE
    return name or ERROR_TYPE


def type_name(obj: Any) -> str:
    """Get the normalized type label of an error instance or class."""
    cls = obj if isinstance(obj, type) else type(obj)
    if issubclass(cls, Error):
        return ERROR_TYPE
    return normalize_type_name(f"{cls.__module__}.{cls.__qualname__}")


def source_of(exc: BaseException) -> BaseException | None:
    """Get the nested cause of an error.

    Chain nodes expose only their owned cause. Foreign exceptions expose
    `__cause__`, or `__context__` when it is not suppressed.
    """
    if isinstance(exc, Error):
        return exc.cause
    if exc.__cause__ is not None:
        return exc.__cause__
    if not exc.__suppress_context__:
        return exc.__context__
    return None


def iter_sources(exc: BaseException) -> Iterator[BaseException]:
    """Yield every nested cause below exc, stopping on a cycle."""
    seen = {id(exc)}
    current = source_of(exc)
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = source_of(current)


class Error(Exception):
    """Context-carrying error.

    Attributes:
        message: Contextual message supplied at the origin or wrap site
        type_label: Normalized type name of the wrapped cause
        frames: Simplified backtrace captured at construction
        cause: Wrapped error, None for an origin

    Example:
        >>> try:
        ...     open("/missing")
        ... except OSError as exc:
        ...     err = Error.wrap(exc, "Failed to load config")
        >>> str(err)
        'Failed to load config'
    """

    def __init__(
        self,
        message: object = "",
        cause: BaseException | None = None,
        *,
        frame: FrameType | None = None,
    ) -> None:
        self._message = str(message)
        super().__init__(self._message)
        self._cause = cause
        self._type_label = type_name(cause) if cause is not None else ERROR_TYPE
        self._frames = capture(frame or sys._getframe(1))
        if cause is not None:
            self.__cause__ = cause

    @classmethod
    def new(cls, message: object) -> Error:
        """Create an origin error with no cause."""
        return cls(message)

    @classmethod
    def wrap(
        cls,
        cause: BaseException,
        message: object,
        *,
        frame: FrameType | None = None,
    ) -> Error:
        """Wrap an error with an additional contextual message.

        Args:
            cause: Error being wrapped
            message: Context for this wrap site
            frame: Frame the backtrace starts at, defaults to the caller
        """
        return cls(message, cause, frame=frame)

    @property
    def message(self) -> str:
        return self._message

    @property
    def cause(self) -> BaseException | None:
        return self._cause

    @property
    def type_label(self) -> str:
        return self._type_label

    @property
    def frames(self) -> tuple[Frame, ...]:
        return self._frames

    # Chain walking
    # ---------------------------------------------------------------------

    def chain(self) -> list[Error]:
        """Chain nodes from outermost to innermost.

        Stops at the first foreign cause or at the origin.
        """
        nodes = [self]
        current = self._cause
        while isinstance(current, Error) and current not in nodes:
            nodes.append(current)
            current = current.cause
        return nodes

    def first(self) -> Error:
        """The outermost node of the chain."""
        return self

    def ext(self) -> BaseException:
        """The first foreign cause in the chain, or this node when none exists."""
        cause = self.chain()[-1].cause
        return cause if cause is not None else self

    def last(self) -> BaseException:
        """The terminal cause of the whole chain, or this node when it has none."""
        terminal: BaseException = self
        for terminal in iter_sources(self):
            pass
        return terminal

    def sources(self) -> Iterator[BaseException]:
        """Iterate every nested cause, chain nodes and foreign errors alike."""
        return iter_sources(self)

    # Type inspection
    # ---------------------------------------------------------------------

    def is_type(self, target: type[BaseException], position: ChainPosition | str = "first") -> bool:
        """Check the exact type of the error at a chain position."""
        from witcher.inspector import is_type

        return is_type(self, target, position)

    def downcast(self, target: type[E], position: ChainPosition | str = "first") -> E | None:
        """Get the error at a chain position if its exact type is target."""
        from witcher.inspector import downcast

        return downcast(self, target, position)

    # Rendering
    # ---------------------------------------------------------------------

    def __str__(self) -> str:
        return self._message

    def __format__(self, format_spec: str) -> str:
        from witcher.formatter import render

        return render(self, format_spec)

    def detailed(self, options: RenderOptions | None = None) -> str:
        """Render every message in the chain plus its foreign causes."""
        from witcher.formatter import RenderMode, render

        return render(self, RenderMode.SUMMARIZED, options)

    def full(self, options: RenderOptions | None = None) -> str:
        """Render the chain with each link's frames."""
        from witcher.formatter import RenderMode, render

        return render(self, RenderMode.FULL, options)
