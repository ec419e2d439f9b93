"""回溯捕获：将解释器栈精简为帧序列并区分依赖帧。

Backtrace capture and simplification.

Converts the live interpreter stack into an ordered sequence of simplified
frames and classifies each frame as caller code or dependency code.
Frames are listed most recent call first.
"""

from __future__ import annotations

import itertools
import os
import sys
import traceback
from collections.abc import Iterable, Iterator
from pathlib import PurePath
from types import FrameType
from typing import Any, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

UNKNOWN = "<unknown>"

DEPENDENCY_FILE_PREFIXES: tuple[str, ...] = (
    "<frozen ",
)

DEPENDENCY_FILE_CONTAINS: tuple[str, ...] = (
    "/site-packages/",
    "/dist-packages/",
    "/lib/python3",
    "\\Lib\\",
)

DEPENDENCY_SYMBOL_PREFIXES: tuple[str, ...] = (
    "witcher.backtrace.",
    "witcher.error.",
    "witcher.formatter.",
    "witcher.inspector.",
    "witcher.wrapper.",
    "witcher.resilience.",
    "witcher.telemetry.",
    "_pytest.",
    "pytest.",
    "pluggy.",
    "runpy.",
    "importlib.",
    "threading.",
    "concurrent.futures.",
    "contextlib.",
    "unittest.",
    "asyncio.",
)


class RawFrame(NamedTuple):
    """One entry of the raw interpreter backtrace."""

    symbol: str | None
    filename: str | None
    line: int | None
    column: int | None


class Frame(BaseModel):
    """Simplified stack frame.

    Example:
        >>> Frame(symbol="app.main", filename="app.py", line=3).location
        'app.py:3'
    """

    model_config = ConfigDict(frozen=True)

    symbol: str = Field(default=UNKNOWN, description="Qualified function name")
    filename: str = Field(default=UNKNOWN, description="Simplified source path")
    line: int | None = Field(default=None, ge=0, description="Line number")
    column: int | None = Field(
        default=None, ge=0, description="Column number, only set with a line"
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_orphan_column(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("line") is None and data.get("column") is not None:
            return {**data, "column": None}
        return data

    @classmethod
    def from_raw(cls, raw: RawFrame, cwd: str | None = None) -> Frame:
        """Create a simplified frame from a raw backtrace entry."""
        return cls(
            symbol=raw.symbol or UNKNOWN,
            filename=simple_path(raw.filename, cwd),
            line=raw.line,
            column=raw.column,
        )

    @property
    def location(self) -> str:
        """Filename with ':line' and ':column' appended when known."""
        if self.line is None:
            return self.filename
        if self.column is None:
            return f"{self.filename}:{self.line}"
        return f"{self.filename}:{self.line}:{self.column}"

    def is_dependency(self) -> bool:
        """Check if this frame belongs to the runtime, this library or a dependency."""
        return (
            self.symbol.startswith(DEPENDENCY_SYMBOL_PREFIXES)
            or self.filename.startswith(DEPENDENCY_FILE_PREFIXES)
            or any(part in self.filename for part in DEPENDENCY_FILE_CONTAINS)
        )


def is_dependency(frame: Frame) -> bool:
    """Check if a frame is dependency code."""
    return frame.is_dependency()


def filter_frames(frames: Iterable[Frame]) -> list[Frame]:
    """Drop dependency frames, keeping caller code in order."""
    return [frame for frame in frames if not frame.is_dependency()]


def _current_dir() -> str | None:
    try:
        return os.getcwd()
    except OSError:
        return None


def simple_path(filename: str | None, cwd: str | None = None) -> str:
    """Shorten a path relative to the working directory when possible.

    Args:
        filename: Source path reported by the interpreter
        cwd: Directory to strip, defaults to the current working directory

    Returns:
        The relative path, the path unchanged, or "<unknown>"
    """
    if not filename:
        return UNKNOWN

    if cwd is None:
        cwd = _current_dir()
    if cwd:
        try:
            return str(PurePath(filename).relative_to(cwd))
        except ValueError:
            pass
    return filename


def _symbol(frame: FrameType) -> str:
    code = frame.f_code
    qualname = getattr(code, "co_qualname", code.co_name)
    module = frame.f_globals.get("__name__")
    return f"{module}.{qualname}" if module else qualname


def _column(frame: FrameType) -> int | None:
    positions = getattr(frame.f_code, "co_positions", None)
    if positions is None or frame.f_lasti < 0:
        return None
    position = next(itertools.islice(positions(), frame.f_lasti // 2, None), None)
    if position is None or position[2] is None:
        return None
    return position[2] + 1


def raw_stack(frame: FrameType | None = None) -> Iterator[RawFrame]:
    """Walk the live stack, most recent call first.

    Args:
        frame: Frame to start from, defaults to the caller
    """
    if frame is None:
        frame = sys._getframe(1)
    for current, lineno in traceback.walk_stack(frame):
        yield RawFrame(
            symbol=_symbol(current),
            filename=current.f_code.co_filename or None,
            line=lineno,
            column=_column(current),
        )


def capture(frame: FrameType | None = None, cwd: str | None = None) -> tuple[Frame, ...]:
    """Capture the current stack as simplified frames.

    Dependency frames are retained; filtering happens when rendering.

    Args:
        frame: Frame to start from, defaults to the caller
        cwd: Directory paths are made relative to
    """
    if frame is None:
        frame = sys._getframe(1)
    if cwd is None:
        cwd = _current_dir()
    return tuple(Frame.from_raw(raw, cwd) for raw in raw_stack(frame))
