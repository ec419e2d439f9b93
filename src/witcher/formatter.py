"""错误链格式化：以简洁、摘要、完整三种级别渲染错误链。

Chain formatter.

Renders an error chain at three verbosity levels:
- TERSE: the outermost message only
- SUMMARIZED: every chain message plus the foreign cause block
- FULL: SUMMARIZED with the frames each link contributed
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from witcher.backtrace import Frame, filter_frames
from witcher.config import RenderOptions
from witcher.error import Error, iter_sources
from witcher.term import Colorizer

if TYPE_CHECKING:
    from collections.abc import Sequence

ERROR_PREFIX = " error: "
CAUSE_PREFIX = " cause: "


class RenderMode(str, Enum):
    """Verbosity of a rendered chain."""

    TERSE = "terse"
    SUMMARIZED = "summarized"
    FULL = "full"


# Format spec shorthands accepted by format(err, spec)
_FORMAT_SPECS: dict[str, RenderMode] = {
    "": RenderMode.TERSE,
    "s": RenderMode.TERSE,
    "d": RenderMode.SUMMARIZED,
    "f": RenderMode.FULL,
}


def resolve_mode(mode: RenderMode | str) -> RenderMode:
    """Resolve a render mode from an enum member, value or format spec."""
    if isinstance(mode, RenderMode):
        return mode
    if mode in _FORMAT_SPECS:
        return _FORMAT_SPECS[mode]
    try:
        return RenderMode(mode)
    except ValueError:
        raise ValueError(f"Unknown render mode {mode!r} for witcher.Error") from None


def render(
    err: Error,
    mode: RenderMode | str = RenderMode.TERSE,
    options: RenderOptions | None = None,
) -> str:
    """Render an error chain.

    Args:
        err: Outermost node of the chain
        mode: Verbosity level or format spec ("", "s", "d", "f")
        options: Rendering options, read from the environment when omitted

    Returns:
        Rendered text without a trailing newline
    """
    mode = resolve_mode(mode)
    if mode is RenderMode.TERSE:
        return err.message

    options = options or RenderOptions.from_env()
    colorizer = Colorizer(options.color)

    lines: list[str] = []
    outer_count: int | None = None
    for node in err.chain():
        lines.append(ERROR_PREFIX + colorizer.red(node.message))
        if mode is RenderMode.FULL:
            frames, outer_count = own_frames(node, outer_count, fullstack=options.fullstack)
            lines.extend(frame_lines(frames, colorizer))
    lines.extend(cause_lines(err, colorizer))
    return "\n".join(lines)


def terse(err: Error) -> str:
    return render(err, RenderMode.TERSE)


def summarized(err: Error, options: RenderOptions | None = None) -> str:
    return render(err, RenderMode.SUMMARIZED, options)


def full(err: Error, options: RenderOptions | None = None) -> str:
    return render(err, RenderMode.FULL, options)


def own_frames(
    node: Error,
    outer_count: int | None,
    fullstack: bool = False,
) -> tuple[list[Frame], int | None]:
    """Select the frames a link contributed.

    Dependency frames are dropped, then the frames shared with the wrapping
    link are cut off: an inner link keeps its first `len(own) - outer_count`
    frames, and always at least one.

    Args:
        node: Link being rendered
        outer_count: Filtered frame count of the link wrapping this one
        fullstack: Keep every frame unfiltered

    Returns:
        Frames to render and this link's filtered frame count
    """
    if fullstack:
        return list(node.frames), None

    frames = filter_frames(node.frames)
    count = len(frames)
    if outer_count is not None:
        frames = frames[: max(count - outer_count, 1)]
    return frames, count


def frame_lines(frames: Sequence[Frame], colorizer: Colorizer) -> list[str]:
    lines: list[str] = []
    for frame in frames:
        lines.append("symbol: " + colorizer.cyan(frame.symbol))
        lines.append("    at: " + frame.location)
    return lines


def cause_lines(err: Error, colorizer: Colorizer) -> list[str]:
    """Lines for the first foreign cause and each of its nested causes."""
    external = err.ext()
    if external is err:
        return []

    label = err.chain()[-1].type_label
    lines = [f"{CAUSE_PREFIX}{label}: {colorizer.red(external)}"]
    lines.extend(CAUSE_PREFIX + colorizer.red(nested) for nested in iter_sources(external))
    return lines
