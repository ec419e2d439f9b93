"""
Terminal capability detection and emphasis styling.
"""

from __future__ import annotations

import sys

from rich.console import Console
from rich.text import Text

from witcher.config import WITCHER_COLOR, env_flag

RED = "bright_red"
CYAN = "bright_cyan"


def is_interactive_terminal() -> bool:
    """Check whether stdout is attached to an interactive terminal."""
    return Console(file=sys.stdout).is_terminal


def color_enabled(default: bool) -> bool:
    """Check whether color output is enabled.

    Args:
        default: Value used when WITCHER_COLOR is not set

    Returns:
        The parsed WITCHER_COLOR toggle or the default
    """
    return env_flag(WITCHER_COLOR, default)


class Colorizer:
    """Applies ANSI styles to text when color is enabled.

    Example:
        >>> Colorizer(False).red("oh no")
        'oh no'
    """

    def __init__(self, enabled: bool) -> None:
        self._enabled = enabled
        self._console = Console(
            force_terminal=True,
            color_system="standard",
            no_color=False,
            highlight=False,
            width=1 << 16,
        )

    @property
    def enabled(self) -> bool:
        return self._enabled

    def style(self, msg: object, style: str) -> str:
        """Render msg with the given rich style, or unchanged when disabled."""
        text = str(msg)
        if not self._enabled:
            return text
        with self._console.capture() as capture:
            self._console.print(Text(text, style=style), end="", soft_wrap=True)
        return capture.get()

    def red(self, msg: object) -> str:
        return self.style(msg, RED)

    def cyan(self, msg: object) -> str:
        return self.style(msg, CYAN)
