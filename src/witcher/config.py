"""
Configuration for witcher rendering.

Values are read from environment variables at render time and handed to the
formatter as an explicit RenderOptions instance.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

# Environment variable name for enabling/disabling color
WITCHER_COLOR = "WITCHER_COLOR"

# Environment variable name for enabling/disabling fullstack tracing
WITCHER_FULLSTACK = "WITCHER_FULLSTACK"

_DISABLED_VALUES = frozenset({"false", "0"})


def parse_flag(value: str | None, default: bool = False) -> bool:
    """Interpret a boolean-like configuration value.

    Args:
        value: Raw value, None when the variable is absent
        default: Result for an absent value

    Returns:
        False for "false" or "0" (case-insensitive), True for anything else
    """
    if value is None:
        return default
    return value.strip().lower() not in _DISABLED_VALUES


def env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean-like toggle from the environment."""
    return parse_flag(os.getenv(name), default)


@dataclass(frozen=True)
class RenderOptions:
    """Options consumed by the chain formatter.

    Attributes:
        color: Apply emphasis styling to messages and symbols
        fullstack: Show every frame of every link, unfiltered
    """

    color: bool = False
    fullstack: bool = False

    @classmethod
    def plain(cls) -> RenderOptions:
        """Colorless, filtered rendering."""
        return cls()

    @classmethod
    def from_env(cls) -> RenderOptions:
        """Create options from environment variables.

        Color defaults to whether stdout is an interactive terminal.
        """
        from witcher.term import color_enabled, is_interactive_terminal

        return cls(
            color=color_enabled(is_interactive_terminal()),
            fullstack=env_flag(WITCHER_FULLSTACK),
        )
