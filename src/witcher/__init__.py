"""错误链：携带上下文、精简回溯与类型匹配的错误值。

witcher: context-carrying errors for Python.

Every wrap site adds a message and a simplified backtrace; the chain renders
tersely, summarized or with full frames, and any link can be matched by its
exact type.
"""
from __future__ import annotations

from witcher.backtrace import Frame, RawFrame, capture, filter_frames, is_dependency
from witcher.config import WITCHER_COLOR, WITCHER_FULLSTACK, RenderOptions, env_flag
from witcher.error import ERROR_TYPE, Error, source_of, type_name
from witcher.formatter import RenderMode, render
from witcher.inspector import ChainPosition, downcast, is_type, match_err
from witcher.resilience import Result, err_is, retry, retry_on
from witcher.wrapper import wrap

__version__ = "0.3.0"

__all__ = [
    # Chain
    "ERROR_TYPE",
    "Error",
    "source_of",
    "type_name",
    "wrap",
    # Frames
    "Frame",
    "RawFrame",
    "capture",
    "filter_frames",
    "is_dependency",
    # Rendering
    "RenderMode",
    "RenderOptions",
    "WITCHER_COLOR",
    "WITCHER_FULLSTACK",
    "env_flag",
    "render",
    # Inspection
    "ChainPosition",
    "downcast",
    "is_type",
    "match_err",
    # Retry
    "Result",
    "err_is",
    "retry",
    "retry_on",
    # Version
    "__version__",
]
