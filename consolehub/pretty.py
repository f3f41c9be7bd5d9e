"""CONSOLEHUB FILE PURPOSE
Purpose: one-line rendering of structured log arguments.
Hot path: yes (compact mode inspects every non-primitive argument).
Feature flags: NO_COLOR (through the caller).
Failure mode: falls back to plain repr text when colors are off.
"""

from __future__ import annotations

import io
from typing import Any

from rich.console import Console
from rich.highlighter import ReprHighlighter
from rich.pretty import pretty_repr

MAX_LENGTH = 25
MAX_DEPTH = 4
# wide enough that pretty_repr never breaks a line
_UNBOUNDED_WIDTH = 1 << 30

_PRIMITIVES = (str, int, float, bool, type(None))

_highlighter = ReprHighlighter()


def is_primitive(value: Any) -> bool:
    return isinstance(value, _PRIMITIVES)


def inspect_value(value: Any, *, colors: bool = True) -> str:
    text = pretty_repr(
        value,
        max_width=_UNBOUNDED_WIDTH,
        max_length=MAX_LENGTH,
        max_depth=MAX_DEPTH,
    )
    if not colors:
        return text

    console = Console(
        file=io.StringIO(),
        force_terminal=True,
        color_system="standard",
        width=_UNBOUNDED_WIDTH,
    )
    with console.capture() as capture:
        console.print(_highlighter(text), end="", soft_wrap=True)
    return capture.get()
