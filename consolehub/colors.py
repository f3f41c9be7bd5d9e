"""CONSOLEHUB FILE PURPOSE
Purpose: deterministic namespace colors and the one escape-rendering helper.
Hot path: yes (every emitted prefix is painted).
Feature flags: NO_COLOR.
Failure mode: NO_COLOR set => plain text.
"""

from __future__ import annotations

from rich.color import ColorSystem
from rich.style import Style

from consolehub.config import no_color

PALETTE: tuple[str, ...] = ("red", "yellow", "blue", "magenta", "cyan")

_MASK = 0xFFFFFFFF


def _code_units(text: str):
    # UTF-16 view: astral characters count by their high surrogate
    for ch in text:
        cp = ord(ch)
        yield 0xD800 + ((cp - 0x10000) >> 10) if cp > 0xFFFF else cp


def djb2(text: str) -> int:
    """djb2, XOR variant, wrapped to an unsigned 32-bit value."""

    h = 5381
    for code in _code_units(text):
        h = ((h * 33) ^ code) & _MASK
    return h


def color_index(ns: str) -> int:
    return djb2(ns) % len(PALETTE)


def color_name(ns: str) -> str:
    return PALETTE[color_index(ns)]


def paint(text: str, color: str | None = None, *, bold: bool = False, underline: bool = False) -> str:
    if no_color():
        return text
    style = Style(color=color, bold=bold, underline=underline)
    return style.render(text, color_system=ColorSystem.STANDARD)


def render(ns: str, bold: bool = True) -> str:
    return paint(ns, color_name(ns), bold=bold)


def color(ns: str, apply: bool = False, bold: bool = True) -> str | int:
    """Palette index for *ns*, or the painted namespace when *apply* is set."""

    return render(ns, bold) if apply else color_index(ns)
