"""CONSOLEHUB FILE PURPOSE
Purpose: build the argument list handed to the sink (prefix, tags, payload, elapsed time).
Hot path: yes (runs on every emitted call).
Feature flags: NO_COLOR.
Failure mode: only buffer overflow raises; missing call site => no file/line tag.
"""

from __future__ import annotations

import time
from typing import Any, Callable, Sequence

from consolehub import colors
from consolehub.callsite import CallSite
from consolehub.config import no_color
from consolehub.levels import ICONS, LEVELS
from consolehub.options import Options
from consolehub.pretty import inspect_value, is_primitive

ROOT = "*"
BUFFER_LIMIT = 1000


class BufferOverflowError(RuntimeError):
    pass


class CaptureBuffer(list):
    """Ordered ``(level_name, args)`` entries, capped at BUFFER_LIMIT."""

    def record(self, level_name: str, args: list[Any]) -> None:
        if len(self) >= BUFFER_LIMIT:
            raise BufferOverflowError(
                f"Buffer is only meant for tests; it has grown beyond {BUFFER_LIMIT:,} entries, "
                "so it was probably left on by mistake."
            )
        self.append((level_name, args))


def pick_icon(icons: bool | str | Sequence[str], level: int) -> str | None:
    if icons is True:
        return ICONS[level]
    if not icons:
        return None
    if isinstance(icons, str):
        return icons
    return icons[level] if 0 <= level < len(icons) else None


def _join(head: str | None, tail: str) -> str:
    if not head:
        return tail
    return f"{head} {tail}" if tail else head


class Formatter:
    def __init__(self, buffer: CaptureBuffer, clock: Callable[[], float] = time.perf_counter) -> None:
        self.buffer = buffer
        self._clock = clock
        self._marks: dict[str, float] = {}

    def mark(self, namespace: str) -> None:
        self._marks[namespace] = self._clock()

    def clear(self) -> None:
        self._marks.clear()

    def elapsed_ms(self, namespace: str) -> float:
        now = self._clock()
        then = self._marks.get(namespace, now)
        self._marks[namespace] = now
        return (now - then) * 1000.0

    def prefix(self, namespace: str, level: int, options: Options, site: CallSite | None) -> str:
        prefix = "" if namespace == ROOT else colors.render(namespace, bold=True)
        if options.file_line and site is not None:
            tag = colors.paint(f"[{site.basename}:{site.line}]", "white", underline=True)
            prefix = _join(tag, prefix)
        return _join(pick_icon(options.icons, level), prefix)

    def build(
        self,
        args: Sequence[Any],
        namespace: str,
        level: int,
        options: Options,
        site: CallSite | None = None,
    ) -> list[Any]:
        prefix = self.prefix(namespace, level, options, site)

        out = list(args)
        if options.compact:
            paint = not no_color()
            out = [a if is_primitive(a) else inspect_value(a, colors=paint) for a in out]

        if out and isinstance(out[0], str):
            out[0] = f"{prefix} {out[0]}" if prefix else out[0]
        elif prefix:
            out.insert(0, prefix)

        # every emission advances the mark, timed or not
        if options.time_diff:
            elapsed = self.elapsed_ms(namespace)
            out.append(colors.paint(f"+{elapsed:.2f}ms", colors.color_name(namespace)))
        else:
            self.mark(namespace)

        if options.buffer:
            self.buffer.record(LEVELS[level], out)
        return out
