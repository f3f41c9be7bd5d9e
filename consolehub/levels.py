"""CONSOLEHUB FILE PURPOSE
Purpose: level names, ordinals and default icons.
Hot path: yes (ordinal lookups on every level change).
Feature flags: none.
Failure mode: unknown level => ordinal -1 (passes every gate).
"""

from __future__ import annotations

LEVELS: tuple[str, ...] = ("debug", "info", "warn", "error", "log", "off")
ICONS: tuple[str, ...] = ("🟢", "🔵", "🟡", "🔴", "📣", "🔕")

DEBUG, INFO, WARN, ERROR, LOG, OFF = range(len(LEVELS))


def level_index(name: object) -> int:
    try:
        return LEVELS.index(name)  # type: ignore[arg-type]
    except ValueError:
        return -1
