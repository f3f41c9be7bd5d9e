"""CONSOLEHUB FILE PURPOSE
Purpose: per-level namespace rules (exact, prefix glob, wildcard) and resolution.
Hot path: low (read on logger creation and on reconfiguration).
Feature flags: DEBUG/INFO/WARN/ERROR/LOG/OFF (through the caller).
Failure mode: no matching rule => caller's default level.
"""

from __future__ import annotations

import re
from typing import Any, Iterable

from consolehub.levels import LEVELS

_SPLIT_RE = re.compile(r"[\s,]+")


def parse_patterns(source: str | Iterable[str] | None) -> tuple[str, ...]:
    if source is None:
        return ()
    items = _SPLIT_RE.split(source.strip()) if isinstance(source, str) else source
    return tuple(p.strip() for p in items if p and p.strip())


def matches(pattern: str, namespace: str) -> bool:
    if pattern == "*":
        return True
    if pattern.endswith("*"):
        return namespace.startswith(pattern[:-1])
    return pattern == namespace


class RuleEngine:
    """Rule sets keyed by level name.

    Resolution walks the levels from ``off`` down to ``debug`` and returns the
    first level holding a matching pattern, so the most restrictive rule wins.
    """

    def __init__(self) -> None:
        self._rules: dict[str, tuple[str, ...]] = {}

    def configure(self, level: str, source: str | Iterable[str] | None) -> tuple[str, ...]:
        patterns = parse_patterns(source)
        if patterns:
            self._rules[level] = patterns
        else:
            self._rules.pop(level, None)
        return patterns

    def patterns(self, level: str) -> tuple[str, ...]:
        return self._rules.get(level, ())

    def clear(self) -> None:
        self._rules.clear()

    def effective_level(self, namespace: str, default: Any = "info") -> Any:
        for level in reversed(LEVELS):
            if any(matches(p, namespace) for p in self._rules.get(level, ())):
                return level
        return default
