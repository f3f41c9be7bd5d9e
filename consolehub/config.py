"""CONSOLEHUB FILE PURPOSE
Purpose: environment configuration helpers (safe defaults).
Hot path: yes (NO_COLOR is read on every painted call; lightweight).
Feature flags: DEBUG/INFO/WARN/ERROR/LOG/OFF, HUB, NO_COLOR, CONSOLEHUB_DEBUG.
Failure mode: safe defaults when unset.
"""

from __future__ import annotations

import os

_TRUTHY = frozenset(("1", "true", "yes", "on"))


def env_flag(name: str, default: str = "0") -> bool:
    return (os.getenv(name) or default).strip().lower() in _TRUTHY


def is_debug() -> bool:
    return env_flag("CONSOLEHUB_DEBUG")


def no_color() -> bool:
    # presence alone disables color, whatever the value
    return os.getenv("NO_COLOR") is not None


def hub_flag() -> bool:
    return os.getenv("HUB") is not None


def env_patterns(level: str) -> str | None:
    """Rule patterns for *level* from the like-named, upper-cased variable."""

    return os.getenv(level.upper())
