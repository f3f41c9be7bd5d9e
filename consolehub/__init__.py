"""Namespaced console logging.

A spiritual successor to debug-js for Python: every namespace gets a
console-compatible logger whose ``debug``/``info``/``warn``/``error`` calls are
gated by rules read from like-named environment variables (``DEBUG=app:*``),
prefixed with a colored namespace, an icon, an optional ``[file:line]`` tag and
a trailing ``+X.XXms`` since the previous call. ``log`` is never touched unless
``include_log`` is switched on.

    >>> from consolehub import hub
    >>> log = hub("app:db")
    >>> log.info("connected", {"host": "localhost"})
"""

from consolehub.colors import color
from consolehub.formatter import BUFFER_LIMIT, BufferOverflowError
from consolehub.levels import ICONS, LEVELS
from consolehub.options import Options
from consolehub.registry import HUB, Hub, Logger
from consolehub.sink import CONSOLE, Console, get_console, replaced_console, set_console

BUFFER = HUB.buffer

hub = HUB.get
get_logger = HUB.get
configure = HUB.configure
setup = HUB.setup
set_enabled = HUB.set_enabled
reset = HUB.reset


def is_enabled() -> bool:
    return HUB.enabled


def root() -> Logger:
    return HUB.root


__all__ = [
    "BUFFER",
    "BUFFER_LIMIT",
    "BufferOverflowError",
    "CONSOLE",
    "Console",
    "HUB",
    "Hub",
    "ICONS",
    "LEVELS",
    "Logger",
    "Options",
    "color",
    "configure",
    "get_console",
    "get_logger",
    "hub",
    "is_enabled",
    "replaced_console",
    "reset",
    "root",
    "set_console",
    "set_enabled",
    "setup",
]
