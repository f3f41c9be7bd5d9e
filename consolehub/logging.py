"""CONSOLEHUB FILE PURPOSE
Purpose: diagnostics for consolehub itself (rule changes, bad levels, console swaps).
Hot path: no (only configuration paths report).
Feature flags: CONSOLEHUB_DEBUG.
Failure mode: never crash due to logging; silent unless the flag is on.
"""

from __future__ import annotations

import logging
from typing import Any

from consolehub.config import is_debug


def _configure() -> logging.Logger:
    logger = logging.getLogger("consolehub")
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    # module names which part of the hub reported, e.g. "consolehub.registry"
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s consolehub.%(module)s %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.INFO if is_debug() else logging.WARNING)
    return logger


logger = _configure()


def diag(event: str, level: int = logging.INFO, /, **fields: Any) -> None:
    """Report one ``EVENT key=value ...`` line when CONSOLEHUB_DEBUG is on."""

    if not is_debug():
        return
    detail = " ".join(f"{k}={v!r}" for k, v in fields.items())
    logger.log(level, "%s %s", event, detail, stacklevel=2)
