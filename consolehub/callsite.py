"""CONSOLEHUB FILE PURPOSE
Purpose: resolve the source file/line of a caller frame.
Hot path: yes when file/line tagging or root discovery is on.
Feature flags: none.
Failure mode: short or missing stack => None (tag omitted).
"""

from __future__ import annotations

import inspect
import os
from dataclasses import dataclass
from typing import Callable, Optional


@dataclass(frozen=True)
class CallSite:
    file: str
    line: int

    @property
    def basename(self) -> str:
        return os.path.basename(self.file)


def resolve_call_site(skip: int = 0) -> CallSite | None:
    """Return the frame *skip* levels above the function calling this one.

    ``skip=0`` names the caller itself, ``skip=1`` its caller, and so on.
    """

    frame = inspect.currentframe()
    try:
        frame = frame.f_back if frame is not None else None
        for _ in range(skip):
            if frame is None:
                break
            frame = frame.f_back
        if frame is None:
            return None
        return CallSite(file=frame.f_code.co_filename, line=frame.f_lineno)
    finally:
        del frame


Resolver = Callable[[int], Optional[CallSite]]
