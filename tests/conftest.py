from __future__ import annotations

from typing import Any

import pytest

from consolehub import HUB, set_console

RULE_ENV = ("DEBUG", "INFO", "WARN", "ERROR", "LOG", "OFF", "HUB")


class RecordingConsole:
    """Sink double that remembers every call by method name."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    def _record(self, name: str, args: tuple[Any, ...]) -> None:
        self.calls.append((name, args))

    def debug(self, *args: Any) -> None:
        self._record("debug", args)

    def info(self, *args: Any) -> None:
        self._record("info", args)

    def warn(self, *args: Any) -> None:
        self._record("warn", args)

    def error(self, *args: Any) -> None:
        self._record("error", args)

    def log(self, *args: Any) -> None:
        self._record("log", args)

    def trace(self, *args: Any) -> None:
        self._record("trace", args)

    def table(self, rows: Any) -> str:
        self._record("table", (rows,))
        return "table"

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]


@pytest.fixture(autouse=True)
def fresh_hub(monkeypatch):
    for name in RULE_ENV:
        monkeypatch.delenv(name, raising=False)
    HUB.reset()
    yield HUB
    HUB.reset()
    set_console(None)


@pytest.fixture
def sink() -> RecordingConsole:
    console = RecordingConsole()
    HUB.setup(console=console)
    return console


@pytest.fixture
def plain(monkeypatch) -> None:
    monkeypatch.setenv("NO_COLOR", "1")
