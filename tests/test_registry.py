from __future__ import annotations

import inspect
import re
import threading
import time

import pytest

from consolehub import BUFFER, BufferOverflowError, HUB, hub, configure, set_enabled, setup
from consolehub.colors import render
from consolehub.formatter import CaptureBuffer, Formatter
from consolehub.options import Options
from consolehub.registry import Hub

QUIET = {"file_line": False, "time_diff": False, "buffer": True}


def test_same_namespace_returns_same_instance() -> None:
    a = hub("x")
    b = hub("x")
    assert a is b
    a.level = "error"
    assert b.level == "error"


def test_level_change_is_per_namespace() -> None:
    hub("x").level = "error"
    assert hub("y").level == "info"


def test_basic_default_info_and_log_untouched(sink) -> None:
    setup(icons=True, **QUIET)
    log = hub("test")

    log.debug("debug")
    log.info("info")
    log.warn("warn")
    log.error("error")
    log.log("log")

    prefix = render("test")
    assert BUFFER == [
        ("info", ["🔵 " + prefix + " info"]),
        ("warn", ["🟡 " + prefix + " warn"]),
        ("error", ["🔴 " + prefix + " error"]),
    ]
    assert sink.names() == ["info", "warn", "error", "log"]
    assert sink.calls[-1] == ("log", ("log",))


@pytest.mark.parametrize("level,expected", [
    ("debug", ["debug", "info", "warn", "error"]),
    ("info", ["info", "warn", "error"]),
    ("warn", ["warn", "error"]),
    ("error", ["error"]),
    ("off", []),
])
def test_level_gating(sink, level, expected) -> None:
    setup(**QUIET)
    log = hub("gate", {"level": level})
    for name in ("debug", "info", "warn", "error"):
        getattr(log, name)(name)
    assert [entry[0] for entry in BUFFER] == expected


def test_unknown_level_fails_open(sink) -> None:
    setup(**QUIET)
    log = hub("loud")
    log.level = "verbose"
    assert log.level == "verbose"
    log.debug("d")
    log.error("e")
    assert [entry[0] for entry in BUFFER] == ["debug", "error"]


def test_glob_rule_enables_debug(sink) -> None:
    setup(**QUIET)
    configure("debug", "f*")
    hub("foo").debug("yes")
    hub("bar").debug("no")
    assert len(BUFFER) == 1
    assert "yes" in BUFFER[0][1][0]


def test_reconfiguration_reaches_existing_instances(sink) -> None:
    setup(**QUIET)
    a, b = hub("a"), hub("b")
    configure("off", "*")
    a.error("x")
    b.error("y")
    assert BUFFER == []
    assert a.level == "off"
    configure("off", "")
    assert a.level == "info"


def test_explicit_level_survives_reconfiguration() -> None:
    log = hub("pinned")
    log.level = "debug"
    configure("off", "*")
    assert log.level == "debug"
    assert log.pinned
    assert hub("pinned", force_new=True).level == "off"


def test_default_level_option(sink) -> None:
    assert hub("quiet", {"default_level": "warn"}).level == "warn"
    configure("debug", "quiet")
    assert hub("quiet").level == "debug"


def test_options_merge_into_existing_instance() -> None:
    log = hub("merge", {"icons": False})
    hub("merge", {"compact": False})
    assert log.options.explicit() == {"icons": False, "compact": False}
    assert log.resolved.time_diff is True


def test_force_new_replaces_cached_instance() -> None:
    first = hub("fresh")
    second = hub("fresh", force_new=True)
    assert first is not second
    assert hub("fresh") is second


def test_global_switch_silences_everything(sink) -> None:
    setup(include_log=True, **QUIET)
    log = hub("sw", {"level": "debug"})
    assert set_enabled(False) is True
    log.debug("a")
    log.error("b")
    log.log("c")
    log.trace("d")
    assert sink.calls == []
    assert BUFFER == []
    assert set_enabled(True) is False
    log.error("b")
    assert sink.names() == ["error"]


def test_log_bypasses_levels_by_default(sink) -> None:
    setup(**QUIET)
    hub("bypass", {"level": "off"}).log("raw", {"a": 1})
    assert sink.calls == [("log", ("raw", {"a": 1}))]
    assert BUFFER == []


def test_log_is_gated_when_included(sink, plain) -> None:
    setup(include_log=True, **QUIET)
    log = hub("incl")
    log.log("hello")
    assert BUFFER == [("log", ["📣 incl hello"])]
    log.level = "off"
    log.log("silenced")
    assert len(BUFFER) == 1


def test_trace_and_unknown_methods_delegate_to_sink(sink) -> None:
    log = hub("deleg")
    log.trace("t", 1)
    assert log.table([1, 2]) == "table"
    assert sink.calls == [("trace", ("t", 1)), ("table", ([1, 2],))]


def test_enabled_for_reflects_level_and_switch() -> None:
    log = hub("q", {"level": "warn"})
    assert not log.enabled_for("info")
    assert log.enabled_for("error")
    set_enabled(False)
    assert not log.enabled_for("error")


def test_buffer_overflow_is_fatal(sink) -> None:
    setup(**QUIET)
    log = hub("flood")
    for i in range(1000):
        log.info(i)
    with pytest.raises(BufferOverflowError):
        log.info("one too many")
    assert len(BUFFER) == 1000


def test_time_diff_tracks_elapsed_time(sink, plain) -> None:
    setup(file_line=False, buffer=True)
    log = hub("timer", {"level": "debug"})
    log.debug("first")
    time.sleep(0.01)
    log.debug("second")
    token = BUFFER[1][1][-1]
    match = re.fullmatch(r"\+(\d+\.\d{2})ms", token)
    assert match is not None
    assert float(match.group(1)) >= 9.0


def test_file_line_names_the_calling_line(sink, plain) -> None:
    setup(file_line=True, icons=False, time_diff=False, buffer=True)
    log = hub("where")
    line = inspect.currentframe().f_lineno + 1
    log.info("here")
    assert BUFFER[0][1] == [f"[test_registry.py:{line}] where here"]


def test_missing_call_site_omits_tag(plain) -> None:
    local = Hub({"icons": False, "time_diff": False, "buffer": True, "console": _Null()}, resolver=lambda skip: None)
    local.get("nosite").info("msg")
    assert local.buffer == [("info", ["nosite msg"])]


def test_structured_values_inspected_on_one_line(sink, plain) -> None:
    setup(**QUIET)
    people = [{"name": f"Person {i}", "age": i} for i in range(256)]
    hub("objs").info("people: ", people)
    args = BUFFER[0][1]
    assert len(BUFFER) == 1
    assert isinstance(args[1], str)
    assert "\n" not in args[1]
    assert len(args[1].split("Person")) == 26


def test_compact_off_passes_objects_through(sink) -> None:
    setup(compact=False, **QUIET)
    payload = {"k": [1, 2]}
    hub("raw").info("x", payload)
    assert sink.calls[0][1][1] is payload


def test_non_string_first_argument_gets_own_prefix(sink, plain) -> None:
    setup(icons=False, **QUIET)
    hub("num").info(42, "x")
    assert BUFFER[0][1] == ["num", 42, "x"]


def test_root_namespace_has_no_prefix(sink, plain) -> None:
    setup(icons=False, **QUIET)
    root = hub("*")
    assert root is HUB.root
    root.info("hi")
    root.info({"a": 1})
    assert BUFFER == [("info", ["hi"]), ("info", ["{'a': 1}"])]


def test_custom_icons(sink, plain) -> None:
    setup(**QUIET)
    hub("one", {"icons": "*"}).info("x")
    hub("many", {"icons": ["d", "i"]}).info("y")
    hub("short", {"icons": ["d"]}).info("z")
    assert [entry[1][0] for entry in BUFFER] == ["* one x", "i many y", "short z"]


class _Null:
    def __getattr__(self, name):
        return lambda *args: None


def test_untimed_calls_still_advance_the_mark(plain) -> None:
    now = {"t": 0.0}
    formatter = Formatter(CaptureBuffer(), clock=lambda: now["t"])
    untimed = Options(icons=False, file_line=False, time_diff=False)
    timed = Options(icons=False, file_line=False, time_diff=True)

    formatter.mark("clock")
    now["t"] = 0.05
    assert formatter.build(["a"], "clock", 1, untimed) == ["clock a"]
    assert formatter.build(["b"], "clock", 1, timed) == ["clock b", "+0.00ms"]
    now["t"] = 0.0625
    assert formatter.build(["c"], "clock", 1, timed)[-1] == "+12.50ms"


def test_concurrent_first_lookup_creates_one_instance() -> None:
    workers = 16
    barrier = threading.Barrier(workers)
    seen = []

    def lookup() -> None:
        barrier.wait()
        seen.append(hub("race"))

    threads = [threading.Thread(target=lookup) for _ in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(seen) == workers
    assert all(instance is seen[0] for instance in seen)
