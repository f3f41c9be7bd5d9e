"""CONSOLEHUB FILE PURPOSE
Purpose: namespace registry, decorated loggers, root auto-discovery and the global switch.
Hot path: yes (every logging call goes through Logger._dispatch).
Feature flags: DEBUG/INFO/WARN/ERROR/LOG/OFF, HUB, CONSOLEHUB_DEBUG.
Failure mode: bad level names fail open (log everything); only buffer overflow raises.
"""

from __future__ import annotations

import logging
import os
import threading
from typing import Any, Iterable, Mapping

from consolehub import sink
from consolehub.callsite import CallSite, Resolver, resolve_call_site
from consolehub.config import env_patterns, hub_flag
from consolehub.formatter import ROOT, CaptureBuffer, Formatter
from consolehub.levels import DEBUG, ERROR, INFO, LEVELS, LOG, WARN, level_index
from consolehub.logging import diag
from consolehub.options import Options, coerce_options, merge_options
from consolehub.rules import RuleEngine

# frames between the resolver call in _dispatch and user code: _dispatch, public method
_CALLER_DEPTH = 2


class Logger:
    """Console-compatible handle for one namespace.

    ``debug``/``info``/``warn``/``error`` are gated by the global switch and the
    level; ``log`` is gated only when ``include_log`` resolves true, otherwise it
    goes straight to the sink. Anything else is looked up on the sink itself.
    """

    def __init__(self, hub: Hub, namespace: str, options: Options) -> None:
        self._hub = hub
        self.namespace = namespace
        self.options = options
        self._level = "info"
        self._ordinal = level_index(self._level)
        self._pinned = False

    # -- level ---------------------------------------------------------------

    @property
    def level(self) -> Any:
        return self._level

    @level.setter
    def level(self, name: Any) -> None:
        self._assign(name)
        self._pinned = True

    @property
    def pinned(self) -> bool:
        return self._pinned

    def _assign(self, name: Any) -> None:
        ordinal = level_index(name)
        if ordinal < 0:
            diag("LEVEL_UNKNOWN", logging.WARNING, ns=self.namespace, level=name)
        self._level = name
        self._ordinal = ordinal

    def enabled_for(self, level: str) -> bool:
        return self._hub.enabled and self._ordinal <= level_index(level)

    # -- options / sink ------------------------------------------------------

    @property
    def resolved(self) -> Options:
        return self.options.over(self._hub.defaults)

    @property
    def console(self) -> Any:
        return self.resolved.console or sink.CONSOLE

    @property
    def is_root(self) -> bool:
        return self.namespace == ROOT

    # -- console methods -----------------------------------------------------

    def debug(self, *args: Any) -> None:
        self._dispatch(DEBUG, args)

    def info(self, *args: Any) -> None:
        self._dispatch(INFO, args)

    def warn(self, *args: Any) -> None:
        self._dispatch(WARN, args)

    def error(self, *args: Any) -> None:
        self._dispatch(ERROR, args)

    warning = warn

    def log(self, *args: Any) -> None:
        if not self._hub.enabled:
            return
        if not self.resolved.include_log:
            self.console.log(*args)
            return
        self._dispatch(LOG, args)

    def trace(self, *args: Any) -> None:
        if self._hub.enabled:
            self.console.trace(*args)

    def __getattr__(self, name: str) -> Any:
        # not yet (or never) fully built: nothing to delegate to
        if name.startswith("_") or "options" not in self.__dict__:
            raise AttributeError(name)
        return getattr(self.console, name)

    def __repr__(self) -> str:
        return f"<Logger {self.namespace!r} level={self._level!r}>"

    # -- internals -----------------------------------------------------------

    def _dispatch(self, level: int, args: tuple[Any, ...]) -> None:
        hub = self._hub
        if not hub.enabled:
            return

        options = self.resolved
        site = None
        if options.file_line or self.is_root:
            site = hub.resolver(_CALLER_DEPTH)

        if self.is_root and site is not None:
            target = hub.discover(site.file)
            if target is not None:
                target._emit(level, args, site)
                return

        self._emit(level, args, site, options)

    def _emit(
        self,
        level: int,
        args: tuple[Any, ...],
        site: CallSite | None,
        options: Options | None = None,
    ) -> None:
        if self._ordinal > level:
            return
        if options is None:
            options = self.resolved
        out = self._hub.formatter.build(args, self.namespace, level, options, site)
        getattr(options.console or sink.CONSOLE, LEVELS[level])(*out)


class Hub:
    """Process-wide context: defaults, rules, logger cache, marks, buffer, switch.

    Lifecycle: ``Hub()`` is clean, ``init()`` reads rules from the environment,
    ``configure()`` reconfigures, ``reset()`` returns to clean state in place.
    """

    def __init__(self, defaults: Options | Mapping[str, Any] | None = None, resolver: Resolver = resolve_call_site) -> None:
        self.defaults = coerce_options(defaults)
        self.rules = RuleEngine()
        self.buffer = CaptureBuffer()
        self.formatter = Formatter(self.buffer)
        self.resolver = resolver
        self.enabled = True
        self._lock = threading.RLock()
        self._cache: dict[str, Logger] = {}
        self.root = self.get(ROOT)

    # -- lifecycle -----------------------------------------------------------

    def init(self) -> Hub:
        for level in LEVELS:
            source = env_patterns(level)
            if source is not None:
                self.configure(level, source)
        if hub_flag():
            self.setup(include_log=True)
            sink.set_console(self.root)
        return self

    def reset(self, defaults: Options | Mapping[str, Any] | None = None) -> None:
        with self._lock:
            self.defaults = coerce_options(defaults)
            self.rules.clear()
            self.buffer.clear()
            self.formatter.clear()
            self.enabled = True
            self._cache.clear()
            self.root = self.get(ROOT)

    def setup(self, **options: Any) -> Options:
        """Merge *options* into the hub-wide defaults."""

        with self._lock:
            self.defaults = merge_options(self.defaults, options)
            self._refresh()
        return self.defaults

    # -- rules ---------------------------------------------------------------

    def configure(self, level: str, patterns: str | Iterable[str] | None = None) -> None:
        if level_index(level) < 0:
            diag("RULES_LEVEL_UNKNOWN", logging.WARNING, level=level)
            return
        if patterns is None:
            patterns = env_patterns(level)
        with self._lock:
            applied = self.rules.configure(level, patterns)
            self._refresh()
        diag("RULES_CONFIGURED", level=level, patterns=list(applied))

    def _refresh(self) -> None:
        for instance in self._cache.values():
            if not instance.pinned:
                instance._assign(self._effective(instance))

    def _effective(self, instance: Logger) -> str:
        return self.rules.effective_level(instance.namespace, instance.resolved.default_level)

    # -- registry ------------------------------------------------------------

    def get(self, namespace: str, options: Options | Mapping[str, Any] | None = None, force_new: bool = False) -> Logger:
        ns = namespace.strip()
        with self._lock:
            instance = None if force_new else self._cache.get(ns)
            if instance is None:
                instance = self._create(ns, coerce_options(options))
            elif options is not None:
                update = coerce_options(options)
                instance.options = merge_options(instance.options, update)
                if update.level is not None:
                    instance.level = update.level
                elif not instance.pinned:
                    instance._assign(self._effective(instance))
            return instance

    def _create(self, namespace: str, options: Options) -> Logger:
        instance = Logger(self, namespace, options)
        if options.level is not None:
            instance.level = options.level
        else:
            instance._assign(self._effective(instance))
        self.formatter.mark(namespace)
        self._cache[namespace] = instance
        if namespace == ROOT:
            self.root = instance
        return instance

    def discover(self, file: str) -> Logger | None:
        """Registered logger whose root directory holds *file* (longest root wins)."""

        path = os.path.abspath(file)
        best: Logger | None = None
        best_len = -1
        for instance in list(self._cache.values()):
            root = instance.options.root
            if instance.is_root or not root:
                continue
            if path != root and not path.startswith(root.rstrip(os.sep) + os.sep):
                continue
            if len(root) > best_len:
                best, best_len = instance, len(root)
        return best

    # -- global switch -------------------------------------------------------

    def set_enabled(self, flag: bool) -> bool:
        previous, self.enabled = self.enabled, bool(flag)
        return previous


HUB = Hub().init()
