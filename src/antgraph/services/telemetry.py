"""Telemetry primitives — Span, @traced, trace_span.

Off unless ``--verbose`` is given. When on, every ``@traced`` service call
becomes the root of a span tree. Stages inside the call open child spans
with :func:`trace_span` and record what the graph work produced:

* ``annotate(key, value)`` for results (``visits=3``, ``points=5``)
* ``tally(key, amount)`` for work counters (segment pairs checked, aligned
  antenna pairs)

The finished tree is logged and stored in ``ServiceResult.meta["telemetry"]``.
"""

from __future__ import annotations

import functools
import time
from collections import Counter
from collections.abc import Callable, Generator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from antgraph.services.result import ServiceResult

_verbose_enabled: ContextVar[bool] = ContextVar("_verbose_enabled", default=False)
_current_span: ContextVar[Span | None] = ContextVar("_current_span", default=None)

_log = structlog.get_logger("antgraph.telemetry")


@dataclass
class Span:
    """Timed stage of a service call."""

    name: str
    parent: Span | None = None
    children: list[Span] = field(default_factory=list)
    start_time: float = field(default_factory=time.perf_counter)
    end_time: float | None = None
    annotations: dict[str, Any] = field(default_factory=dict)
    counters: Counter[str] = field(default_factory=Counter)

    @property
    def duration_ms(self) -> float:
        if self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time) * 1000

    def end(self) -> None:
        self.end_time = time.perf_counter()

    def annotate(self, key: str, value: Any) -> None:
        self.annotations[key] = value

    def tally(self, key: str, amount: int = 1) -> None:
        """Add *amount* to the work counter *key*."""
        self.counters[key] += amount

    def totals(self) -> Counter[str]:
        """Counters summed over this span and all its descendants."""
        summed = Counter(self.counters)
        for child in self.children:
            summed.update(child.totals())
        return summed

    def to_dict(self) -> dict[str, Any]:
        node: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 2)}
        if self.annotations:
            node["annotations"] = dict(self.annotations)
        if self.counters:
            node["counters"] = dict(self.counters)
        if self.children:
            node["children"] = [child.to_dict() for child in self.children]
        return node


@contextmanager
def trace_span(name: str, **annotations: Any) -> Generator[Span | None]:
    """Open a child span under the active traced call.

    Keyword arguments become initial annotations. Yields None when telemetry
    is off or no traced call is active.
    """
    parent = _current_span.get() if _verbose_enabled.get() else None
    if parent is None:
        yield None
        return

    child = Span(name=name, parent=parent, annotations=dict(annotations))
    parent.children.append(child)
    token = _current_span.set(child)
    try:
        yield child
    finally:
        child.end()
        _current_span.reset(token)


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Decorator: trace a service method as the root span of its call.

    ServiceResults come back with the span tree merged into ``meta``; any
    other return value passes through untouched.
    """

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _verbose_enabled.get():
            return func(*args, **kwargs)

        root = Span(name=func.__qualname__)
        token = _current_span.set(root)
        ok = False
        try:
            result = func(*args, **kwargs)
            ok = result.ok if isinstance(result, ServiceResult) else True
        finally:
            root.end()
            _current_span.reset(token)
            _log_span(root, ok=ok)

        if isinstance(result, ServiceResult):
            return attach_telemetry(result, root)  # type: ignore[return-value]
        return result

    return wrapper


def attach_telemetry(result: ServiceResult, root: Span) -> ServiceResult:
    """Copy of the frozen *result* with *root*'s tree under ``meta["telemetry"]``."""
    meta = {**(result.meta or {}), "telemetry": root.to_dict()}
    return result.model_copy(update={"meta": meta})


def _log_span(root: Span, *, ok: bool) -> None:
    _log.debug(
        "span.complete",
        span_name=root.name,
        duration_ms=round(root.duration_ms, 2),
        ok=ok,
        stages=[child.name for child in root.children],
        **dict(root.totals()),
    )


def enable_telemetry() -> None:
    """Turn tracing on for the current context (``--verbose``)."""
    _verbose_enabled.set(True)


def disable_telemetry() -> None:
    _verbose_enabled.set(False)


def get_current_span() -> Span | None:
    """The innermost open span, or None when telemetry is off."""
    if not _verbose_enabled.get():
        return None
    return _current_span.get()
