"""Programs: a set of traces plus the state graph derived from them."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from test_driven_state.chart import render_chart
from test_driven_state.trace import SENTINEL, Step, Trace


class Program:
    """An immutable collection of traces.

    ``states`` and ``transitions`` are derived once at construction:

    - ``states``: distinct non-sentinel step names, in first-seen order.
    - ``transitions``: ``(from, to)`` for every pair of adjacent steps in every
      trace, in trace order. Calls do not break adjacency. Pairs repeated across
      traces are kept.
    """

    __slots__ = ("_traces", "_states", "_transitions")

    def __init__(self, traces: Iterable[Trace] = ()) -> None:
        named: list[Trace] = []
        for position, trace in enumerate(traces, start=1):
            named.append(trace if trace.name else replace(trace, name=f"Trace {position}"))
        self._traces = tuple(named)

        states: dict[str, None] = {}
        transitions: list[tuple[str, str]] = []
        for trace in self._traces:
            for index, entry in enumerate(trace.entries):
                if not isinstance(entry, Step):
                    continue
                if entry.name != SENTINEL:
                    states.setdefault(entry.name, None)
                following = trace.next_step(index)
                if following is not None:
                    transitions.append((entry.name, following.name))

        self._states = tuple(states)
        self._transitions = tuple(transitions)

    @property
    def traces(self) -> tuple[Trace, ...]:
        return self._traces

    @property
    def states(self) -> tuple[str, ...]:
        return self._states

    @property
    def transitions(self) -> tuple[tuple[str, str], ...]:
        return self._transitions

    def trace(self, name: str) -> Trace:
        for trace in self._traces:
            if trace.name == name:
                return trace
        raise KeyError(name)

    def chart(self, *, distinct: bool = False) -> str:
        return render_chart(self, distinct=distinct)

    def __repr__(self) -> str:
        return f"Program(traces={len(self._traces)}, states={list(self._states)!r})"
