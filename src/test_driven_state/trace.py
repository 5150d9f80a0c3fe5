"""Declarative trace model: steps, side-effect calls and traces."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field, replace
from typing import Any, TypeAlias

SENTINEL = "@"
WILDCARD = "*"


@dataclass(frozen=True, slots=True)
class StepOptions:
    """Expectations attached to a step.

    ``output`` of ``None`` means the step's output is not checked. A ``bypass``
    step is never dispatched: its declared output flows straight into the next
    step.
    """

    output: Any | None = None
    bypass: bool = False


@dataclass(frozen=True, slots=True)
class Step:
    name: str
    options: StepOptions = field(default_factory=StepOptions)

    @property
    def output(self) -> Any | None:
        return self.options.output

    @property
    def bypass(self) -> bool:
        return self.options.bypass

    @property
    def is_sentinel(self) -> bool:
        return self.name == SENTINEL


@dataclass(frozen=True, slots=True)
class Call:
    """A side-effecting action run in trace order during verification."""

    fn: Callable[[], Any | Awaitable[Any]]
    label: str = ""

    def __call__(self) -> Any | Awaitable[Any]:
        return self.fn()


Entry: TypeAlias = Step | Call


@dataclass(frozen=True, slots=True)
class Trace:
    """One named example path through a machine.

    Builder methods never mutate; each returns a new trace.
    """

    name: str = ""
    entries: tuple[Entry, ...] = ()

    @classmethod
    def with_input(cls, output: Any, *, name: str = "") -> Trace:
        return cls(name=name, entries=(Step(SENTINEL, StepOptions(output=output)),))

    def step(self, name: str, *, output: Any | None = None, bypass: bool = False) -> Trace:
        return replace(
            self, entries=(*self.entries, Step(name, StepOptions(output=output, bypass=bypass)))
        )

    def call(self, fn: Callable[[], Any | Awaitable[Any]], *, label: str = "") -> Trace:
        return replace(self, entries=(*self.entries, Call(fn, label=label)))

    def named(self, name: str) -> Trace:
        return replace(self, name=name)

    @property
    def steps(self) -> list[Step]:
        return [e for e in self.entries if isinstance(e, Step)]

    def next_step(self, index: int) -> Step | None:
        """Return the first Step after ``entries[index]``, skipping Calls."""

        for entry in self.entries[index + 1 :]:
            if isinstance(entry, Step):
                return entry
        return None
