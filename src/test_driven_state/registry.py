"""Transition registrations and handler invocation."""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import Any, TypeAlias

from test_driven_state.errors import InvalidHandlerResultError
from test_driven_state.trace import WILDCARD

HandlerResult: TypeAlias = tuple[str, Any] | tuple[str] | list[Any] | str


@dataclass(frozen=True, slots=True)
class TransitionContext:
    from_state: str
    to_state: str


Handler: TypeAlias = Callable[[Any, TransitionContext], HandlerResult | Awaitable[HandlerResult]]


@dataclass(frozen=True, slots=True)
class TransitionEntry:
    """A registered handler for ``from_state -> to_state``.

    Either side may be the wildcard ``"*"``.
    """

    from_state: str
    to_state: str
    handler: Handler

    def matches(self, from_state: str, to_state: str) -> bool:
        return self.from_state in (WILDCARD, from_state) and self.to_state in (WILDCARD, to_state)


def find_entry(
    entries: Iterable[TransitionEntry], from_state: str, to_state: str
) -> TransitionEntry | None:
    """Return the earliest registered entry matching both sides, if any.

    Concrete registrations do not take precedence over wildcards registered
    before them.
    """

    for entry in entries:
        if entry.matches(from_state, to_state):
            return entry
    return None


async def resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


def normalize_result(result: Any) -> tuple[str, Any]:
    if isinstance(result, str):
        return result, None
    if isinstance(result, (tuple, list)) and len(result) in (1, 2):
        next_state = result[0]
        output = result[1] if len(result) == 2 else None
        if isinstance(next_state, str):
            return next_state, output
    raise InvalidHandlerResultError(
        f"Handler must return (next_state, output), got {type(result).__name__}: {result!r}"
    )


async def invoke(entry: TransitionEntry, data: Any, context: TransitionContext) -> tuple[str, Any]:
    """Call ``entry.handler`` and await it when it returns an awaitable."""

    return normalize_result(await resolve(entry.handler(data, context)))
