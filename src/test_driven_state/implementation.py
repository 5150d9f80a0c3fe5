"""Implementations bind transition handlers to a program."""

from __future__ import annotations

import logging
from typing import Any

from test_driven_state.config import TdsSettings
from test_driven_state.errors import (
    MissingProgramError,
    StepLimitExceededError,
    TraceVerificationError,
    UnregisteredTransitionError,
)
from test_driven_state.program import Program
from test_driven_state.registry import (
    Handler,
    TransitionContext,
    TransitionEntry,
    find_entry,
    invoke,
)
from test_driven_state.trace import SENTINEL, WILDCARD
from test_driven_state.verification import VerificationRecord, format_report, verify_program

logger = logging.getLogger(__name__)


class Implementation:
    """A program plus an ordered registry of transition handlers.

    Registration is copy-on-write: `transition` and `state` return a new
    Implementation and leave this one untouched. The program may be omitted and
    supplied later to `verify`/`test` instead.

    Handlers are called as ``handler(input, context)`` and return
    ``(next_state, output)``; they may be plain functions or coroutines.
    """

    def __init__(
        self,
        program: Program | None = None,
        transitions: tuple[TransitionEntry, ...] = (),
    ) -> None:
        self._program = program
        self._transitions = tuple(transitions)
        self.current_state: str | None = None

    @property
    def program(self) -> Program | None:
        return self._program

    @property
    def transitions(self) -> tuple[TransitionEntry, ...]:
        return self._transitions

    def bind(self, program: Program) -> Implementation:
        return Implementation(program, self._transitions)

    def transition(self, from_state: str, to_state: str, handler: Handler) -> Implementation:
        entry = TransitionEntry(from_state, to_state, handler)
        return Implementation(self._program, (*self._transitions, entry))

    def state(self, to_state: str, handler: Handler) -> Implementation:
        return self.transition(WILDCARD, to_state, handler)

    def find_transition(self, from_state: str, to_state: str) -> TransitionEntry | None:
        return find_entry(self._transitions, from_state, to_state)

    async def execute(self, from_state: str, to_state: str, data: Any) -> tuple[str, Any]:
        """Dispatch a single transition and return ``(next_state, output)``."""

        entry = self.find_transition(from_state, to_state)
        if entry is None:
            raise UnregisteredTransitionError(from_state, to_state)

        logger.debug(
            "Dispatching transition",
            extra={"from_state": from_state, "to_state": to_state},
        )
        result = await invoke(entry, data, TransitionContext(from_state, to_state))
        self.current_state = to_state
        return result

    async def run(
        self,
        from_state: str,
        to_state: str,
        data: Any,
        *,
        max_steps: int | None = None,
    ) -> Any:
        """Drive the machine until a handler returns the ``"@"`` sentinel.

        Each output becomes the next input. There is no built-in timeout; wrap
        the call in ``asyncio.wait_for`` if handlers may never settle.
        """

        steps = 0
        while to_state != SENTINEL:
            if max_steps is not None and steps >= max_steps:
                raise StepLimitExceededError(
                    f"Run did not reach {SENTINEL} within {max_steps} steps "
                    f"(stopped at {from_state} -> {to_state})"
                )
            next_state, data = await self.execute(from_state, to_state, data)
            from_state, to_state = to_state, next_state
            steps += 1
        return data

    def _resolve_program(self, program: Program | None) -> Program:
        resolved = program if program is not None else self._program
        if resolved is None:
            raise MissingProgramError()
        return resolved

    async def verify(self, program: Program | None = None) -> list[VerificationRecord]:
        """Replay every trace and return one pass/fail record per replayed step."""

        return await verify_program(self._resolve_program(program), self._transitions)

    async def test(
        self,
        program: Program | None = None,
        *,
        settings: TdsSettings | None = None,
    ) -> None:
        """Verify and raise `TraceVerificationError` if any record failed."""

        resolved = self._resolve_program(program)
        records = await verify_program(resolved, self._transitions)
        if all(record.passed for record in records):
            return
        raise TraceVerificationError(format_report(resolved, records, settings), records)

    def chart(self, *, distinct: bool = False) -> str:
        return self._resolve_program(None).chart(distinct=distinct)

    def __repr__(self) -> str:
        return (
            f"Implementation(program={self._program!r}, "
            f"transitions={len(self._transitions)}, current_state={self.current_state!r})"
        )
