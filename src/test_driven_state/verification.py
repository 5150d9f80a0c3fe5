"""Replay traces against an implementation and report the outcome."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Literal

from test_driven_state.config import TdsSettings
from test_driven_state.errors import OutputMismatchError, TdsError, UnregisteredTransitionError
from test_driven_state.registry import (
    TransitionContext,
    TransitionEntry,
    find_entry,
    invoke,
    resolve,
)
from test_driven_state.stable_json import collect_keys, stable_equal, stable_stringify
from test_driven_state.trace import SENTINEL, Call, Step, Trace

if TYPE_CHECKING:
    from test_driven_state.program import Program

logger = logging.getLogger(__name__)

RecordKind = Literal["pass", "fail"]


@dataclass(frozen=True, slots=True)
class VerificationRecord:
    kind: RecordKind
    trace: Trace
    step: Step
    message: str | None = None
    error: TdsError | None = field(default=None, compare=False)

    @property
    def passed(self) -> bool:
        return self.kind == "pass"


async def _replay(
    trace: Trace, entries: tuple[TransitionEntry, ...]
) -> list[VerificationRecord]:
    records: list[VerificationRecord] = []
    seeded = False
    from_state = SENTINEL
    data: Any = None

    for index, entry in enumerate(trace.entries):
        if isinstance(entry, Call):
            logger.debug("Invoking call", extra={"trace": trace.name, "call": entry.label})
            await resolve(entry())
            continue

        if not seeded:
            seeded = True
            from_state = entry.name
            data = entry.output
            continue

        to_state = entry.name

        if entry.bypass:
            following = trace.next_step(index)
            logger.debug(
                "Bypassing step",
                extra={
                    "trace": trace.name,
                    "to_state": to_state,
                    "next_state": following.name if following else SENTINEL,
                },
            )
            records.append(VerificationRecord("pass", trace, entry))
            data = entry.output
            continue

        match = find_entry(entries, from_state, to_state)
        if match is None:
            missing = UnregisteredTransitionError(from_state, to_state)
            logger.warning(
                "Trace diverged: %s",
                missing,
                extra={"trace": trace.name, "from_state": from_state, "to_state": to_state},
            )
            records.append(VerificationRecord("fail", trace, entry, str(missing), missing))
            break

        next_state, output = await invoke(match, data, TransitionContext(from_state, to_state))

        if entry.output is not None and not stable_equal(output, entry.output):
            keys = collect_keys(output, entry.output)
            mismatch = OutputMismatchError(
                expected=stable_stringify(entry.output, keys),
                actual=stable_stringify(output, keys),
            )
            logger.warning(
                "Trace diverged: %s",
                mismatch,
                extra={"trace": trace.name, "from_state": from_state, "to_state": to_state},
            )
            records.append(VerificationRecord("fail", trace, entry, str(mismatch), mismatch))
            break

        following = trace.next_step(index)
        expected_next = following.name if following else SENTINEL
        if next_state != expected_next:
            logger.debug(
                "Handler chose a different next state than the trace",
                extra={"trace": trace.name, "next_state": next_state, "expected": expected_next},
            )

        records.append(VerificationRecord("pass", trace, entry))
        from_state = to_state
        data = output

    return records


async def verify_program(
    program: Program, entries: tuple[TransitionEntry, ...]
) -> list[VerificationRecord]:
    """Replay every trace of ``program`` in order against ``entries``.

    Missing transitions and output mismatches are recorded and stop only the
    trace they occur in. Exceptions raised by handlers or calls propagate.
    """

    records: list[VerificationRecord] = []
    for trace in program.traces:
        logger.info("Replaying trace", extra={"trace": trace.name})
        trace_records = await _replay(trace, entries)
        records.extend(trace_records)
        logger.info(
            "Replayed trace",
            extra={
                "trace": trace.name,
                "passed": sum(1 for r in trace_records if r.passed),
                "failed": sum(1 for r in trace_records if not r.passed),
            },
        )
    return records


def format_report(
    program: Program,
    records: list[VerificationRecord],
    settings: TdsSettings | None = None,
) -> str:
    """Render a per-trace, per-step summary of ``records``.

    Steps without a record were not reached because replay of their trace
    stopped earlier.
    """

    settings = settings or TdsSettings()
    lines: list[str] = []
    for trace in program.traces:
        lines.append(trace.name)
        for step in trace.steps:
            if step.is_sentinel:
                continue
            found = [r for r in records if r.trace is trace and r.step is step]
            failed = next((r for r in found if not r.passed), None)
            if failed is not None:
                lines.append(f"  {settings.fail_glyph} {step.name}: {failed.message}")
            elif found:
                lines.append(f"  {settings.pass_glyph} {step.name}")
            else:
                lines.append(f"  {settings.pending_glyph} {step.name}")
    return "\n".join(lines)
