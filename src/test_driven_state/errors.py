"""Error types raised (or recorded) by the trace engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from test_driven_state.verification import VerificationRecord


class TdsError(Exception):
    pass


class UnregisteredTransitionError(TdsError, LookupError):
    def __init__(self, from_state: str, to_state: str) -> None:
        super().__init__(f"No transition from {from_state} to {to_state}")
        self.from_state = from_state
        self.to_state = to_state


class OutputMismatchError(TdsError):
    """Declared and actual outputs differ.

    Only used to build failure records during verification; never raised.
    """

    def __init__(self, expected: str, actual: str) -> None:
        super().__init__(f"Expected output {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


class MissingProgramError(TdsError):
    def __init__(self) -> None:
        super().__init__("No program to verify: pass one or bind it to the implementation")


class InvalidHandlerResultError(TdsError, TypeError):
    pass


class StepLimitExceededError(TdsError, RuntimeError):
    pass


class TraceVerificationError(TdsError, AssertionError):
    """Raised by ``Implementation.test`` when any trace diverged."""

    def __init__(self, report: str, records: list[VerificationRecord]) -> None:
        super().__init__(report)
        self.report = report
        self.records = records


class ObjectLoadError(TdsError, ImportError):
    pass
