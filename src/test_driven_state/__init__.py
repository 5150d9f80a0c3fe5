"""Test-Driven State.

Declare a state machine by example as named traces, bind transition handlers
to it, then either drive the machine with real input or replay the traces and
get a per-step pass/fail report.
"""

__version__ = "0.1.0"

from test_driven_state.errors import (
    InvalidHandlerResultError,
    MissingProgramError,
    OutputMismatchError,
    StepLimitExceededError,
    TdsError,
    TraceVerificationError,
    UnregisteredTransitionError,
)
from test_driven_state.implementation import Implementation
from test_driven_state.program import Program
from test_driven_state.registry import TransitionContext, TransitionEntry
from test_driven_state.trace import SENTINEL, WILDCARD, Call, Step, StepOptions, Trace
from test_driven_state.verification import VerificationRecord

__all__ = [
    "__version__",
    "SENTINEL",
    "WILDCARD",
    "Call",
    "Implementation",
    "InvalidHandlerResultError",
    "MissingProgramError",
    "OutputMismatchError",
    "Program",
    "Step",
    "StepLimitExceededError",
    "StepOptions",
    "TdsError",
    "Trace",
    "TraceVerificationError",
    "TransitionContext",
    "TransitionEntry",
    "UnregisteredTransitionError",
    "VerificationRecord",
]
