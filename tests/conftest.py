"""Test configuration and fixtures."""

from __future__ import annotations

from typing import Any

import pytest

from test_driven_state import Implementation, Program, Trace, TransitionContext


def factorial_step(data: dict[str, Any], _ctx: TransitionContext) -> tuple[str, dict[str, Any]]:
    n = data["n"]
    a = data.get("a", 1)
    if n == 0:
        return "@", {"n": a}
    return "calc", {"n": n - 1, "a": n * a}


@pytest.fixture
def factorial_handler() -> Any:
    """The single factorial transition handler."""
    return factorial_step


@pytest.fixture
def factorial_program() -> Program:
    """Three example traces of an accumulator-style factorial."""
    return Program(
        [
            Trace.with_input({"n": 0}, name="zero").step("calc", output={"n": 1}),
            Trace.with_input({"n": 1}, name="one")
            .step("calc", output={"n": 0, "a": 1})
            .step("calc", output={"n": 1}),
            Trace.with_input({"n": 5}, name="five")
            .step("calc", output={"n": 4, "a": 5})
            .step("calc", output={"n": 3, "a": 20})
            .step("calc", output={"n": 2, "a": 60})
            .step("calc", output={"n": 1, "a": 120})
            .step("calc", output={"n": 0, "a": 120})
            .step("calc", output={"n": 120}),
        ]
    )


@pytest.fixture
def factorial(factorial_program: Program) -> Implementation:
    """Factorial bound to its program through a single wildcard transition."""
    return Implementation(factorial_program).transition("*", "*", factorial_step)
