"""Render a program's derived graph as a Mermaid state diagram."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from test_driven_state.program import Program

CHART_HEADER = "stateDiagram-v2"
START_MARKER = "[*]"


def render_chart(program: Program, *, distinct: bool = False) -> str:
    """Return a line-oriented ``stateDiagram-v2`` description of ``program``.

    States are numbered from 1 in first-seen order. Anything not in
    ``program.states`` (the sentinel) is drawn as ``[*]``. With ``distinct``,
    repeated lines (edges shared by several traces) are emitted once.
    """

    index = {name: i for i, name in enumerate(program.states, start=1)}

    lines = [CHART_HEADER]
    lines.extend(f"{i}: {name}" for name, i in index.items())
    for from_state, to_state in program.transitions:
        a = index.get(from_state, START_MARKER)
        b = index.get(to_state, START_MARKER)
        lines.append(f"{a} --> {b}")

    if distinct:
        lines = list(dict.fromkeys(lines))
    return "\n".join(lines)
