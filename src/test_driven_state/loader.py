"""Resolve ``package.module:attribute`` references for the CLI."""

from __future__ import annotations

import importlib
from typing import Any

from test_driven_state.errors import ObjectLoadError


def load_object(reference: str) -> Any:
    """Import ``module`` and walk the dotted ``attribute`` path after the colon."""

    module_name, sep, attr_path = reference.partition(":")
    if not sep or not module_name or not attr_path:
        raise ObjectLoadError(f"Expected 'package.module:attribute', got {reference!r}")

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise ObjectLoadError(f"Cannot import module {module_name!r}: {e}") from e

    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise ObjectLoadError(f"{module_name!r} has no attribute {attr_path!r}") from e
    return obj
