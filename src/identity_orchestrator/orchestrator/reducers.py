"""
identity_orchestrator.orchestrator.reducers

Reducers define how LangGraph merges node updates into the cycle state.
"""

from __future__ import annotations

from typing import Any


def append_items(left: list[Any] | None, right: list[Any] | None) -> list[Any]:
    """
    Append-only reducer: nodes return `{"events": [event]}` and entries accumulate in order.
    """

    if not left:
        return list(right or [])
    if not right:
        return list(left)
    return [*left, *right]
