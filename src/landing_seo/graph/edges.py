"""Conditional edge functions for the orchestration graphs.

These functions determine routing between nodes based on the current state.
"""

from __future__ import annotations

from typing import Any, Literal


def should_evaluate(state: dict[str, Any]) -> Literal["evaluate", "__end__"]:
    """After a generation or refinement call, evaluate unless the run ended.

    A call failure sets ``outcome`` (FAILED_HARD on the initial call,
    FAILED_SOFT on a refinement call) and ends the run.
    """
    if state.get("outcome") is not None:
        return "__end__"
    return "evaluate"


def should_refine(state: dict[str, Any]) -> Literal["refine", "__end__"]:
    """After evaluation, refine unless the evaluator declared the run done."""
    if state.get("outcome") is not None:
        return "__end__"
    return "refine"


def should_observe(state: dict[str, Any]) -> Literal["observe", "refine"]:
    """After acting, observe the reply; a failed call goes straight to refine."""
    if state.get("error") is not None:
        return "refine"
    return "observe"


def should_continue(state: dict[str, Any]) -> Literal["think", "__end__"]:
    """After refine, loop back to think or terminate."""
    if state.get("stop_reason") is not None:
        return "__end__"
    return "think"
