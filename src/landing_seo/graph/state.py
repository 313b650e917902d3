"""LangGraph state definitions for the two orchestration loops.

``RefinementState`` flows through the bounded stateless refinement graph;
every channel is last-write-wins, so each refinement call sees only the
current term snapshot.  ``AgentExecutionState`` flows through the generic
think-act-observe-refine graph; its ``history`` channel is append-only
(``Annotated[list, operator.add]``) and is resent in full on every call.

Note: We intentionally do NOT use ``from __future__ import annotations`` because
LangGraph needs to resolve type hints at runtime via ``get_type_hints()``.
"""

import operator
from typing import Annotated, Any, TypedDict

from landing_seo.domain.enums import (
    AgentPhase,
    AgentStopReason,
    RefinementOutcome,
    RefinementPhase,
)
from landing_seo.domain.exceptions import LandingSeoError
from landing_seo.domain.values import QualityReport
from landing_seo.infrastructure.deadline import Deadline
from landing_seo.infrastructure.llm import StructuredResponse


class RefinementState(TypedDict, total=False):
    """State of one search-term refinement run."""

    # -- Inputs (set once) ---------------------------------------------------
    theme: str
    base_keywords: list[str]
    deadline: Deadline | None

    # -- Loop control --------------------------------------------------------
    phase: RefinementPhase
    iteration: int                     # successful refinement calls
    calls_made: int                    # external calls issued, incl. failed
    outcome: RefinementOutcome | None

    # -- Current snapshot (replaced per iteration) ---------------------------
    terms: list[str]
    quality: QualityReport | None
    good_enough: bool
    error: LandingSeoError | None


class AgentExecutionState(TypedDict, total=False):
    """State of one generic-driver run."""

    # -- Inputs (set once) ---------------------------------------------------
    deadline: Deadline | None

    # -- Loop control --------------------------------------------------------
    iteration: int
    phase: AgentPhase
    completed: bool
    stalled_responses: int             # consecutive text-only replies
    stop_reason: AgentStopReason | None

    # -- Conversation (append-only, resent in full each call) ----------------
    history: Annotated[list, operator.add]

    # -- Per-iteration -------------------------------------------------------
    response: StructuredResponse | None
    result: Any
    error: LandingSeoError | None
