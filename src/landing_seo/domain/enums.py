"""Domain enumerations for landing-page SEO generation.

These enums capture the fixed vocabularies used across the domain layer:
SEO pattern categories, refinement-loop phases and outcomes, and the
phases of the generic think-act-observe-refine driver.
"""

from enum import Enum


class PatternCategory(Enum):
    """SEO search pattern categories recognized by the quality evaluator."""

    COMPARISON = "comparison"
    QUESTION = "question"
    BEST_LIST = "best_list"
    VALUE_PROPOSITION = "value_proposition"
    FORMAT_MIX = "format_mix"
    USER_INTENT = "user_intent"


class RefinementPhase(Enum):
    """Finite-state-machine states for the search-term refinement loop."""

    INITIAL = "initial"
    EVALUATE = "evaluate"
    REFINE = "refine"
    DONE = "done"
    FAILED_SOFT = "failed_soft"  # stopped early, best-so-far kept
    FAILED_HARD = "failed_hard"  # no usable result


class RefinementOutcome(Enum):
    """Terminal outcome of a refinement run."""

    DONE = "done"
    FAILED_SOFT = "failed_soft"
    FAILED_HARD = "failed_hard"

    @property
    def has_terms(self) -> bool:
        """True when the outcome still carries a usable term set."""
        return self is not RefinementOutcome.FAILED_HARD


class AgentPhase(Enum):
    """Phases of the generic think-act-observe-refine driver."""

    THINK = "think"
    ACT = "act"
    OBSERVE = "observe"
    REFINE = "refine"


class AgentStopReason(Enum):
    """Reason the generic driver terminated."""

    COMPLETED = "completed"
    MAX_ITERATIONS = "max_iterations"
    STALLED = "stalled"
    ERROR = "error"
