"""Value objects for landing-page SEO generation.

All types here are frozen dataclasses -- immutable, compared by value.
They represent quality measurements, model descriptors and the outcomes
of the two orchestration loops.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .enums import AgentStopReason, PatternCategory, RefinementOutcome
from .exceptions import LandingSeoError

# ---------------------------------------------------------------------------
# QualityReport
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class QualityReport:
    """Local quality assessment of a candidate term set.

    One flag per recognized SEO pattern category, a diversity score in
    [0, 1] and the observed term count.  Computed fresh each iteration and
    never persisted.
    """

    has_comparisons: bool = False
    has_questions: bool = False
    has_best_lists: bool = False
    has_value_terms: bool = False
    has_format_mix: bool = False
    has_user_intent: bool = False
    diversity_score: float = 0.0
    term_count: int = 0

    def __post_init__(self) -> None:
        if not 0.0 <= self.diversity_score <= 1.0:
            raise ValueError(
                f"diversity_score must be in [0, 1], got {self.diversity_score}"
            )
        if self.term_count < 0:
            raise ValueError(f"term_count must be >= 0, got {self.term_count}")

    @property
    def flags(self) -> dict[PatternCategory, bool]:
        """Pattern flags keyed by category, in canonical category order."""
        return {
            PatternCategory.COMPARISON: self.has_comparisons,
            PatternCategory.QUESTION: self.has_questions,
            PatternCategory.BEST_LIST: self.has_best_lists,
            PatternCategory.VALUE_PROPOSITION: self.has_value_terms,
            PatternCategory.FORMAT_MIX: self.has_format_mix,
            PatternCategory.USER_INTENT: self.has_user_intent,
        }

    @property
    def pattern_count(self) -> int:
        """Number of pattern categories present."""
        return sum(1 for present in self.flags.values() if present)

    @property
    def missing_categories(self) -> tuple[PatternCategory, ...]:
        """Categories with no matching term, in canonical order."""
        return tuple(cat for cat, present in self.flags.items() if not present)

    @classmethod
    def from_flags(
        cls,
        flags: Mapping[PatternCategory, bool],
        diversity_score: float,
        term_count: int,
    ) -> QualityReport:
        """Build a report from a category -> flag mapping."""
        return cls(
            has_comparisons=flags.get(PatternCategory.COMPARISON, False),
            has_questions=flags.get(PatternCategory.QUESTION, False),
            has_best_lists=flags.get(PatternCategory.BEST_LIST, False),
            has_value_terms=flags.get(PatternCategory.VALUE_PROPOSITION, False),
            has_format_mix=flags.get(PatternCategory.FORMAT_MIX, False),
            has_user_intent=flags.get(PatternCategory.USER_INTENT, False),
            diversity_score=diversity_score,
            term_count=term_count,
        )


# ---------------------------------------------------------------------------
# ModelDescriptor
# ---------------------------------------------------------------------------

_PROVIDER_FIELDS = ("minimax", "google")


@dataclass(frozen=True)
class ModelDescriptor:
    """A model identifier plus its known provider routes.

    Each supported provider is a named field holding that provider's
    routing slug (``None`` when the model is not served there).
    """

    name: str
    minimax: str | None = None
    google: str | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("ModelDescriptor.name must not be empty")

    def route(self, provider: str) -> str:
        """Return the routing slug for *provider*.

        Raises
        ------
        KeyError
            If the provider is unknown or not available for this model.
        """
        key = provider.lower()
        slug = getattr(self, key) if key in _PROVIDER_FIELDS else None
        if slug is None:
            raise KeyError(f"Model {self.name!r} has no route for provider {provider!r}")
        return slug

    def providers(self, *names: str) -> tuple[str, ...]:
        """Return routing slugs for *names* in the given preference order."""
        return tuple(self.route(n) for n in names)


# ---------------------------------------------------------------------------
# Loop results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RefinementResult:
    """Outcome of one run of the search-term refinement loop.

    ``terms`` is empty exactly when ``outcome`` is ``FAILED_HARD``; in that
    case ``error`` holds the fatal error.  A ``FAILED_SOFT`` run keeps the
    last good term set and records the recovered error.
    """

    terms: tuple[str, ...] = ()
    outcome: RefinementOutcome = RefinementOutcome.DONE
    iterations: int = 0
    calls_made: int = 0
    quality: QualityReport | None = None
    good_enough: bool = False
    error: LandingSeoError | None = None

    @property
    def succeeded(self) -> bool:
        """True when a usable term set was produced."""
        return self.outcome.has_terms

    def raise_for_failure(self) -> None:
        """Raise the fatal error of a ``FAILED_HARD`` run."""
        if self.outcome is RefinementOutcome.FAILED_HARD:
            if self.error is not None:
                raise self.error
            raise LandingSeoError("Refinement failed without a recorded error")


@dataclass(frozen=True)
class AgentResult:
    """Outcome of one run of the generic think-act-observe-refine driver.

    ``result`` holds the tool arguments on success, or the last interim
    text reply otherwise.
    """

    success: bool
    result: Any = None
    iterations: int = 0
    history: tuple[Any, ...] = ()
    error: LandingSeoError | None = None
    stop_reason: AgentStopReason = AgentStopReason.COMPLETED
    metadata: Mapping[str, Any] = field(default_factory=dict)
