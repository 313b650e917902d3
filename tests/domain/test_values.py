"""Tests for domain value objects and exceptions."""

from __future__ import annotations

import dataclasses

import pytest

from landing_seo.domain.enums import (
    AgentStopReason,
    PatternCategory,
    RefinementOutcome,
)
from landing_seo.domain.exceptions import (
    AgentStalled,
    BudgetExhausted,
    ConfigurationError,
    ExternalCallFailure,
    LandingSeoError,
    NoUsableResponse,
    SchemaViolation,
)
from landing_seo.domain.values import (
    AgentResult,
    ModelDescriptor,
    QualityReport,
    RefinementResult,
)
from landing_seo.infrastructure.llm.models import KIMI_K2_THINKING, MINIMAX_M2


class TestQualityReport:

    def test_defaults_have_no_patterns(self) -> None:
        report = QualityReport()
        assert report.pattern_count == 0
        assert report.missing_categories == tuple(PatternCategory)

    def test_pattern_count(self, full_report: QualityReport) -> None:
        assert full_report.pattern_count == 6
        assert full_report.missing_categories == ()

    def test_frozen(self, full_report: QualityReport) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            full_report.term_count = 3  # type: ignore[misc]

    def test_diversity_out_of_range(self) -> None:
        with pytest.raises(ValueError, match="diversity_score"):
            QualityReport(diversity_score=1.5)

    def test_negative_term_count(self) -> None:
        with pytest.raises(ValueError, match="term_count"):
            QualityReport(term_count=-1)

    def test_from_flags(self) -> None:
        report = QualityReport.from_flags(
            {PatternCategory.QUESTION: True, PatternCategory.USER_INTENT: True},
            diversity_score=0.5,
            term_count=15,
        )
        assert report.has_questions
        assert report.has_user_intent
        assert not report.has_comparisons
        assert report.pattern_count == 2

    def test_missing_categories_in_canonical_order(self) -> None:
        report = QualityReport(has_best_lists=True, has_format_mix=True)
        assert report.missing_categories == (
            PatternCategory.COMPARISON,
            PatternCategory.QUESTION,
            PatternCategory.VALUE_PROPOSITION,
            PatternCategory.USER_INTENT,
        )


class TestModelDescriptor:

    def test_route(self) -> None:
        assert MINIMAX_M2.route("minimax") == "minimax/fp8"
        assert MINIMAX_M2.route("Google") == "google-vertex"

    def test_unset_route_raises(self) -> None:
        with pytest.raises(KeyError):
            KIMI_K2_THINKING.route("minimax")

    def test_unknown_provider_raises(self) -> None:
        with pytest.raises(KeyError):
            MINIMAX_M2.route("anthropic")

    def test_providers_preserve_order(self) -> None:
        assert MINIMAX_M2.providers("google", "minimax") == ("google-vertex", "minimax/fp8")

    def test_empty_name_rejected(self) -> None:
        with pytest.raises(ValueError):
            ModelDescriptor(name="")


class TestRefinementResult:

    def test_done_succeeds(self) -> None:
        result = RefinementResult(terms=("a",), outcome=RefinementOutcome.DONE)
        assert result.succeeded
        result.raise_for_failure()

    def test_failed_soft_still_has_terms(self) -> None:
        result = RefinementResult(
            terms=("a",),
            outcome=RefinementOutcome.FAILED_SOFT,
            error=ExternalCallFailure("down"),
        )
        assert result.succeeded
        result.raise_for_failure()

    def test_failed_hard_raises_recorded_error(self) -> None:
        error = SchemaViolation("expected 15 search_terms, got 12")
        result = RefinementResult(outcome=RefinementOutcome.FAILED_HARD, error=error)
        assert not result.succeeded
        with pytest.raises(SchemaViolation) as exc_info:
            result.raise_for_failure()
        assert exc_info.value is error


class TestAgentResult:

    def test_defaults(self) -> None:
        result = AgentResult(success=True, result={"keywords": ["a"]})
        assert result.stop_reason is AgentStopReason.COMPLETED
        assert result.history == ()
        assert result.error is None


class TestExceptions:

    @pytest.mark.parametrize(
        "exc_type, kind",
        [
            (ConfigurationError, "configuration"),
            (ExternalCallFailure, "external_call_failure"),
            (SchemaViolation, "schema_violation"),
            (NoUsableResponse, "no_usable_response"),
            (BudgetExhausted, "budget_exhausted"),
            (AgentStalled, "agent_stalled"),
        ],
    )
    def test_kind_and_hierarchy(self, exc_type: type[LandingSeoError], kind: str) -> None:
        exc = exc_type()
        assert isinstance(exc, LandingSeoError)
        assert exc.kind == kind

    def test_cause_is_chained(self) -> None:
        try:
            try:
                raise TimeoutError("slow")
            except TimeoutError as inner:
                raise ExternalCallFailure("timed out", model="m") from inner
        except ExternalCallFailure as exc:
            assert isinstance(exc.cause, TimeoutError)
            assert exc.model == "m"

    def test_schema_violation_counts(self) -> None:
        exc = SchemaViolation("bad", tool_name="t", expected_count=15, actual_count=12)
        assert (exc.expected_count, exc.actual_count) == (15, 12)
        assert exc.details == {}

    def test_budget_and_stall_are_distinct(self) -> None:
        assert not issubclass(BudgetExhausted, AgentStalled)
        assert not issubclass(AgentStalled, BudgetExhausted)
