"""Tests for the bounded stateless refinement loop."""

from __future__ import annotations

import os
import subprocess
import sys
import textwrap
import time
from pathlib import Path

import pytest

from landing_seo.domain.enums import RefinementOutcome
from landing_seo.domain.exceptions import ExternalCallFailure, SchemaViolation
from landing_seo.graph.refinement import SearchTermRefiner, build_refinement_graph
from landing_seo.infrastructure.config import RefinementConfig
from landing_seo.infrastructure.deadline import Deadline
from landing_seo.services.quality import NO_MISSING_PATTERNS
from tests.helpers.mock_llm import make_mock_caller, search_terms_message
from tests.helpers.terms import KEYWORDS

_SRC_DIR = Path(__file__).resolve().parents[2] / "src"


class TestRefinementScenarios:

    def test_two_call_success(self, weak_terms: list[str], good_terms: list[str]) -> None:
        """Weak initial set, one refinement reaches the quality target."""
        caller, model, _ = make_mock_caller(
            search_terms_message(weak_terms),
            search_terms_message(good_terms),
        )
        result = SearchTermRefiner(caller).run("romance audiobooks", KEYWORDS)

        assert result.outcome is RefinementOutcome.DONE
        assert result.terms == tuple(good_terms)
        assert result.good_enough
        assert result.iterations == 1
        assert result.calls_made == 2
        assert model.call_count == 2

    def test_initial_wrong_count_is_fatal(self, good_terms: list[str]) -> None:
        caller, model, _ = make_mock_caller(search_terms_message(good_terms[:12]))
        refiner = SearchTermRefiner(caller)

        result = refiner.run("romance audiobooks", KEYWORDS)
        assert result.outcome is RefinementOutcome.FAILED_HARD
        assert result.terms == ()
        assert isinstance(result.error, SchemaViolation)
        assert result.error.expected_count == 15
        assert result.error.actual_count == 12
        assert result.calls_made == 1
        assert model.call_count == 1

        with pytest.raises(SchemaViolation):
            refiner.generate("romance audiobooks", KEYWORDS)

    def test_budget_exhaustion_after_five_calls(self, weak_terms: list[str]) -> None:
        """Never good enough: K=4 refinements after the initial call."""
        caller, model, _ = make_mock_caller(search_terms_message(weak_terms))
        result = SearchTermRefiner(caller, RefinementConfig(max_refinements=4)).run(
            "romance audiobooks", KEYWORDS,
        )

        assert result.outcome is RefinementOutcome.DONE
        assert not result.good_enough
        assert result.iterations == 4
        assert result.calls_made == 5
        assert model.call_count == 5
        assert result.terms == tuple(weak_terms)

    @pytest.mark.parametrize("max_refinements", [0, 1, 2, 6])
    def test_never_exceeds_budget(self, weak_terms: list[str], max_refinements: int) -> None:
        caller, model, _ = make_mock_caller(search_terms_message(weak_terms))
        config = RefinementConfig(max_refinements=max_refinements)
        result = SearchTermRefiner(caller, config).run("thrillers", ())
        assert model.call_count == max_refinements + 1
        assert result.calls_made == config.max_calls

    def test_good_initial_set_needs_one_call(self, good_terms: list[str]) -> None:
        caller, model, _ = make_mock_caller(search_terms_message(good_terms))
        result = SearchTermRefiner(caller).run("romance audiobooks", KEYWORDS)
        assert result.good_enough
        assert result.iterations == 0
        assert model.call_count == 1


class TestRefinementFailures:

    def test_initial_call_failure(self) -> None:
        caller, _, _ = make_mock_caller(RuntimeError("connection reset"))
        result = SearchTermRefiner(caller).run("romance audiobooks", KEYWORDS)
        assert result.outcome is RefinementOutcome.FAILED_HARD
        assert isinstance(result.error, ExternalCallFailure)
        assert isinstance(result.error.cause, RuntimeError)

    def test_refinement_failure_keeps_prior_set(
        self, weak_terms: list[str], caplog: pytest.LogCaptureFixture,
    ) -> None:
        caller, _, _ = make_mock_caller(
            search_terms_message(weak_terms),
            RuntimeError("503 from provider"),
        )
        refiner = SearchTermRefiner(caller)
        with caplog.at_level("WARNING"):
            result = refiner.run("romance audiobooks", KEYWORDS)

        assert result.outcome is RefinementOutcome.FAILED_SOFT
        assert result.terms == tuple(weak_terms)
        assert result.iterations == 0
        assert result.calls_made == 2
        assert isinstance(result.error, ExternalCallFailure)
        assert "keeping current terms" in caplog.text

    def test_refinement_wrong_count_keeps_prior_set(
        self, weak_terms: list[str], good_terms: list[str],
    ) -> None:
        caller, _, _ = make_mock_caller(
            search_terms_message(weak_terms),
            search_terms_message(good_terms[:10]),
        )
        refiner = SearchTermRefiner(caller)
        result = refiner.run("romance audiobooks", KEYWORDS)
        assert result.outcome is RefinementOutcome.FAILED_SOFT
        assert result.terms == tuple(weak_terms)
        assert isinstance(result.error, SchemaViolation)
        # recovered, so generate() still returns the prior set
        assert refiner.generate("romance audiobooks", KEYWORDS) == weak_terms

    def test_expired_deadline_is_a_call_failure(self) -> None:
        caller, model, _ = make_mock_caller(search_terms_message(["x"] * 15))
        deadline = Deadline(0.001)
        time.sleep(0.01)
        result = SearchTermRefiner(caller).run("romance audiobooks", KEYWORDS, deadline=deadline)
        assert result.outcome is RefinementOutcome.FAILED_HARD
        assert isinstance(result.error, ExternalCallFailure)
        assert isinstance(result.error.cause, TimeoutError)
        assert model.call_count == 0

    def test_deadline_during_refinement_keeps_prior_set(
        self, weak_terms: list[str], good_terms: list[str],
    ) -> None:
        caller, model, _ = make_mock_caller(
            search_terms_message(weak_terms),
            search_terms_message(good_terms),
            delays=[0.0, 2.0],
        )
        start = time.monotonic()
        result = SearchTermRefiner(caller).run(
            "romance audiobooks", KEYWORDS, deadline=Deadline(0.5),
        )

        assert time.monotonic() - start < 1.5
        assert result.outcome is RefinementOutcome.FAILED_SOFT
        assert result.terms == tuple(weak_terms)
        assert result.iterations == 0
        assert result.calls_made == 2
        assert isinstance(result.error, ExternalCallFailure)
        assert isinstance(result.error.cause, TimeoutError)
        assert model.call_count == 2

    def test_abandoned_call_does_not_hold_process_open(self) -> None:
        script = textwrap.dedent(
            """
            from landing_seo.graph.refinement import SearchTermRefiner
            from landing_seo.infrastructure.deadline import Deadline
            from landing_seo.testing import make_mock_caller

            caller, _, _ = make_mock_caller("unused", delays=[10.0])
            result = SearchTermRefiner(caller).run("romance", deadline=Deadline(0.3))
            print(result.outcome.value)
            """
        )
        env = dict(os.environ)
        env["PYTHONPATH"] = os.pathsep.join(
            p for p in (str(_SRC_DIR), env.get("PYTHONPATH", "")) if p
        )
        start = time.monotonic()
        completed = subprocess.run(
            [sys.executable, "-c", script],
            capture_output=True,
            text=True,
            env=env,
            timeout=30,
        )
        elapsed = time.monotonic() - start

        assert completed.returncode == 0, completed.stderr
        assert completed.stdout.strip() == "failed_hard"
        # the mock call sleeps 10s; exiting well before that means it was not joined
        assert elapsed < 8.0


class TestRefinementPrompts:

    def test_refinement_is_stateless(self, weak_terms: list[str], good_terms: list[str]) -> None:
        caller, model, _ = make_mock_caller(
            search_terms_message(weak_terms),
            search_terms_message(good_terms),
        )
        SearchTermRefiner(caller).run("romance audiobooks", KEYWORDS)

        initial, refinement = model.calls
        assert len(initial) == 2
        assert len(refinement) == 2
        prompt = refinement[1].content
        assert "1. best romance audiobooks" in prompt
        assert "15. romance audiobooks for readers" in prompt
        assert "- Comparison terms" in prompt
        assert "- Question-based" in prompt
        assert "- Value-focused" in prompt
        assert "- Best/Top lists" not in prompt

    def test_initial_prompt_carries_theme_and_keywords(self, good_terms: list[str]) -> None:
        caller, model, _ = make_mock_caller(search_terms_message(good_terms))
        SearchTermRefiner(caller).run("romance audiobooks", ["romance books", "love stories"])
        prompt = model.calls[0][1].content
        assert 'Theme: "romance audiobooks"' in prompt
        assert "Base Keywords: romance books, love stories" in prompt
        assert "EXACTLY 15" in prompt

    def test_all_patterns_present_sends_sentinel(self) -> None:
        terms = [
            "thrillers vs mysteries",
            "where to find thrillers",
            "best thriller audiobooks",
            "free thriller trial",
            "thrillers for commute",
        ] + ["thriller thriller thriller"] * 10
        caller, model, _ = make_mock_caller(
            search_terms_message(terms),
            search_terms_message(terms),
        )
        SearchTermRefiner(caller, RefinementConfig(max_refinements=1)).run("thrillers", ())
        assert NO_MISSING_PATTERNS in model.calls[1][1].content

    def test_temperatures_and_forced_tool(
        self, weak_terms: list[str], good_terms: list[str],
    ) -> None:
        caller, model, requested = make_mock_caller(
            search_terms_message(weak_terms),
            search_terms_message(good_terms),
        )
        SearchTermRefiner(caller).run("romance audiobooks", KEYWORDS)

        assert [s.temperature for s in requested] == [0.8, 0.7]
        assert all(s.model == "minimax/minimax-m2" for s in requested)
        assert all(s.providers == ("minimax/fp8",) for s in requested)
        assert all(b["tool_choice"] == "submit_search_terms" for b in model.bound_tools)


class TestRefinementGraph:

    def test_compiles(self, refinement_config: RefinementConfig) -> None:
        caller, _, _ = make_mock_caller()
        app = build_refinement_graph(caller, refinement_config)
        assert app is not None

    def test_invalid_config_rejected(self) -> None:
        caller, _, _ = make_mock_caller()
        with pytest.raises(ValueError):
            SearchTermRefiner(caller, RefinementConfig(target_count=0))

    def test_refiner_reusable(self, good_terms: list[str]) -> None:
        caller, model, _ = make_mock_caller(search_terms_message(good_terms))
        refiner = SearchTermRefiner(caller)
        first = refiner.run("romance", ())
        second = refiner.run("thrillers", ())
        assert first.terms == second.terms
        assert model.call_count == 2
