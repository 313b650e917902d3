"""Tests for the caller-facing generation API and strategies."""

from __future__ import annotations

import pytest

from landing_seo.domain.exceptions import (
    AgentStalled,
    ExternalCallFailure,
    SchemaViolation,
)
from landing_seo.infrastructure.deadline import Deadline
from landing_seo.services.generation import (
    generate_keywords,
    generate_search_terms,
    keyword_agent_config,
    search_term_agent_config,
)
from landing_seo.services.strategies import (
    ConversationalAgentStrategy,
    StatelessRefinementStrategy,
)
from tests.helpers.mock_llm import (
    make_mock_caller,
    search_terms_message,
    tool_call_message,
)
from tests.helpers.terms import KEYWORDS


class TestPresets:

    def test_keyword_preset(self) -> None:
        config = keyword_agent_config()
        config.validate()
        assert config.model_name == "moonshotai/kimi-k2-thinking"
        assert config.providers == ("google-vertex",)
        assert config.temperature == 0.7
        assert config.max_iterations == 3
        assert config.tool_name == "submit_keywords"
        assert "Generate 8 SEO keywords" in config.render_user_prompt("romance")

    def test_search_term_preset(self) -> None:
        config = search_term_agent_config()
        config.validate()
        assert config.model_name == "minimax/minimax-m2"
        assert config.providers == ("minimax/fp8",)
        assert config.temperature == 0.8
        assert config.max_iterations == 3
        assert config.tool_name == "submit_search_terms"
        assert "EXACTLY 15" in config.render_user_prompt("Theme: x")


class TestGenerateKeywords:

    def test_theme_appended_lowercased(self) -> None:
        caller, model, _ = make_mock_caller(
            tool_call_message("submit_keywords", {"keywords": KEYWORDS}),
        )
        keywords = generate_keywords("Romance Books", caller)
        assert keywords == KEYWORDS + ["romance books"]
        assert 'about "Romance Books"' in model.calls[0][1].content

    def test_agent_failure_raised(self) -> None:
        caller, _, _ = make_mock_caller("Here are some ideas: romance, love.")
        with pytest.raises(AgentStalled):
            generate_keywords("romance", caller)

    def test_call_failure_raised(self) -> None:
        caller, _, _ = make_mock_caller(RuntimeError("down"))
        with pytest.raises(ExternalCallFailure):
            generate_keywords("romance", caller, timeout=5.0)

    def test_deadline_and_timeout_exclusive(self) -> None:
        caller, _, _ = make_mock_caller()
        with pytest.raises(ValueError):
            generate_keywords("romance", caller, deadline=Deadline(5), timeout=5)


class TestGenerateSearchTerms:

    def test_default_strategy_refines(self, weak_terms: list[str], good_terms: list[str]) -> None:
        caller, model, _ = make_mock_caller(
            search_terms_message(weak_terms),
            search_terms_message(good_terms),
        )
        terms = generate_search_terms("romance audiobooks", KEYWORDS, caller)
        assert terms == good_terms
        assert model.call_count == 2

    def test_initial_failure_raised(self, good_terms: list[str]) -> None:
        caller, _, _ = make_mock_caller(search_terms_message(good_terms[:12]))
        with pytest.raises(SchemaViolation):
            generate_search_terms("romance audiobooks", KEYWORDS, caller)

    def test_agent_strategy(self, weak_terms: list[str]) -> None:
        caller, model, _ = make_mock_caller(search_terms_message(weak_terms))
        strategy = ConversationalAgentStrategy(caller)
        terms = generate_search_terms(
            "romance audiobooks", KEYWORDS, caller, strategy=strategy,
        )
        # no local quality loop: the first valid answer is returned
        assert terms == weak_terms
        assert model.call_count == 1
        assert 'Theme: "romance audiobooks"' in model.calls[0][1].content

    def test_agent_strategy_checks_count(self, good_terms: list[str]) -> None:
        caller, _, _ = make_mock_caller(search_terms_message(good_terms[:14]))
        strategy = ConversationalAgentStrategy(caller)
        with pytest.raises(SchemaViolation):
            strategy.generate("romance audiobooks", KEYWORDS)

    def test_strategy_names(self) -> None:
        caller, _, _ = make_mock_caller()
        assert StatelessRefinementStrategy(caller).name == "refine"
        assert ConversationalAgentStrategy(caller).name == "agent"
