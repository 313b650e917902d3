"""Shared fixtures for the landing-seo test suite."""

from __future__ import annotations

import pytest

from landing_seo.domain.values import QualityReport
from landing_seo.infrastructure.config import AgentConfig, RefinementConfig
from landing_seo.services.prompts import KEYWORD_SYSTEM_PROMPT
from landing_seo.services.schemas import keywords_tool
from tests.helpers.terms import GOOD_TERMS, WEAK_TERMS

# ---------------------------------------------------------------------------
# Term-set fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def good_terms() -> list[str]:
    """15 terms that pass the good-enough predicate."""
    return list(GOOD_TERMS)


@pytest.fixture
def weak_terms() -> list[str]:
    """15 terms covering only 3 patterns with low diversity."""
    return list(WEAK_TERMS)


@pytest.fixture
def full_report() -> QualityReport:
    """A report with every pattern flag set."""
    return QualityReport(
        has_comparisons=True,
        has_questions=True,
        has_best_lists=True,
        has_value_terms=True,
        has_format_mix=True,
        has_user_intent=True,
        diversity_score=0.8,
        term_count=15,
    )


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def refinement_config() -> RefinementConfig:
    """Default loop parameters: N=15, K=4."""
    return RefinementConfig()


@pytest.fixture
def keyword_config() -> AgentConfig:
    """A small keyword task: 3 iterations, stall after 2 text replies."""
    return AgentConfig(
        model_name="test/model",
        providers=("test-provider",),
        system_prompt=KEYWORD_SYSTEM_PROMPT,
        user_prompt_format='Generate keywords about "{input}". Use the submit_keywords tool.',
        tool_schema=keywords_tool(),
        temperature=0.7,
        max_iterations=3,
    )
