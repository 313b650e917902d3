"""Caller-facing generation API.

``generate_keywords`` runs the keyword preset on the generic driver;
``generate_search_terms`` runs a :class:`SearchTermStrategy` (the bounded
stateless refinement loop by default).  Both share one overall deadline
across every call they issue.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from landing_seo.domain.exceptions import SchemaViolation
from landing_seo.graph.agent import run_agent
from landing_seo.infrastructure.config import AgentConfig
from landing_seo.infrastructure.deadline import Deadline
from landing_seo.infrastructure.llm import StructuredCaller
from landing_seo.services.extraction import extract_list_result
from landing_seo.services.presets import (
    keyword_agent_config,
    search_term_agent_config,
)
from landing_seo.services.schemas import KEYWORDS_FIELD
from landing_seo.services.strategies import (
    SearchTermStrategy,
    StatelessRefinementStrategy,
)

logger = logging.getLogger(__name__)

__all__ = [
    "generate_keywords",
    "generate_search_terms",
    "keyword_agent_config",
    "search_term_agent_config",
]


def _resolve_deadline(deadline: Deadline | None, timeout: float | None) -> Deadline | None:
    if deadline is not None and timeout is not None:
        raise ValueError("pass either deadline or timeout, not both")
    return deadline if deadline is not None else Deadline.from_timeout(timeout)


def generate_keywords(
    theme: str,
    caller: StructuredCaller,
    *,
    config: AgentConfig | None = None,
    deadline: Deadline | None = None,
    timeout: float | None = None,
) -> list[str]:
    """Generate SEO keywords for *theme*.

    The lower-cased theme is appended as the final keyword.

    Parameters
    ----------
    theme:
        The landing page theme.
    caller:
        Structured call backend.
    config:
        Agent preset.  Defaults to :func:`keyword_agent_config`.
    deadline:
        Overall deadline for the run.
    timeout:
        Alternative to *deadline*: seconds from now.

    Raises
    ------
    LandingSeoError
        If the agent fails to produce a keyword list.
    """
    config = config if config is not None else keyword_agent_config()
    deadline = _resolve_deadline(deadline, timeout)

    result = run_agent(config, theme, caller, deadline=deadline)
    if not result.success:
        if result.error is not None:
            raise result.error
        raise SchemaViolation(
            "keyword agent finished without a result", tool_name=config.tool_name,
        )

    keywords = extract_list_result(result, config.tool_schema, KEYWORDS_FIELD)
    keywords.append(theme.lower())
    logger.info("generate_keywords: %d keywords for theme %r", len(keywords), theme)
    return keywords


def generate_search_terms(
    theme: str,
    base_keywords: Sequence[str],
    caller: StructuredCaller,
    *,
    strategy: SearchTermStrategy | None = None,
    deadline: Deadline | None = None,
    timeout: float | None = None,
) -> list[str]:
    """Generate must-target search terms for *theme*.

    Parameters
    ----------
    theme:
        The landing page theme.
    base_keywords:
        Keywords from :func:`generate_keywords`.
    caller:
        Structured call backend; ignored when *strategy* is given.
    strategy:
        Orchestration style.  Defaults to
        :class:`StatelessRefinementStrategy`.
    deadline:
        Overall deadline for the run.
    timeout:
        Alternative to *deadline*: seconds from now.
    """
    strategy = strategy if strategy is not None else StatelessRefinementStrategy(caller)
    deadline = _resolve_deadline(deadline, timeout)
    logger.debug("generate_search_terms: using %s strategy", strategy.name)
    return strategy.generate(theme, base_keywords, deadline=deadline)
