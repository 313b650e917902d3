"""Search-term generation strategies.

Implements the Strategy pattern for the two orchestration styles that
produce a landing page's search terms.

Classes
-------
SearchTermStrategy
    Abstract base class for all strategies.
StatelessRefinementStrategy
    Bounded generate/evaluate/refine loop; the default.
ConversationalAgentStrategy
    One task on the generic think-act-observe-refine driver, with the
    full conversation history resent on every call.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence

from landing_seo.domain.exceptions import SchemaViolation
from landing_seo.graph.agent import AgentRunner
from landing_seo.graph.refinement import SearchTermRefiner
from landing_seo.infrastructure.config import AgentConfig, RefinementConfig
from landing_seo.infrastructure.deadline import Deadline
from landing_seo.infrastructure.llm import StructuredCaller
from landing_seo.services.extraction import extract_list_result
from landing_seo.services.presets import search_term_agent_config
from landing_seo.services.prompts import search_term_agent_input
from landing_seo.services.schemas import SEARCH_TERMS_FIELD

logger = logging.getLogger(__name__)


# ===================================================================== #
#  Base Strategy (ABC)                                                   #
# ===================================================================== #


class SearchTermStrategy(ABC):
    """Abstract base class for search-term strategies.

    Subclasses must implement :meth:`generate`, which returns exactly the
    configured number of terms or raises a
    :class:`~landing_seo.domain.exceptions.LandingSeoError`.
    """

    name: str = "base"

    @abstractmethod
    def generate(
        self,
        theme: str,
        base_keywords: Sequence[str],
        deadline: Deadline | None = None,
    ) -> list[str]:
        """Produce search terms for *theme*.

        Parameters
        ----------
        theme:
            The landing page theme.
        base_keywords:
            Keywords produced earlier for the same theme.
        deadline:
            Optional overall deadline shared by every call of the run.
        """


# ===================================================================== #
#  Stateless refinement                                                  #
# ===================================================================== #


class StatelessRefinementStrategy(SearchTermStrategy):
    """Run the bounded refinement loop.

    A failed refinement call is recovered from (the last good terms are
    returned); only a failed initial call raises.
    """

    name = "refine"

    def __init__(
        self,
        caller: StructuredCaller,
        config: RefinementConfig | None = None,
    ) -> None:
        self._refiner = SearchTermRefiner(caller, config)

    @property
    def refiner(self) -> SearchTermRefiner:
        return self._refiner

    def generate(
        self,
        theme: str,
        base_keywords: Sequence[str],
        deadline: Deadline | None = None,
    ) -> list[str]:
        return self._refiner.generate(theme, base_keywords, deadline=deadline)


# ===================================================================== #
#  Conversational agent                                                  #
# ===================================================================== #


class ConversationalAgentStrategy(SearchTermStrategy):
    """Delegate to the generic driver with the search-term preset.

    Parameters
    ----------
    caller:
        Structured call backend.
    config:
        Agent preset.  Defaults to
        :func:`landing_seo.services.presets.search_term_agent_config`.
    expected_count:
        Exact number of terms the result must hold.
    """

    name = "agent"

    def __init__(
        self,
        caller: StructuredCaller,
        config: AgentConfig | None = None,
        expected_count: int = 15,
    ) -> None:
        if config is None:
            config = search_term_agent_config(expected_count)
        self._runner = AgentRunner(config, caller)
        self._expected_count = expected_count

    def generate(
        self,
        theme: str,
        base_keywords: Sequence[str],
        deadline: Deadline | None = None,
    ) -> list[str]:
        result = self._runner.run(
            search_term_agent_input(theme, base_keywords), deadline=deadline,
        )
        if not result.success:
            if result.error is not None:
                raise result.error
            raise SchemaViolation(
                "search-term agent finished without a result",
                tool_name=self._runner.config.tool_name,
            )
        terms = extract_list_result(
            result,
            self._runner.config.tool_schema,
            SEARCH_TERMS_FIELD,
            self._expected_count,
        )
        logger.info(
            "ConversationalAgentStrategy: %d terms after %d iteration(s)",
            len(terms),
            result.iterations,
        )
        return terms
