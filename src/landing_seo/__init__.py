"""landing-seo.

LangGraph toolkit generating SEO keywords and must-target search terms
for landing pages, with a bounded stateless refinement loop driven by a
local quality evaluator.
"""

__version__ = "0.1.0"

from landing_seo.graph import AgentRunner, SearchTermRefiner, run_agent
from landing_seo.services.generation import (
    generate_keywords,
    generate_search_terms,
    keyword_agent_config,
    search_term_agent_config,
)
from landing_seo.services.strategies import (
    ConversationalAgentStrategy,
    SearchTermStrategy,
    StatelessRefinementStrategy,
)

__all__ = [
    "AgentRunner",
    "ConversationalAgentStrategy",
    "SearchTermRefiner",
    "SearchTermStrategy",
    "StatelessRefinementStrategy",
    "generate_keywords",
    "generate_search_terms",
    "keyword_agent_config",
    "run_agent",
    "search_term_agent_config",
]
