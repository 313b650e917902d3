"""Agent presets for the two generation tasks."""

from __future__ import annotations

from landing_seo.infrastructure.config import AgentConfig
from landing_seo.infrastructure.llm.models import (
    DEFAULT_KEYWORD_MODEL,
    DEFAULT_KEYWORD_PROVIDERS,
    DEFAULT_SEARCH_TERM_MODEL,
    DEFAULT_SEARCH_TERM_PROVIDERS,
)
from landing_seo.services.prompts import (
    KEYWORD_SYSTEM_PROMPT,
    KEYWORD_USER_PROMPT,
    SEARCH_TERM_AGENT_SYSTEM_PROMPT,
    SEARCH_TERM_AGENT_USER_PROMPT,
)
from landing_seo.services.schemas import (
    KEYWORDS_TOOL,
    SEARCH_TERMS_TOOL,
    keywords_tool,
    search_terms_tool,
)

KEYWORD_COUNT = 8
SEARCH_TERM_COUNT = 15


def keyword_agent_config(count: int = KEYWORD_COUNT) -> AgentConfig:
    """Preset for the keyword task: *count* requested keywords, 3 iterations."""
    return AgentConfig(
        model_name=DEFAULT_KEYWORD_MODEL.name,
        providers=DEFAULT_KEYWORD_PROVIDERS,
        system_prompt=KEYWORD_SYSTEM_PROMPT,
        user_prompt_format=KEYWORD_USER_PROMPT.format(
            count=count, tool_name=KEYWORDS_TOOL,
        ),
        tool_schema=keywords_tool(count),
        temperature=0.7,
        max_iterations=3,
        metadata={"task": "keywords"},
    )


def search_term_agent_config(count: int = SEARCH_TERM_COUNT) -> AgentConfig:
    """Preset for the conversational search-term task."""
    return AgentConfig(
        model_name=DEFAULT_SEARCH_TERM_MODEL.name,
        providers=DEFAULT_SEARCH_TERM_PROVIDERS,
        system_prompt=SEARCH_TERM_AGENT_SYSTEM_PROMPT,
        user_prompt_format=SEARCH_TERM_AGENT_USER_PROMPT.format(
            count=count, tool_name=SEARCH_TERMS_TOOL,
        ),
        tool_schema=search_terms_tool(count),
        temperature=0.8,
        max_iterations=3,
        metadata={"task": "search_terms"},
    )
