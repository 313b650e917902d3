"""Prompt templates for keyword and search-term generation.

The refinement prompts are rebuilt from the current term snapshot on every
call; no earlier turns are carried over.
"""

from __future__ import annotations

from collections.abc import Sequence

from langchain_core.prompts import ChatPromptTemplate

# -- Search terms: initial generation ----------------------------------------

SEARCH_TERMS_GENERATION_PROMPT = ChatPromptTemplate.from_messages(
    [
        (
            "system",
            "You are a SEO search term specialist. Your ONLY job is generating "
            "highly specific, conversion-focused search terms for book discovery "
            "and audiobook services.\n\n"
            "You are an EXPERT at crafting search queries that real users type "
            "when looking for content.",
        ),
        (
            "human",
            "Generate EXACTLY {count} specific, must-target search terms for a "
            "Nextory landing page.\n\n"
            'Theme: "{theme}"\n'
            "Base Keywords: {base_keywords}\n\n"
            "REQUIREMENTS - You MUST include diverse search patterns:\n"
            '- Comparison terms (e.g., "X vs Y", "X alternative")\n'
            '- Question-based (e.g., "where to find X", "how to get X")\n'
            '- Best/Top lists (e.g., "best X for Y", "top X in 2025")\n'
            '- Value-focused (e.g., "unlimited X", "free X trial")\n'
            '- Format combinations (e.g., "X audiobooks", "X ebooks")\n'
            '- User intent (e.g., "X for beginners", "X for commute")\n'
            '- Specific use cases (e.g., "X for family", "X for kids")\n\n'
            "Make them SPECIFIC and CONVERSION-FOCUSED!\n"
            "Use the {tool_name} tool with EXACTLY {count} terms.",
        ),
    ]
)

# -- Search terms: stateless refinement --------------------------------------

SEARCH_TERMS_REFINEMENT_PROMPT = ChatPromptTemplate.from_messages(
    [
        (
            "system",
            "You are a SEO search term refinement specialist. You improve "
            "existing search terms by adding missing patterns and increasing "
            "diversity.",
        ),
        (
            "human",
            'Refine these {current_count} search terms for theme "{theme}":\n\n'
            "CURRENT TERMS:\n{current_terms}\n\n"
            "MISSING PATTERNS:\n{missing_patterns}\n\n"
            "Generate EXACTLY {count} improved search terms that:\n"
            "1. Keep the good ones from current terms\n"
            "2. Add new terms covering missing patterns\n"
            "3. Ensure high diversity and conversion focus\n\n"
            "Use the {tool_name} tool with EXACTLY {count} terms.",
        ),
    ]
)

# -- Agent presets -----------------------------------------------------------

KEYWORD_SYSTEM_PROMPT = (
    "You are a SEO expert specializing in book discovery and audiobook "
    "streaming services."
)

KEYWORD_USER_PROMPT = (
    'Generate {count} SEO keywords for a Nextory landing page about "{{input}}".\n\n'
    "Consider various angles based on theme, for example:\n"
    "- Format variations: audiobooks, ebooks, magazines\n"
    "- Intent signals: best, top, popular, trending, recommendations\n"
    "- Value propositions: unlimited, family, streaming, free trial\n"
    "- Use cases: for commute, for family, for kids\n\n"
    "Mix broad discovery terms with long-tail conversion keywords. "
    "Use the {tool_name} tool."
)

SEARCH_TERM_AGENT_SYSTEM_PROMPT = (
    "You are a SEO expert specializing in search term optimization for book "
    "discovery and audiobook streaming services. Focus on high-intent, "
    "conversion-oriented search terms."
)

SEARCH_TERM_AGENT_USER_PROMPT = (
    "Generate EXACTLY {count} specific, must-target search terms for a Nextory "
    "landing page.\n\n"
    "{{input}}\n\n"
    "Requirements:\n"
    "- Generate EXACTLY {count} search terms (no more, no less)\n"
    "- Each term should be highly specific and conversion-focused\n"
    "- Combine the theme with various modifiers and intents\n"
    "- Include different search patterns based on theme:\n"
    '  * Comparison terms (e.g., "X vs Y", "X alternative")\n'
    '  * Question-based (e.g., "where to find X", "how to get X")\n'
    '  * Best/Top lists (e.g., "best X for Y", "top X in 2025")\n'
    '  * Value-focused (e.g., "unlimited X", "free X trial")\n'
    '  * Format combinations (e.g., "X audiobooks", "X ebooks")\n'
    '  * User intent (e.g., "X for beginners", "X for commute")\n'
    '  * Specific use cases (e.g., "X for family", "X for kids")\n\n'
    "Use the {tool_name} tool with EXACTLY {count} terms."
)

# Sent after a plain-text reply so the next turn asks for the tool again.
TOOL_REMINDER_PROMPT = (
    "Please submit your final answer now by calling the {tool_name} tool."
)


def format_terms_for_prompt(terms: Sequence[str]) -> str:
    """Number *terms* one per line, starting at 1."""
    return "\n".join(f"{i}. {term}" for i, term in enumerate(terms, start=1))


def format_keywords(keywords: Sequence[str]) -> str:
    return ", ".join(keywords)


def search_term_agent_input(theme: str, base_keywords: Sequence[str]) -> str:
    """Render the theme/keywords block for the search-term agent preset."""
    return f'Theme: "{theme}"\nBase Keywords: {format_keywords(base_keywords)}'
