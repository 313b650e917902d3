"""Service layer for landing-seo.

Re-exports the pure building blocks::

    from landing_seo.services import (
        evaluate_quality, is_good_enough, identify_missing_patterns,
        format_missing_patterns, extract_string_list, extract_list_result,
        search_terms_tool, keywords_tool,
    )

The orchestration entry points live in :mod:`landing_seo.services.strategies`
and :mod:`landing_seo.services.generation`, which depend on the graph layer
and are re-exported from the top-level package instead.
"""

from landing_seo.services.extraction import extract_list_result, extract_string_list
from landing_seo.services.quality import (
    NO_MISSING_PATTERNS,
    PATTERN_RULES,
    PatternRule,
    calculate_diversity,
    evaluate_quality,
    format_missing_patterns,
    identify_missing_patterns,
    is_good_enough,
)
from landing_seo.services.schemas import (
    KEYWORDS_FIELD,
    KEYWORDS_TOOL,
    SEARCH_TERMS_FIELD,
    SEARCH_TERMS_TOOL,
    keywords_tool,
    make_string_list_tool,
    search_terms_tool,
)

__all__ = [
    # Quality
    "NO_MISSING_PATTERNS",
    "PATTERN_RULES",
    "PatternRule",
    "calculate_diversity",
    "evaluate_quality",
    "format_missing_patterns",
    "identify_missing_patterns",
    "is_good_enough",
    # Extraction
    "extract_list_result",
    "extract_string_list",
    # Schemas
    "KEYWORDS_FIELD",
    "KEYWORDS_TOOL",
    "SEARCH_TERMS_FIELD",
    "SEARCH_TERMS_TOOL",
    "keywords_tool",
    "make_string_list_tool",
    "search_terms_tool",
]
