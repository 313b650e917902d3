"""Local (non-LLM) quality evaluation of candidate search terms.

Classes / functions
-------------------
PatternRule
    Matching rule for one SEO pattern category.
evaluate_quality
    Term list -> :class:`QualityReport`.
calculate_diversity
    Unique-word ratio of a term list.
is_good_enough
    The loop's termination predicate.
identify_missing_patterns
    Quality report -> human-readable gap list.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from landing_seo.domain.enums import PatternCategory
from landing_seo.domain.values import QualityReport

logger = logging.getLogger(__name__)

NO_MISSING_PATTERNS = "None - improve diversity and specificity!"


@dataclass(frozen=True)
class PatternRule:
    """Substring / prefix rule recognizing one pattern category.

    A term (already lower-cased) matches when it contains any of
    ``contains`` or starts with any of ``prefixes``.
    """

    category: PatternCategory
    label: str
    example: str
    contains: tuple[str, ...] = ()
    prefixes: tuple[str, ...] = ()

    def matches(self, term: str) -> bool:
        return any(s in term for s in self.contains) or term.startswith(self.prefixes)

    def describe(self) -> str:
        return f"- {self.label} (e.g., {self.example})"


PATTERN_RULES: tuple[PatternRule, ...] = (
    PatternRule(
        category=PatternCategory.COMPARISON,
        label="Comparison terms",
        example="'X vs Y', 'X alternative'",
        contains=(" vs ", " versus ", "alternative", "comparison"),
    ),
    PatternRule(
        category=PatternCategory.QUESTION,
        label="Question-based",
        example="'where to find X', 'how to get X'",
        prefixes=("where ", "how ", "what ", "which "),
    ),
    PatternRule(
        category=PatternCategory.BEST_LIST,
        label="Best/Top lists",
        example="'best X for Y', 'top X in 2025'",
        contains=("best ", "top ", "most popular"),
    ),
    PatternRule(
        category=PatternCategory.VALUE_PROPOSITION,
        label="Value-focused",
        example="'unlimited X', 'free X trial'",
        contains=("unlimited", "free", "trial", "affordable"),
    ),
    PatternRule(
        category=PatternCategory.FORMAT_MIX,
        label="Format combinations",
        example="'X audiobooks', 'X ebooks'",
        contains=("audiobook", "ebook", "book", "magazine"),
    ),
    PatternRule(
        category=PatternCategory.USER_INTENT,
        label="User intent",
        example="'X for beginners', 'X for commute'",
        contains=(" for ",),
    ),
)


def calculate_diversity(terms: Sequence[str]) -> float:
    """Distinct words divided by total words across *terms*.

    Words are whitespace-delimited.  Returns ``0.0`` when there are no
    words at all.
    """
    unique: set[str] = set()
    total = 0
    for term in terms:
        words = term.split()
        total += len(words)
        unique.update(words)
    if total == 0:
        return 0.0
    return len(unique) / total


def evaluate_quality(terms: Sequence[str]) -> QualityReport:
    """Evaluate *terms* against the six SEO pattern categories.

    Pure and deterministic: the same input always yields the same report.
    """
    lowered = [t.lower() for t in terms]
    flags = {
        rule.category: any(rule.matches(term) for term in lowered)
        for rule in PATTERN_RULES
    }
    report = QualityReport.from_flags(
        flags,
        diversity_score=calculate_diversity(lowered),
        term_count=len(terms),
    )
    logger.debug(
        "evaluate_quality: count=%d patterns=%d/6 diversity=%.3f",
        report.term_count,
        report.pattern_count,
        report.diversity_score,
    )
    return report


def is_good_enough(
    report: QualityReport,
    target_count: int,
    min_patterns: int = 4,
    min_diversity: float = 0.6,
) -> bool:
    """Return ``True`` when *report* meets every termination threshold.

    Requires the exact target count, at least *min_patterns* pattern
    categories and a diversity score of at least *min_diversity*.
    """
    if report.term_count != target_count:
        return False
    return report.pattern_count >= min_patterns and report.diversity_score >= min_diversity


def identify_missing_patterns(report: QualityReport) -> list[str]:
    """List one gap description (with an example) per absent category.

    When every category is present, returns ``[NO_MISSING_PATTERNS]``
    instead of an empty list.
    """
    missing = report.missing_categories
    lines = [rule.describe() for rule in PATTERN_RULES if rule.category in missing]
    if not lines:
        return [NO_MISSING_PATTERNS]
    return lines


def format_missing_patterns(report: QualityReport) -> str:
    """Newline-joined :func:`identify_missing_patterns` for prompts."""
    return "\n".join(identify_missing_patterns(report))
