"""Domain exceptions for landing-page SEO generation.

All domain-specific exceptions inherit from ``LandingSeoError`` so callers
can catch the full family with a single ``except`` clause when needed.
Each subclass carries a ``kind`` tag naming the failure category; the
underlying cause is chained via ``raise ... from``.
"""

from __future__ import annotations

from typing import Any


class LandingSeoError(Exception):
    """Base exception for all landing-seo domain errors."""

    kind: str = "error"

    def __init__(self, message: str = "", details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details: dict[str, Any] = details or {}

    @property
    def cause(self) -> BaseException | None:
        """The wrapped underlying exception, if any."""
        return self.__cause__


class ConfigurationError(LandingSeoError):
    """Raised when required configuration is missing or invalid."""

    kind = "configuration"


class ExternalCallFailure(LandingSeoError):
    """Raised when a structured model call fails.

    Covers network errors, provider-side errors, timeouts and deadline
    expiry.  Fatal on the initial generation call, recoverable during
    refinement.
    """

    kind = "external_call_failure"

    def __init__(
        self,
        message: str = "External model call failed",
        model: str = "",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.model = model


class SchemaViolation(LandingSeoError):
    """Raised when a structured response is missing fields or has the wrong
    number of elements.
    """

    kind = "schema_violation"

    def __init__(
        self,
        message: str = "Structured response violates its schema",
        tool_name: str = "",
        expected_count: int | None = None,
        actual_count: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.tool_name = tool_name
        self.expected_count = expected_count
        self.actual_count = actual_count


class NoUsableResponse(LandingSeoError):
    """Raised when a call succeeded but produced neither a structured result
    nor interpretable text.
    """

    kind = "no_usable_response"


class BudgetExhausted(LandingSeoError):
    """Raised when the generic driver hits its iteration cap without
    completing.  No partial result is returned.
    """

    kind = "budget_exhausted"

    def __init__(
        self,
        message: str = "Iteration budget exhausted",
        iterations: int = 0,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.iterations = iterations


class AgentStalled(LandingSeoError):
    """Raised when the generic driver receives too many consecutive plain-text
    replies without a tool result.
    """

    kind = "agent_stalled"

    def __init__(
        self,
        message: str = "Agent stalled on plain-text replies",
        consecutive_replies: int = 0,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.consecutive_replies = consecutive_replies
