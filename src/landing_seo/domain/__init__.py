"""Domain layer: enums, value objects and exceptions."""

from landing_seo.domain.enums import (
    AgentPhase,
    AgentStopReason,
    PatternCategory,
    RefinementOutcome,
    RefinementPhase,
)
from landing_seo.domain.exceptions import (
    AgentStalled,
    BudgetExhausted,
    ConfigurationError,
    ExternalCallFailure,
    LandingSeoError,
    NoUsableResponse,
    SchemaViolation,
)
from landing_seo.domain.values import (
    AgentResult,
    ModelDescriptor,
    QualityReport,
    RefinementResult,
)

__all__ = [
    # Enums
    "AgentPhase",
    "AgentStopReason",
    "PatternCategory",
    "RefinementOutcome",
    "RefinementPhase",
    # Exceptions
    "AgentStalled",
    "BudgetExhausted",
    "ConfigurationError",
    "ExternalCallFailure",
    "LandingSeoError",
    "NoUsableResponse",
    "SchemaViolation",
    # Values
    "AgentResult",
    "ModelDescriptor",
    "QualityReport",
    "RefinementResult",
]
