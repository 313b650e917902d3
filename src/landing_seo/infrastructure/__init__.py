"""Infrastructure layer: configuration, deadlines and the structured model call."""

from landing_seo.infrastructure.config import (
    AgentConfig,
    OpenRouterSettings,
    RefinementConfig,
)
from landing_seo.infrastructure.deadline import Deadline

__all__ = [
    "AgentConfig",
    "Deadline",
    "OpenRouterSettings",
    "RefinementConfig",
]
