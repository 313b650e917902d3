"""Configuration dataclasses for landing-page SEO generation.

Each config is a plain ``dataclass`` with a ``validate()`` method that raises
``ValueError`` on invalid combinations.  Configs are **frozen** so one
instance can be shared by concurrent runs without risking mutation; model
and provider choices are passed in explicitly rather than read from
process-wide globals.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import asdict, dataclass, field, fields
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel

from landing_seo.domain.exceptions import ConfigurationError
from landing_seo.infrastructure.llm.models import (
    DEFAULT_SEARCH_TERM_MODEL,
    DEFAULT_SEARCH_TERM_PROVIDERS,
)

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"


# ===================================================================== #
#  OpenRouter transport settings                                         #
# ===================================================================== #

@dataclass(frozen=True)
class OpenRouterSettings:
    """Credentials and attribution headers for the OpenRouter API.

    Attributes
    ----------
    api_key:
        OpenRouter API key.
    base_url:
        OpenAI-compatible endpoint.
    http_referer:
        Sent as ``HTTP-Referer`` for OpenRouter app attribution.
    app_title:
        Sent as ``X-Title`` for OpenRouter app attribution.
    request_timeout:
        Per-request transport timeout in seconds.
    max_retries:
        Transport-level retries performed by the OpenAI client.
    """

    api_key: str = ""
    base_url: str = OPENROUTER_BASE_URL
    http_referer: str = "https://github.com/booktok-hype-hub"
    app_title: str = "BookTok Landing Page Agent"
    request_timeout: float = 60.0
    max_retries: int = 2

    def validate(self) -> None:
        if not self.api_key:
            raise ConfigurationError("OPENROUTER_API_KEY is not set")
        if not self.base_url:
            raise ValueError("base_url must not be empty")
        if self.request_timeout <= 0:
            raise ValueError(
                f"request_timeout must be > 0, got {self.request_timeout}"
            )
        if self.max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {self.max_retries}")

    @property
    def headers(self) -> dict[str, str]:
        return {"HTTP-Referer": self.http_referer, "X-Title": self.app_title}

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["api_key"] = "***" if self.api_key else ""
        return data

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> OpenRouterSettings:
        """Read settings from environment variables.

        Unset variables fall back to the dataclass defaults.  The result is
        not validated, so a missing API key can be reported by the caller.
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        try:
            return cls(
                api_key=env.get("OPENROUTER_API_KEY", "").strip(),
                base_url=env.get("OPENROUTER_BASE_URL", defaults.base_url),
                http_referer=env.get("LANDING_SEO_HTTP_REFERER", defaults.http_referer),
                app_title=env.get("LANDING_SEO_APP_TITLE", defaults.app_title),
                request_timeout=float(
                    env.get("LANDING_SEO_REQUEST_TIMEOUT", defaults.request_timeout)
                ),
                max_retries=int(env.get("LANDING_SEO_MAX_RETRIES", defaults.max_retries)),
            )
        except ValueError as exc:
            raise ConfigurationError(f"Invalid OpenRouter environment setting: {exc}") from exc


# ===================================================================== #
#  Refinement Loop Configuration                                         #
# ===================================================================== #

@dataclass(frozen=True)
class RefinementConfig:
    """Parameters governing the bounded search-term refinement loop.

    Attributes
    ----------
    target_count:
        Exact number of terms every call must return (N).
    max_refinements:
        Maximum refinement calls after the initial generation (K).  The
        loop never issues more than ``max_refinements + 1`` calls.
    min_patterns:
        Pattern categories (out of six) required for "good enough".
    min_diversity:
        Minimum unique-word ratio required for "good enough".
    generation_temperature:
        Sampling temperature of the initial generation call.
    refinement_temperature:
        Sampling temperature of refinement calls.
    model:
        Model identifier.
    providers:
        Ordered provider preference.
    allow_fallbacks:
        Whether the router may fall back to providers outside the list.
    """

    target_count: int = 15
    max_refinements: int = 4
    min_patterns: int = 4
    min_diversity: float = 0.6
    generation_temperature: float = 0.8
    refinement_temperature: float = 0.7
    model: str = DEFAULT_SEARCH_TERM_MODEL.name
    providers: tuple[str, ...] = DEFAULT_SEARCH_TERM_PROVIDERS
    allow_fallbacks: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.providers, tuple):
            object.__setattr__(self, "providers", tuple(self.providers))

    @property
    def max_calls(self) -> int:
        """Hard ceiling on external calls per run."""
        return self.max_refinements + 1

    def validate(self) -> None:
        """Raise ``ValueError`` if any field is out of valid range."""
        if self.target_count < 1:
            raise ValueError(f"target_count must be >= 1, got {self.target_count}")
        if self.max_refinements < 0:
            raise ValueError(
                f"max_refinements must be >= 0, got {self.max_refinements}"
            )
        if not (0 <= self.min_patterns <= 6):
            raise ValueError(f"min_patterns must be in [0, 6], got {self.min_patterns}")
        if not (0.0 <= self.min_diversity <= 1.0):
            raise ValueError(
                f"min_diversity must be in [0, 1], got {self.min_diversity}"
            )
        for name in ("generation_temperature", "refinement_temperature"):
            value = getattr(self, name)
            if not (0.0 <= value <= 2.0):
                raise ValueError(f"{name} must be in [0, 2], got {value}")
        if not self.model:
            raise ValueError("model must not be empty")

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["providers"] = list(self.providers)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RefinementConfig:
        valid_keys = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        cfg = cls(**filtered)
        cfg.validate()
        return cfg


# ===================================================================== #
#  Generic Agent Configuration                                           #
# ===================================================================== #

@dataclass(frozen=True)
class AgentConfig:
    """Describes one task for the generic think-act-observe-refine driver.

    Attributes
    ----------
    model_name:
        Model identifier.
    providers:
        Ordered provider preference.
    system_prompt:
        Role instructions sent as the first message.
    user_prompt_format:
        Task instructions; ``{input}`` is replaced by the run input.
    tool_schema:
        Pydantic model declaring the tool the model must call to finish.
    temperature:
        Sampling temperature.
    max_iterations:
        Iteration cap; reaching it without a tool result is a failure.
    allow_fallbacks:
        Whether the router may fall back to providers outside the list.
    max_stalled_responses:
        Consecutive plain-text replies tolerated before the run is
        declared stalled.
    metadata:
        Free-form labels copied onto every :class:`AgentResult`.  Stored
        as a read-only mapping.
    """

    model_name: str
    system_prompt: str
    user_prompt_format: str
    tool_schema: type[BaseModel]
    providers: tuple[str, ...] = ()
    temperature: float = 0.7
    max_iterations: int = 3
    allow_fallbacks: bool = False
    max_stalled_responses: int = 2
    metadata: Mapping[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def __post_init__(self) -> None:
        if not isinstance(self.providers, tuple):
            object.__setattr__(self, "providers", tuple(self.providers))
        # read-only snapshot of the caller's mapping
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    @property
    def tool_name(self) -> str:
        return self.tool_schema.__name__

    def render_user_prompt(self, user_input: str) -> str:
        return self.user_prompt_format.format(input=user_input)

    def validate(self) -> None:
        if not self.model_name:
            raise ValueError("model_name must not be empty")
        if not self.system_prompt:
            raise ValueError("system_prompt must not be empty")
        if "{input}" not in self.user_prompt_format:
            raise ValueError("user_prompt_format must contain an '{input}' placeholder")
        if not (isinstance(self.tool_schema, type) and issubclass(self.tool_schema, BaseModel)):
            raise ValueError("tool_schema must be a pydantic BaseModel subclass")
        if not (0.0 <= self.temperature <= 2.0):
            raise ValueError(
                f"temperature must be in [0, 2], got {self.temperature}"
            )
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be >= 1, got {self.max_iterations}")
        if self.max_stalled_responses < 1:
            raise ValueError(
                f"max_stalled_responses must be >= 1, got {self.max_stalled_responses}"
            )

    def to_dict(self) -> dict[str, Any]:
        return {
            "model_name": self.model_name,
            "providers": list(self.providers),
            "system_prompt": self.system_prompt,
            "user_prompt_format": self.user_prompt_format,
            "tool": self.tool_name,
            "temperature": self.temperature,
            "max_iterations": self.max_iterations,
            "allow_fallbacks": self.allow_fallbacks,
            "max_stalled_responses": self.max_stalled_responses,
        }


# ===================================================================== #
#  Unified config loader                                                 #
# ===================================================================== #

def load_refinement_config_from_json(json_str: str) -> RefinementConfig:
    """Parse a JSON object into a validated :class:`RefinementConfig`.

    Unknown keys are ignored.
    """
    raw = json.loads(json_str)
    if not isinstance(raw, dict):
        raise ValueError("Top-level JSON must be an object")
    return RefinementConfig.from_dict(raw)
