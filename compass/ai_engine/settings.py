from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Dict, List


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.environ.get(name, str(default)))
    except Exception:
        return int(default)


def _env_str(name: str, default: str = "") -> str:
    return (os.environ.get(name, default) or default).strip()


OPENAI = "openai"
ANTHROPIC = "anthropic"

DEFAULT_OPENAI_MODEL = "gpt-4o"
DEFAULT_ANTHROPIC_MODEL = "anthropic/claude-3.5-sonnet"
OPENAI_BASE_URL = "https://api.openai.com/v1"
OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"


@dataclass(frozen=True)
class ProviderSpec:
    name: str
    api_key: str
    base_url: str
    model: str
    default_headers: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class AISettings:
    ai_service: str = ANTHROPIC
    openai_api_key: str = ""
    openai_model: str = DEFAULT_OPENAI_MODEL
    openrouter_api_key: str = ""
    anthropic_model: str = DEFAULT_ANTHROPIC_MODEL
    timeout_s: int = 60
    max_retries: int = 1
    retry_sleep_ms: int = 300


def get_ai_settings() -> AISettings:
    return AISettings(
        ai_service=_env_str("AI_SERVICE", ANTHROPIC).lower(),
        openai_api_key=_env_str("OPENAI_API_KEY"),
        openai_model=_env_str("OPENAI_MODEL", DEFAULT_OPENAI_MODEL),
        openrouter_api_key=_env_str("OPENROUTER_API_KEY"),
        anthropic_model=_env_str("ANTHROPIC_MODEL", DEFAULT_ANTHROPIC_MODEL),
        timeout_s=max(_env_int("AI_TIMEOUT_S", 60), 1),
        max_retries=max(_env_int("AI_MAX_RETRIES", 1), 0),
        retry_sleep_ms=max(_env_int("AI_RETRY_SLEEP_MS", 300), 0),
    )


def _openai_spec(settings: AISettings) -> ProviderSpec:
    return ProviderSpec(
        name=OPENAI,
        api_key=settings.openai_api_key,
        base_url=OPENAI_BASE_URL,
        model=settings.openai_model,
    )


def _anthropic_spec(settings: AISettings) -> ProviderSpec:
    return ProviderSpec(
        name=ANTHROPIC,
        api_key=settings.openrouter_api_key,
        base_url=OPENROUTER_BASE_URL,
        model=settings.anthropic_model,
        default_headers={"HTTP-Referer": "http://localhost:8000", "X-Title": "CollegeCompass"},
    )


def get_provider_chain(settings: AISettings | None = None) -> List[ProviderSpec]:
    """
    Providers in the order they should be tried. OpenAI leads when
    AI_SERVICE=openai or when no Claude key is configured; providers
    without an API key are dropped.
    """
    cfg = settings or get_ai_settings()
    openai_spec = _openai_spec(cfg)
    anthropic_spec = _anthropic_spec(cfg)
    if cfg.ai_service == OPENAI or not anthropic_spec.api_key:
        ordered = [openai_spec, anthropic_spec]
    else:
        ordered = [anthropic_spec, openai_spec]
    return [p for p in ordered if p.api_key]
