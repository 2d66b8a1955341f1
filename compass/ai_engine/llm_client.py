from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Iterable, Optional

from .llm import build_llm, invoke_text
from .settings import AISettings, ProviderSpec, get_ai_settings, get_provider_chain

logger = logging.getLogger(__name__)


@dataclass
class LLMResult:
    ok: bool
    text: str = ""
    provider: str = ""
    model: str = ""
    fallback_used: bool = False
    llm_ms: int = 0
    error: str = ""


def attempt_provider(
    provider: ProviderSpec,
    *,
    prompt: str,
    system: str,
    settings: AISettings,
    temperature: float,
    max_tokens: int,
) -> LLMResult:
    """One provider call. Failures come back as ``ok=False``, never raised."""
    t0 = time.time()
    try:
        llm = build_llm(provider, settings, temperature=temperature, max_tokens=max_tokens)
        text = str(invoke_text(llm, prompt, system=system) or "").strip()
    except Exception as exc:
        return LLMResult(ok=False, provider=provider.name, model=provider.model, error=str(exc))
    llm_ms = int(max((time.time() - t0) * 1000, 0))
    if not text:
        return LLMResult(ok=False, provider=provider.name, model=provider.model, llm_ms=llm_ms, error="empty response")
    return LLMResult(ok=True, text=text, provider=provider.name, model=provider.model, llm_ms=llm_ms)


def invoke_with_provider_fallback(
    *,
    prompt: str,
    system: str = "",
    temperature: float = 0.2,
    max_tokens: int = 2000,
    providers: Optional[Iterable[ProviderSpec]] = None,
    settings: AISettings | None = None,
) -> LLMResult:
    cfg = settings or get_ai_settings()
    candidates = list(providers) if providers is not None else get_provider_chain(cfg)
    if not candidates:
        logger.warning("llm_no_provider_configured")
        return LLMResult(ok=False, error="no text-generation provider configured")

    last = LLMResult(ok=False)
    for idx, provider in enumerate(candidates):
        result = attempt_provider(
            provider,
            prompt=prompt,
            system=system,
            settings=cfg,
            temperature=temperature,
            max_tokens=max_tokens,
        )
        result.fallback_used = idx > 0
        if result.ok:
            if result.fallback_used:
                logger.info("llm_fallback_succeeded provider=%s model=%s", result.provider, result.model)
            return result
        logger.warning("llm_provider_failed provider=%s model=%s err=%s", result.provider, result.model, result.error)
        last = result
        if idx < len(candidates) - 1:
            time.sleep(cfg.retry_sleep_ms / 1000.0)

    return LLMResult(
        ok=False,
        provider=last.provider,
        model=last.model,
        fallback_used=len(candidates) > 1,
        error=last.error,
    )
