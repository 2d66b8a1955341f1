from __future__ import annotations

from typing import Any

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from .settings import AISettings, ProviderSpec


def build_llm(
    provider: ProviderSpec,
    settings: AISettings,
    *,
    temperature: float = 0.2,
    max_tokens: int = 2000,
) -> ChatOpenAI:
    return ChatOpenAI(
        openai_api_key=provider.api_key,
        openai_api_base=provider.base_url,
        model_name=provider.model,
        temperature=float(temperature),
        max_tokens=int(max_tokens),
        request_timeout=int(settings.timeout_s),
        max_retries=int(settings.max_retries),
        default_headers=dict(provider.default_headers) or None,
    )


def _content_to_text(content: Any) -> str:
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, dict) and block.get("type") == "text":
                parts.append(str(block.get("text") or ""))
            elif isinstance(block, str):
                parts.append(block)
        return "".join(parts)
    return str(content or "")


def invoke_text(llm: Any, prompt: str, system: str = "") -> str:
    messages = []
    if system:
        messages.append(SystemMessage(content=system))
    messages.append(HumanMessage(content=prompt))
    out = llm.invoke(messages)
    if hasattr(out, "content"):
        return _content_to_text(out.content)
    return str(out)
