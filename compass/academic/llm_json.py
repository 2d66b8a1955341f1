from __future__ import annotations

import json
import re
from typing import Any, List, Optional

_FENCED_JSON_RE = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL | re.IGNORECASE)
_OBJECT_SPAN_RE = re.compile(r"\{[\s\S]*\}")
_ARRAY_SPAN_RE = re.compile(r"\[[\s\S]*\]")

# "//" preceded by ":" is left alone so URLs inside strings survive.
_LINE_COMMENT_RE = re.compile(r"(?<!:)//[^\r\n]*")
_BLOCK_COMMENT_RE = re.compile(r"/\*[\s\S]*?\*/")
_TRAILING_COMMA_RE = re.compile(r",(\s*[}\]])")


def strip_json_noise(text: str) -> str:
    cleaned = _BLOCK_COMMENT_RE.sub("", text or "")
    cleaned = _LINE_COMMENT_RE.sub("", cleaned)
    cleaned = _TRAILING_COMMA_RE.sub(r"\1", cleaned)
    return cleaned.strip()


def find_object_span(text: str) -> Optional[str]:
    m = _OBJECT_SPAN_RE.search(text or "")
    return m.group(0) if m else None


def extract_json_array(text: str) -> Optional[List[Any]]:
    """
    Best-effort JSON array from model output: whole text, fenced block,
    first ``[...]`` span. An object wrapping a ``recommendations`` list is
    accepted too.
    """
    if not text:
        return None
    raw = text.strip()
    candidates: List[str] = [raw]
    fenced = _FENCED_JSON_RE.search(raw)
    if fenced:
        candidates.append(fenced.group(1).strip())
    span = _ARRAY_SPAN_RE.search(raw)
    if span:
        candidates.append(span.group(0))

    for candidate in candidates:
        try:
            data = json.loads(candidate)
        except Exception:
            continue
        if isinstance(data, list):
            return data
        if isinstance(data, dict) and isinstance(data.get("recommendations"), list):
            return data["recommendations"]
    return None
