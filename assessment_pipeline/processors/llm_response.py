"""
Normalize raw vision/LLM OCR output into a single payload dict.

Handles bare JSON, JSON wrapped in markdown code fences, JSONL-style
multi-line output and OpenAI-like envelopes, returning the first usable
dict for the normalizer.
"""

import json
import logging
import re
from collections.abc import Mapping
from typing import Any

from assessment_pipeline.errors.codes import IssueCode

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)


def _try_parse_inner_json(text: str) -> dict[str, Any] | None:
    try:
        obj = json.loads(text)
    except (TypeError, ValueError):
        return None
    if isinstance(obj, dict):
        return obj
    if isinstance(obj, str):
        # JSON-encoded JSON string
        return _try_parse_inner_json(obj)
    return None


def _parse_text(text: str) -> dict[str, Any] | None:
    text = text.strip()
    if not text:
        return None

    fenced = _CODE_FENCE.search(text)
    if fenced:
        inner = _try_parse_inner_json(fenced.group(1).strip())
        if inner is not None:
            return _unwrap(inner)

    inner = _try_parse_inner_json(text)
    if inner is not None:
        return _unwrap(inner)

    for line in text.splitlines():
        inner = _try_parse_inner_json(line.strip())
        if inner is not None:
            return _unwrap(inner)

    start, end = text.find("{"), text.rfind("}")
    if 0 <= start < end:
        inner = _try_parse_inner_json(text[start : end + 1])
        if inner is not None:
            return _unwrap(inner)
    return None


def _extract_from_openai_like(obj: Mapping[str, Any]) -> dict[str, Any] | None:
    choices = obj.get("choices")
    if isinstance(choices, list) and choices:
        first_choice = choices[0]
        if isinstance(first_choice, dict):
            msg = first_choice.get("message")
            if isinstance(msg, dict) and isinstance(msg.get("content"), str):
                inner = _parse_text(msg["content"])
                if inner is not None:
                    return inner
            if isinstance(first_choice.get("text"), str):
                inner = _parse_text(first_choice["text"])
                if inner is not None:
                    return inner
    # Some providers include direct top-level content
    content = obj.get("content")
    if isinstance(content, str):
        return _parse_text(content)
    return None


def _unwrap(obj: dict[str, Any]) -> dict[str, Any]:
    inner = _extract_from_openai_like(obj)
    return inner if inner is not None else obj


def parse_llm_payload(raw: Any) -> dict[str, Any]:
    """
    Turn raw OCR/LLM output into an extraction payload.

    Args:
      raw: A dict (possibly an OpenAI-like envelope) or response text.

    Returns:
      The payload dict, or an empty dict if no JSON object is found.
    """
    result: dict[str, Any] | None = None
    if isinstance(raw, Mapping):
        result = _unwrap(dict(raw))
    elif isinstance(raw, (str, bytes)):
        text = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
        result = _parse_text(text)

    if result is None:
        logger.warning(
            "LLM output contained no JSON object",
            extra={"error_code": IssueCode.UNPARSABLE_LLM_OUTPUT.value.code},
        )
        return {}
    return result
