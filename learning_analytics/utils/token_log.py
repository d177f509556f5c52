from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

# One list per request context; sync endpoints each run in their own copied context.
_ENTRIES: ContextVar[Optional[List[Dict[str, Any]]]] = ContextVar("token_log_entries", default=None)


def extract_token_counts(response: Any) -> Tuple[Optional[int], Optional[int]]:
    usage = getattr(response, "usage_metadata", None) or getattr(response, "usage", None)
    if not usage:
        return None, None
    if isinstance(usage, dict):
        prompt = usage.get("prompt_token_count") or usage.get("input_tokens")
        output = usage.get("candidates_token_count") or usage.get("output_tokens")
        return _safe_int(prompt), _safe_int(output)
    prompt = getattr(usage, "prompt_token_count", None) or getattr(usage, "input_tokens", None)
    output = getattr(usage, "candidates_token_count", None) or getattr(usage, "output_tokens", None)
    return _safe_int(prompt), _safe_int(output)


def log_token_usage(
    usage: str,
    input_tokens: Optional[int],
    output_tokens: Optional[int],
    runtime_seconds: float,
) -> None:
    if input_tokens is None and output_tokens is None:
        return
    logger.info(
        "[USAGE] %s input=%s output=%s runtime=%.2fs",
        usage,
        input_tokens,
        output_tokens,
        runtime_seconds,
    )
    _current_entries().append(
        {
            "usage": usage,
            "input_tokens": input_tokens,
            "output_tokens": output_tokens,
            "runtime_seconds": round(runtime_seconds, 2),
        }
    )


def get_token_entries() -> List[Dict[str, Any]]:
    return [dict(entry) for entry in _current_entries()]


def reset_token_log() -> None:
    _ENTRIES.set([])


def _current_entries() -> List[Dict[str, Any]]:
    entries = _ENTRIES.get()
    if entries is None:
        entries = []
        _ENTRIES.set(entries)
    return entries


def _safe_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
