# src/cache/fingerprint.py — v4
"""Request fingerprinting for the response cache.

A fingerprint is a SHA-256 digest over a canonical JSON serialization of
(task, normalized input, options). Structured serialization keeps
semantically different requests apart even when their string forms would
collide (e.g. "a:b" + "c" vs "a" + ":bc").

Triage and care plan records are first read as a ClientRecord, so a plain
mapping and the equivalent model (aliases, defaults) share one fingerprint.
"""

from __future__ import annotations

import hashlib
import json
import re
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ValidationError

from firstcontact.tiers.models import ClientRecord

_RECORD_TASKS = frozenset({"triage", "careplan"})


def compute_fingerprint(
    task: str,
    input_data: Any,
    options: Mapping[str, Any] | None = None,
) -> str:
    """Compute the cache fingerprint for a routed request.

    Args:
        task: Task kind (navigator, triage, careplan, ...).
        input_data: Free-text query or structured client record.
        options: Routing options (context, caseworker context, ...).

    Returns:
        Opaque hex digest; equal inputs always give equal digests.
    """
    canonical = {
        "task": task,
        "input": normalize_input(_canonical_record(task, input_data)),
        "options": normalize_input(dict(options or {})),
    }
    payload = json.dumps(
        canonical, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=str
    )
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def _canonical_record(task: str, input_data: Any) -> Any:
    """Dump client records by alias with defaults filled in."""
    if task not in _RECORD_TASKS or not isinstance(input_data, (Mapping, ClientRecord)):
        return input_data
    try:
        record = ClientRecord.model_validate(input_data)
    except ValidationError:
        # Hashed as given; the rules tier reports the invalid record.
        return input_data
    return record.model_dump(mode="json", by_alias=True)


def normalize_input(value: Any) -> Any:
    """Reduce a value to plain JSON-compatible data with stable text.

    Strings are stripped and inner whitespace collapsed; models are dumped;
    tuples and sets become lists (sets sorted for determinism).
    """
    if isinstance(value, BaseModel):
        return normalize_input(value.model_dump(mode="json"))
    if isinstance(value, str):
        return _normalize_text(value)
    if isinstance(value, Mapping):
        return {str(k): normalize_input(v) for k, v in value.items()}
    if isinstance(value, (set, frozenset)):
        return sorted((normalize_input(v) for v in value), key=repr)
    if isinstance(value, (list, tuple)):
        return [normalize_input(v) for v in value]
    return value


def _normalize_text(text: str) -> str:
    """Collapse runs of whitespace and strip the ends."""
    return re.sub(r"\s+", " ", text).strip()
