"""storage.parsing

Parsing of stored/imported JSON text.

Stored text is expected to be exactly what we wrote, so there is no repair
step here: either it is a JSON object or it is rejected with an error
message the caller can log.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ParseResult:
    data: Optional[Dict[str, Any]]
    raw: str
    error: str = ""


def strip_bom(s: str) -> str:
    return (s or "").lstrip("\ufeff").strip()


def try_parse_json(raw: str) -> ParseResult:
    """Parse a JSON object. Returns ParseResult(data=None, error=...) on failure."""
    s = strip_bom(raw)
    if not s:
        return ParseResult(data=None, raw=raw, error="empty input")
    try:
        obj = json.loads(s)
    except ValueError as e:
        return ParseResult(data=None, raw=raw, error=f"json.loads: {type(e).__name__}: {e}")
    if not isinstance(obj, dict):
        return ParseResult(data=None, raw=raw, error="JSON root is not an object")
    return ParseResult(data=obj, raw=raw)


def must_parse_json(raw: str) -> Dict[str, Any]:
    res = try_parse_json(raw)
    if res.data is None:
        raise ValueError(res.error or "JSON parse failed")
    return res.data
