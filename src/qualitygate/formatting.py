from __future__ import annotations

from typing import Optional, Union

from .constants import TRUNCATION_MARKER

Number = Union[int, float]


def truncate(text: str, max_len: int, marker: str = TRUNCATION_MARKER) -> str:
    """Cut ``text`` to exactly ``max_len`` characters and append ``marker`` when cut."""
    if not text:
        return ""
    if max_len <= 0:
        return ""
    if len(text) <= max_len:
        return text
    return text[:max_len] + marker


def format_number(value: Number) -> str:
    """88.0 renders as ``88``, 85.5 as ``85.5``."""
    try:
        f = float(value)
    except (TypeError, ValueError):
        return "0"
    if f == int(f):
        return str(int(f))
    return f"{f:.2f}".rstrip("0").rstrip(".")


def format_percent(value: Optional[Number]) -> str:
    if value is None:
        return "n/a"
    return f"{format_number(value)}%"


def format_count(count: int, noun: str) -> str:
    """Counts of zero read as "not found" rather than "0"."""
    if not count:
        return f"{noun}: not found"
    return f"{noun}: {count}"
