from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from .constants import Limits


def parse_number(raw: str) -> Optional[Union[int, float]]:
    """Return ``int`` for whole numbers, ``float`` otherwise, ``None`` if not numeric."""
    try:
        f = float(raw.strip().rstrip("%"))
    except (AttributeError, ValueError):
        return None
    if f != f or f in (float("inf"), float("-inf")):
        return None
    return int(f) if f == int(f) else f


def safe_read_text(path: Path, max_bytes: int = Limits.MAX_LOG_BYTES) -> str:
    data = path.read_bytes()
    if len(data) > max_bytes:
        raise ValueError(f"File too large: {path} ({len(data)} bytes)")
    return data.decode("utf-8-sig", errors="replace")


def count_matching(directory: Path, pattern: str) -> int:
    """Plain file count for ``pattern`` in ``directory`` (0 when it is missing)."""
    if not directory.is_dir():
        return 0
    return sum(1 for p in directory.glob(pattern) if p.is_file())
