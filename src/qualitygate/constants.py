from __future__ import annotations

from enum import Enum


class ExitCode(int, Enum):
    """Process exit codes."""

    SUCCESS = 0
    ERROR = 2


class Limits:
    """Shared hard limits."""

    MAX_DETAIL_CHARS = 200
    MAX_LOG_BYTES = 5_000_000
    MAX_RENDERED_DETAILS = 50


TRUNCATION_MARKER = "…"

DEFAULT_DIFF_SUFFIXES = ("_diff.png",)

DEFAULT_FAIL_PATTERNS = (
    r"^.*\[E\].*$",
    r"^.*Some tests failed.*$",
    r"^.*Test failed.*$",
    r"^.*EXCEPTION CAUGHT BY.*$",
)
