from __future__ import annotations

import json
import sys
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator

_SENSITIVE_TOKENS = ("token", "secret", "password", "api_key", "apikey", "authorization")


def escape_workflow_command(value: str) -> str:
    """Escape a message for GitHub workflow commands (``::warning::`` etc.)."""
    if value is None:
        return ""
    return str(value).replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class GateLogger:
    """Structured JSON logger with GitHub Actions annotations.

    Every record is one JSON line on stderr. Warnings and errors are mirrored
    as workflow commands so they surface in the Actions UI.
    """

    def __init__(self, run_id: str, *, debug: bool = False):
        self.run_id = run_id
        self.debug_enabled = debug

    @classmethod
    def for_run(cls, *, debug: bool = False) -> "GateLogger":
        return cls(str(uuid.uuid4()), debug=debug)

    def debug(self, message: str, **kwargs: Any) -> None:
        if self.debug_enabled:
            self._emit("debug", message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._emit("info", message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._emit("warning", message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._emit("error", message, **kwargs)

    @contextmanager
    def stage(self, name: str) -> Iterator[None]:
        """Log start, end and duration of a named stage."""
        start = datetime.now(timezone.utc)
        self.info("stage_start", stage=name)
        status = "ok"
        try:
            yield
        except Exception as exc:
            status = "error"
            self.error("stage_error", stage=name, error=str(exc))
            raise
        finally:
            duration_ms = int((datetime.now(timezone.utc) - start).total_seconds() * 1000)
            self.info("stage_end", stage=name, duration_ms=duration_ms, status=status)

    def _emit(self, level: str, message: str, **kwargs: Any) -> None:
        payload: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level,
            "run_id": self.run_id,
            "message": message,
        }
        payload.update(self._sanitize(kwargs))

        sys.stderr.write(json.dumps(payload, ensure_ascii=False, default=str) + "\n")
        if level in ("warning", "error"):
            sys.stderr.write(f"::{level}::{escape_workflow_command(message)}\n")
        sys.stderr.flush()

    @staticmethod
    def _sanitize(fields: Dict[str, Any]) -> Dict[str, Any]:
        return {
            key: "***" if GateLogger._is_sensitive_key(key) else value
            for key, value in fields.items()
        }

    @staticmethod
    def _is_sensitive_key(key: str) -> bool:
        lowered = key.lower()
        return any(token in lowered for token in _SENSITIVE_TOKENS)
