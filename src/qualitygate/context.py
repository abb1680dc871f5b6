from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional


def _load_event() -> Dict[str, Any]:
    event_path = os.environ.get("GITHUB_EVENT_PATH")
    if not event_path:
        return {}
    try:
        event = json.loads(Path(event_path).read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        return {}
    return event if isinstance(event, dict) else {}


def _coerce_int(value: Any) -> Optional[int]:
    try:
        return int(value) if value is not None else None
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class GitHubContext:
    """Immutable GitHub Actions context.

    Unlike a hard failure, a missing repository or pull request simply leaves
    the fields empty; the publisher treats that as "nothing to comment on".
    """

    repo_full_name: str  # "owner/name", empty outside Actions
    event_name: str
    pr_number: Optional[int]

    @property
    def has_repository(self) -> bool:
        owner, _, name = self.repo_full_name.partition("/")
        return bool(owner and name)

    @property
    def is_pull_request(self) -> bool:
        return self.pr_number is not None

    @classmethod
    def from_environment(cls) -> "GitHubContext":
        """Load context from the GitHub Actions environment. Never raises."""
        event = _load_event()

        repository = event.get("repository")
        repo_full_name = (
            os.environ.get("GITHUB_REPOSITORY")
            or (repository.get("full_name") if isinstance(repository, dict) else None)
            or ""
        )

        pr = event.get("pull_request")
        pr_number = None
        if isinstance(pr, dict) and pr:
            pr_number = _coerce_int(event.get("number") or pr.get("number"))
        elif os.environ.get("GITHUB_PR_NUMBER"):
            pr_number = _coerce_int(os.environ.get("GITHUB_PR_NUMBER"))

        return cls(
            repo_full_name=repo_full_name,
            event_name=os.environ.get("GITHUB_EVENT_NAME", ""),
            pr_number=pr_number,
        )
