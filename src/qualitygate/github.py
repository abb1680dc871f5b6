from __future__ import annotations

import os
from typing import Any, Dict, Optional

import requests

from .errors import PublishError

GITHUB_API = os.environ.get("GITHUB_API_URL", "https://api.github.com")
DEFAULT_HTTP_TIMEOUT_SECONDS = 15.0


class GitHubClient:
    """Minimal GitHub REST client for pull-request comments."""

    def __init__(self, token: str, repo: str, *, timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS):
        self.token = token
        self.repo = repo
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "quality-gate-reporter",
        })

    def create_pr_comment(self, pr_number: int, body: str) -> Optional[str]:
        """Create a new comment on the pull request and return its URL."""
        url = f"{GITHUB_API}/repos/{self.repo}/issues/{pr_number}/comments"
        response = self._send("post", url, json={"body": body})
        return self._html_url(response)

    def create_or_update_pr_comment(self, pr_number: int, body: str, marker_prefix: str) -> Optional[str]:
        """Update the most recent comment that carries ``marker_prefix``, else create one."""
        url = f"{GITHUB_API}/repos/{self.repo}/issues/{pr_number}/comments"
        comments = self._send("get", url, params={"per_page": 100}).json() or []
        for comment in reversed(comments):
            if marker_prefix in (comment.get("body") or ""):
                patch_url = f"{GITHUB_API}/repos/{self.repo}/issues/comments/{comment['id']}"
                return self._html_url(self._send("patch", patch_url, json={"body": body}))
        return self.create_pr_comment(pr_number, body)

    def _send(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise PublishError(f"GitHub API {method.upper()} {url} failed: {exc}") from exc
        return response

    @staticmethod
    def _html_url(response: requests.Response) -> Optional[str]:
        try:
            payload: Dict[str, Any] = response.json() or {}
        except ValueError:
            return None
        return payload.get("html_url")
