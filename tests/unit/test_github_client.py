from __future__ import annotations

from typing import Any, Optional

import pytest
import requests

from qualitygate.errors import PublishError
from qualitygate.github import GITHUB_API, GitHubClient


class DummyResponse:
    def __init__(self, status_code: int, payload: Any = None) -> None:
        self.status_code = status_code
        self._payload = payload

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("no json")
        return self._payload

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error")


class RecordingSession:
    def __init__(self, *responses: DummyResponse) -> None:
        self.responses = list(responses)
        self.requests: list[dict] = []
        self.headers: dict = {}

    def request(self, method: str, url: str, timeout: Optional[float] = None, **kwargs: Any):
        self.requests.append({"method": method, "url": url, "timeout": timeout, **kwargs})
        return self.responses.pop(0)


def _client(*responses: DummyResponse) -> GitHubClient:
    client = GitHubClient(token="ghs_test", repo="octo/app", timeout=3.0)
    client.session = RecordingSession(*responses)
    return client


def test_session_carries_auth_headers() -> None:
    client = GitHubClient(token="ghs_test", repo="octo/app")

    assert client.session.headers["Authorization"] == "Bearer ghs_test"
    assert client.session.headers["Accept"] == "application/vnd.github+json"


def test_create_pr_comment_posts_body() -> None:
    client = _client(DummyResponse(201, {"html_url": "https://github.com/octo/app/pull/7#c1"}))

    url = client.create_pr_comment(7, "hello")

    request = client.session.requests[0]
    assert url == "https://github.com/octo/app/pull/7#c1"
    assert request["method"] == "post"
    assert request["url"] == f"{GITHUB_API}/repos/octo/app/issues/7/comments"
    assert request["json"] == {"body": "hello"}
    assert request["timeout"] == 3.0


def test_http_error_becomes_publish_error() -> None:
    client = _client(DummyResponse(403, {"message": "Resource not accessible"}))

    with pytest.raises(PublishError, match="403"):
        client.create_pr_comment(7, "hello")


def test_connection_error_becomes_publish_error() -> None:
    client = GitHubClient(token="ghs_test", repo="octo/app")

    class _Offline:
        headers: dict = {}

        def request(self, *_args, **_kwargs):
            raise requests.ConnectionError("network unreachable")

    client.session = _Offline()

    with pytest.raises(PublishError, match="network unreachable"):
        client.create_pr_comment(7, "hello")


def test_create_or_update_patches_marked_comment() -> None:
    comments = [
        {"id": 1, "body": "unrelated"},
        {"id": 2, "body": "old summary <!-- quality-gate:summary:v1:octo/app:7 -->"},
    ]
    client = _client(
        DummyResponse(200, comments),
        DummyResponse(200, {"html_url": "https://github.com/octo/app/pull/7#c2"}),
    )

    url = client.create_or_update_pr_comment(7, "new", "<!-- quality-gate:summary:v1:")

    patch = client.session.requests[1]
    assert url == "https://github.com/octo/app/pull/7#c2"
    assert patch["method"] == "patch"
    assert patch["url"] == f"{GITHUB_API}/repos/octo/app/issues/comments/2"


def test_create_or_update_creates_when_no_marker() -> None:
    client = _client(
        DummyResponse(200, [{"id": 1, "body": "unrelated"}]),
        DummyResponse(201, None),
    )

    url = client.create_or_update_pr_comment(7, "new", "<!-- quality-gate:summary:v1:")

    assert url is None
    assert [r["method"] for r in client.session.requests] == ["get", "post"]
