from __future__ import annotations

import sys
from typing import Callable, Optional

from ..comment import marker_prefix
from ..context import GitHubContext
from ..github import GitHubClient
from ..logging import GateLogger
from ..models import PublishOutcome, Summary, SummaryMode

ClientFactory = Callable[..., GitHubClient]


def should_post(summary: Summary, mode: SummaryMode) -> bool:
    """Always-summarize mode posts every time; issues-only posts only when there are issues."""
    if mode is SummaryMode.ALWAYS:
        return True
    return summary.has_issues


def _print_diagnostic(body: str) -> None:
    sys.stdout.write("---- quality gate summary (not posted) ----\n")
    sys.stdout.write(body if body.endswith("\n") else body + "\n")
    sys.stdout.write("---- end of summary ----\n")
    sys.stdout.flush()


def publish_pr_comment(
    body: Optional[str],
    *,
    ctx: GitHubContext,
    token: str,
    logger: GateLogger,
    client_factory: Optional[ClientFactory] = None,
    update_existing: bool = False,
    timeout: Optional[float] = None,
) -> PublishOutcome:
    """Post ``body`` on the pull request, best effort.

    Missing context (no PR, repository or token) is a clean skip. A failed
    post is logged, the body is printed for diagnostics and the outcome is
    ``FAILED``; nothing is raised and nothing is retried.
    """
    if body is None:
        logger.info("No summary to post")
        return PublishOutcome.SKIPPED_NO_ISSUES

    if not ctx.is_pull_request:
        logger.info("Not a pull-request context; skipping comment", event=ctx.event_name)
        return PublishOutcome.SKIPPED_NO_CONTEXT

    if not ctx.has_repository:
        logger.info("Repository unknown; skipping comment")
        return PublishOutcome.SKIPPED_NO_CONTEXT

    if not token:
        logger.info("GitHub token not available; skipping comment")
        return PublishOutcome.SKIPPED_NO_CONTEXT

    try:
        kwargs = {"timeout": timeout} if timeout is not None else {}
        factory = client_factory or GitHubClient
        gh = factory(token=token, repo=ctx.repo_full_name, **kwargs)
        if update_existing:
            url = gh.create_or_update_pr_comment(ctx.pr_number, body, marker_prefix())
        else:
            url = gh.create_pr_comment(ctx.pr_number, body)
    except Exception as exc:
        logger.warning("PR comment failed", error=str(exc), pr_number=ctx.pr_number)
        _print_diagnostic(body)
        return PublishOutcome.FAILED

    logger.info("PR comment posted", url=url, pr_number=ctx.pr_number)
    return PublishOutcome.POSTED
