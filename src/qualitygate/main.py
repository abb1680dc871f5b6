from __future__ import annotations

import os
import sys
from datetime import datetime, timezone
from typing import Optional

from pydantic import ValidationError

from . import __version__
from .artifacts import ReaderSet, load_artifact_set
from .comment import marker, render_summary_comment
from .config import QualityGateConfig, unrecognized_flag_inputs
from .constants import ExitCode
from .context import GitHubContext
from .errors import ConfigError, QualityGateError
from .logging import GateLogger
from .models import PublishOutcome, Summary
from .publish import publish_pr_comment, should_post, write_step_summary
from .report import build_summary


def _write_github_outputs(summary: Summary, outcome: PublishOutcome) -> None:
    """Write GitHub Actions outputs."""
    output_path = os.environ.get("GITHUB_OUTPUT")
    if not output_path:
        return

    with open(output_path, "a", encoding="utf-8") as f:
        f.write(f"has_issues={'true' if summary.has_issues else 'false'}\n")
        f.write(f"issue_count={len(summary.issues)}\n")
        f.write(f"issue_kinds={','.join(issue.kind.value for issue in summary.issues)}\n")
        f.write(f"publish_outcome={outcome.value}\n")


def _resolve_token(config: QualityGateConfig) -> str:
    return config.github_token.get_secret_value() or os.environ.get("GITHUB_TOKEN", "")


def main(now: Optional[datetime] = None) -> int:
    """Main entry point."""
    logger = GateLogger.for_run(debug=os.environ.get("RUNNER_DEBUG") == "1")

    try:
        config = QualityGateConfig()
        readers = ReaderSet.from_config(config, logger)
    except (ValidationError, ConfigError) as exc:
        logger.error("Configuration error", error=str(exc))
        return int(ExitCode.ERROR)

    if config.debug:
        logger.debug_enabled = True

    for name, value in unrecognized_flag_inputs():
        logger.warning("Unrecognized failure flag; treated as unset", flag=name, value=value)

    ctx = GitHubContext.from_environment()
    logger.info(
        "Quality gate reporter starting",
        version=__version__,
        repo=ctx.repo_full_name or None,
        pr_number=ctx.pr_number,
        mode=config.summary_mode.value,
    )

    run_context = config.run_context()
    try:
        with logger.stage("compose"):
            artifacts = load_artifact_set(config, readers, logger)
            summary = build_summary(artifacts, run_context, readers, logger)
            body = render_summary_comment(
                summary,
                mode=run_context.mode,
                generated_at=now or datetime.now(timezone.utc),
                artifacts=artifacts,
                thresholds=run_context.thresholds,
                references=config.references(),
                comment_marker=(
                    marker(ctx.repo_full_name, ctx.pr_number)
                    if ctx.is_pull_request and ctx.has_repository
                    else None
                ),
            )
    except QualityGateError as exc:
        logger.error("Failed to compose summary", error=str(exc))
        return int(exc.exit_code)
    except Exception as exc:
        logger.error("Failed to compose summary", error=repr(exc))
        return int(ExitCode.ERROR)

    write_step_summary(body, logger)

    if should_post(summary, run_context.mode):
        outcome = publish_pr_comment(
            body,
            ctx=ctx,
            token=_resolve_token(config),
            logger=logger,
            update_existing=config.update_existing_comment,
            timeout=config.http_timeout_seconds,
        )
    else:
        logger.info("No issues requiring a comment")
        outcome = PublishOutcome.SKIPPED_NO_ISSUES

    try:
        _write_github_outputs(summary, outcome)
    except OSError as exc:
        logger.warning("Failed to write GitHub outputs", error=str(exc))

    logger.info(
        "Quality gate reporter finished",
        has_issues=summary.has_issues,
        outcome=outcome.value,
    )
    return int(ExitCode.SUCCESS)


if __name__ == "__main__":
    sys.exit(main())
