from __future__ import annotations

from datetime import datetime
from typing import List, Mapping, Optional, Sequence, Tuple

from .artifacts import ArtifactSet
from .constants import Limits
from .errors import ComposeError
from .formatting import format_count, format_percent
from .models import (
    DEFAULT_THRESHOLDS,
    Issue,
    IssueKind,
    MetricName,
    MetricResult,
    Summary,
    SummaryMode,
)

MARKER_PREFIX = "<!-- quality-gate:summary:v1:"

DEFAULT_REFERENCES: Tuple[Tuple[str, str], ...] = (
    ("Testing guide", "docs/TESTING.md"),
    ("CI/CD quality gates", "docs/CI_CD.md"),
)

NEXT_STEPS = (
    "Fix the issues listed above on this branch.",
    "Re-run the tests locally to confirm the fixes.",
    "Push the changes; this check runs again automatically.",
)

FOOTER = "*This comment was generated automatically by the CI quality gate* 🤖"


def marker(repo_full_name: str, pr_number: int) -> str:
    return f"{MARKER_PREFIX}{repo_full_name}:{pr_number} -->"


def marker_prefix() -> str:
    return MARKER_PREFIX


def _format_timestamp(generated_at: datetime) -> str:
    return generated_at.replace(microsecond=0).isoformat()


def _status_marker(result: MetricResult) -> str:
    return "✅ Pass" if result.passed else "❌ Fail"


def _metrics_table(metrics: Sequence[MetricResult]) -> List[str]:
    lines = [
        "| Metric | Covered | Threshold | Status |",
        "|--------|--------:|----------:|:------:|",
    ]
    for row in metrics:
        lines.append(
            f"| {row.name.value.capitalize()} | {format_percent(row.observed)} "
            f"| {format_percent(row.threshold)} | {_status_marker(row)} |"
        )
    return lines


def _details_section(details: Sequence[str]) -> List[str]:
    if not details:
        return []
    shown = details[: Limits.MAX_RENDERED_DETAILS]
    lines = ["**Details:**", ""]
    lines.extend(f"- {detail}" for detail in shown)
    if len(details) > len(shown):
        lines.append(f"- ...and {len(details) - len(shown)} more")
    lines.append("")
    return lines


def _remediation_section(issue: Issue) -> List[str]:
    lines = ["**Remediation:**", ""]
    steps = issue.remediation_steps
    if issue.kind is IssueKind.COVERAGE or len(steps) == 1:
        lines.extend(f"- {step}" for step in steps)
    else:
        lines.extend(f"{n}. {step}" for n, step in enumerate(steps, start=1))
    lines.append("")
    return lines


def _issue_section(issue: Issue) -> List[str]:
    lines = [f"### {issue.title}", "", issue.description, ""]
    lines.extend(_details_section(issue.details))
    if issue.kind is IssueKind.COVERAGE:
        if len(issue.metrics) != len(MetricName):
            raise ComposeError(
                f"coverage issue must hold {len(MetricName)} metric rows, got {len(issue.metrics)}"
            )
        lines.extend(_metrics_table(issue.metrics))
        lines.append("")
    lines.extend(_remediation_section(issue))
    return lines


def _next_steps_section(references: Sequence[Tuple[str, str]]) -> List[str]:
    lines = ["### Next steps", ""]
    lines.extend(f"- [ ] {step}" for step in NEXT_STEPS)
    lines.append("")
    if references:
        links = " · ".join(f"[{label}]({url})" for label, url in references)
        lines.extend([f"📚 See: {links}", ""])
    return lines


def _success_lines(
    artifacts: Optional[ArtifactSet],
    thresholds: Mapping[MetricName, float],
) -> List[str]:
    artifacts = artifacts or ArtifactSet()
    lines = [
        "## ✅ Automated quality check passed",
        "",
        "No quality issues were found in this pull request.",
        "",
        "**Coverage thresholds:**",
        "",
    ]
    lines.extend(
        f"- {metric.value.capitalize()}: {format_percent(thresholds.get(metric, DEFAULT_THRESHOLDS[metric]))}"
        for metric in MetricName
    )
    lines.extend(
        [
            "",
            f"- 🖼️ {format_count(artifacts.golden_image_count, 'Golden reference images')}",
            f"- 🧪 {format_count(artifacts.test_suite_count, 'Test suites')}",
            "",
            "Ready for review and merge.",
            "",
        ]
    )
    return lines


def render_summary_comment(
    summary: Summary,
    *,
    mode: SummaryMode,
    generated_at: datetime,
    artifacts: Optional[ArtifactSet] = None,
    thresholds: Optional[Mapping[MetricName, float]] = None,
    references: Sequence[Tuple[str, str]] = DEFAULT_REFERENCES,
    comment_marker: Optional[str] = None,
) -> Optional[str]:
    """Render the Markdown body for the pull-request comment.

    Returns ``None`` when there is nothing to say: no issues and
    ``SummaryMode.ISSUES_ONLY``. The output depends only on the arguments,
    so the same inputs always render the same bytes.

    Raises:
        ComposeError: on an internally inconsistent summary.
    """
    thresholds = thresholds or DEFAULT_THRESHOLDS

    if summary.has_issues:
        lines = [
            "## 🚨 Automated quality check",
            "",
            f"_Generated: {_format_timestamp(generated_at)}_",
            "",
            "This pull request has quality issues that should be fixed before merging:",
            "",
        ]
        for issue in summary.issues:
            lines.extend(_issue_section(issue))
        lines.extend(_next_steps_section(references))
    elif mode is SummaryMode.ALWAYS:
        lines = _success_lines(artifacts, thresholds)
        lines[1:1] = ["", f"_Generated: {_format_timestamp(generated_at)}_"]
    else:
        return None

    lines.extend(["---", FOOTER])
    if comment_marker:
        lines.extend(["", comment_marker])
    return "\n".join(lines) + "\n"
