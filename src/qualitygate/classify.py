from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from .formatting import format_percent
from .models import (
    CoverageReport,
    Finding,
    Issue,
    IssueKind,
    MetricName,
)
from .thresholds import evaluate_thresholds, failing_metrics, overall_passed

GOLDEN_REMEDIATION = (
    "Check whether the visual changes to the UI are intended.",
    "If they are, regenerate the reference images with `flutter test --update-goldens` and commit them.",
    "Otherwise download the uploaded failure artifacts and compare the diffs against the references.",
)

COVERAGE_REMEDIATION = (
    "Make sure every new component has tests.",
    "Use the uploaded coverage report to find uncovered lines and branches.",
)

TEST_REMEDIATION = (
    "Open the test output in the GitHub Actions log.",
    "Fix the failing tests and re-run them locally.",
    "Make sure new components are fully covered by tests.",
)


def _group_by_kind(findings: Iterable[Finding]) -> Dict[IssueKind, List[Finding]]:
    grouped: Dict[IssueKind, List[Finding]] = {kind: [] for kind in IssueKind}
    for finding in findings:
        grouped[finding.kind].append(finding)
    return grouped


def _golden_issue(findings: Sequence[Finding]) -> Issue:
    count = len(findings)
    return Issue(
        kind=IssueKind.GOLDEN,
        title="🖼️ Golden tests failed",
        description=(
            f"{count} UI component(s) differ visually from their golden reference images."
        ),
        remediation_steps=GOLDEN_REMEDIATION,
        details=tuple(f"`{f.identifier}`" for f in findings),
    )


def _coverage_issue(
    report: Optional[CoverageReport],
    thresholds: Mapping[MetricName, float],
) -> Issue:
    report = report or CoverageReport()
    effective = {**thresholds, **report.thresholds}
    metrics = tuple(evaluate_thresholds(report.covered, effective))

    steps = [
        f"Raise {m.name.value} coverage from {format_percent(m.observed)} "
        f"to at least {format_percent(m.threshold)}."
        for m in failing_metrics(metrics)
    ]
    steps.extend(COVERAGE_REMEDIATION)

    description = (
        f"Code coverage does not meet the project standards "
        f"({report.failed_checks} failed check(s))."
    )
    if overall_passed(metrics):
        description += " Every reported metric meets its threshold; see the coverage job for the failed check."

    return Issue(
        kind=IssueKind.COVERAGE,
        title="📊 Code coverage is below the threshold",
        description=description,
        remediation_steps=tuple(steps),
        metrics=metrics,
    )


def _test_issue(findings: Sequence[Finding]) -> Issue:
    return Issue(
        kind=IssueKind.TEST,
        title="🧪 Unit tests failed",
        description=f"{len(findings)} failure(s) were found in the test logs.",
        remediation_steps=TEST_REMEDIATION,
        details=tuple(f"`{f.identifier}`: {f.detail}" for f in findings),
    )


def classify_findings(
    findings: Iterable[Finding],
    thresholds: Mapping[MetricName, float],
) -> List[Issue]:
    """Fold Findings into at most one Issue per kind, in golden, coverage, test order."""
    grouped = _group_by_kind(findings)
    issues: List[Issue] = []

    if grouped[IssueKind.GOLDEN]:
        issues.append(_golden_issue(grouped[IssueKind.GOLDEN]))

    if grouped[IssueKind.COVERAGE]:
        first = grouped[IssueKind.COVERAGE][0]
        issues.append(_coverage_issue(first.coverage, thresholds))

    if grouped[IssueKind.TEST]:
        issues.append(_test_issue(grouped[IssueKind.TEST]))

    return issues
