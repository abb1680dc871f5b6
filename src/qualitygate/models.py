from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional, Tuple


class IssueKind(str, Enum):
    """Issue categories, declared in document order."""

    GOLDEN = "golden"
    COVERAGE = "coverage"
    TEST = "test"


class MetricName(str, Enum):
    LINES = "lines"
    FUNCTIONS = "functions"
    BRANCHES = "branches"
    STATEMENTS = "statements"


DEFAULT_THRESHOLDS: Mapping[MetricName, float] = {
    MetricName.LINES: 85,
    MetricName.FUNCTIONS: 90,
    MetricName.BRANCHES: 80,
    MetricName.STATEMENTS: 85,
}


class SummaryMode(str, Enum):
    ALWAYS = "always"
    ISSUES_ONLY = "issues-only"


class PublishOutcome(str, Enum):
    POSTED = "posted"
    SKIPPED_NO_ISSUES = "skipped_no_issues"
    SKIPPED_NO_CONTEXT = "skipped_no_context"
    FAILED = "failed"


@dataclass(frozen=True)
class CoverageReport:
    failed_checks: int = 0
    covered: Mapping[MetricName, float] = field(default_factory=dict)
    thresholds: Mapping[MetricName, float] = field(default_factory=dict)


@dataclass(frozen=True)
class Finding:
    kind: IssueKind
    identifier: str
    detail: str
    coverage: Optional[CoverageReport] = None


@dataclass(frozen=True)
class MetricResult:
    name: MetricName
    observed: float
    threshold: float

    @property
    def passed(self) -> bool:
        return self.observed >= self.threshold


@dataclass(frozen=True)
class Issue:
    kind: IssueKind
    title: str
    description: str
    remediation_steps: Tuple[str, ...]
    details: Tuple[str, ...] = ()
    metrics: Tuple[MetricResult, ...] = ()

    def __post_init__(self) -> None:
        if not self.remediation_steps:
            raise ValueError(f"{self.kind.value} issue needs at least one remediation step")


@dataclass(frozen=True)
class Summary:
    issues: Tuple[Issue, ...] = ()

    @property
    def has_issues(self) -> bool:
        return bool(self.issues)


@dataclass(frozen=True)
class RunContext:
    """Per-run settings passed into aggregation instead of read from the environment."""

    golden_failed: Optional[bool] = None
    coverage_failed: Optional[bool] = None
    tests_failed: Optional[bool] = None
    thresholds: Mapping[MetricName, float] = field(default_factory=lambda: dict(DEFAULT_THRESHOLDS))
    mode: SummaryMode = SummaryMode.ISSUES_ONLY

    def is_skipped(self, kind: IssueKind) -> bool:
        """A category is skipped only when its flag is explicitly False."""
        flag = {
            IssueKind.GOLDEN: self.golden_failed,
            IssueKind.COVERAGE: self.coverage_failed,
            IssueKind.TEST: self.tests_failed,
        }[kind]
        return flag is False
