from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Union

from ..models import CoverageReport, Finding, IssueKind, MetricName
from ..utils import parse_number, safe_read_text
from .base import ArtifactReader

FAILED_CHECKS_KEY = "coverage_failed_checks"

Value = Union[int, float, str]


class MalformedCoverageError(ValueError):
    """Coverage results file could not be parsed."""


def parse_key_values(text: str) -> Dict[str, Value]:
    """Parse ``KEY=VALUE`` lines into ``{lowercased_key: value}``.

    Blank lines and ``#`` comments are skipped. Numeric-looking values are
    returned as numbers (``88.0`` → ``88``).

    Raises:
        MalformedCoverageError: on a non-blank line without ``=``.
    """
    values: Dict[str, Value] = {}
    for lineno, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        key, sep, raw = stripped.partition("=")
        key = key.strip().lower()
        if not sep or not key:
            raise MalformedCoverageError(f"line {lineno}: expected KEY=VALUE")
        raw = raw.strip().strip('"').strip("'")
        number = parse_number(raw)
        values[key] = number if number is not None else raw
    return values


def _require_number(values: Dict[str, Value], key: str) -> Optional[float]:
    if key not in values:
        return None
    value = values[key]
    if isinstance(value, str):
        raise MalformedCoverageError(f"{key} is not numeric: {value!r}")
    return value


def build_coverage_report(values: Dict[str, Value]) -> CoverageReport:
    """Pick the recognized keys out of a parsed mapping; the rest are ignored."""
    covered: Dict[MetricName, float] = {}
    thresholds: Dict[MetricName, float] = {}
    for metric in MetricName:
        observed = _require_number(values, f"{metric.value}_covered")
        if observed is not None:
            covered[metric] = observed
        threshold = _require_number(values, f"{metric.value}_threshold")
        if threshold is not None:
            thresholds[metric] = threshold

    failed = _require_number(values, FAILED_CHECKS_KEY)
    return CoverageReport(
        failed_checks=int(failed or 0),
        covered=covered,
        thresholds=thresholds,
    )


class CoverageReader(ArtifactReader):
    """At most one Finding, emitted when ``coverage_failed_checks`` > 0."""

    @property
    def kind(self) -> IssueKind:
        return IssueKind.COVERAGE

    def load(self, location: Path) -> Optional[str]:
        path = Path(location)
        if not path.is_file():
            self.logger.debug("coverage_file_missing", path=str(path))
            return None
        try:
            return safe_read_text(path)
        except (OSError, ValueError) as exc:
            self.logger.warning("coverage_file_unreadable", path=str(path), error=str(exc))
            return None

    def parse(self, raw: str) -> List[Finding]:
        try:
            report = build_coverage_report(parse_key_values(raw))
        except MalformedCoverageError as exc:
            self.logger.warning("coverage_file_malformed", error=str(exc))
            return []

        if report.failed_checks <= 0:
            return []

        return [
            Finding(
                kind=IssueKind.COVERAGE,
                identifier=FAILED_CHECKS_KEY,
                detail=f"{report.failed_checks} coverage check(s) failed",
                coverage=report,
            )
        ]
