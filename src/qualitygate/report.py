from __future__ import annotations

from typing import List, Optional

from .artifacts import ArtifactSet, ReaderSet
from .classify import classify_findings
from .logging import GateLogger
from .models import Finding, RunContext, Summary
from .readers import CoverageReader, GoldenDiffReader, PatternLogReader


def collect_findings(
    artifacts: ArtifactSet,
    context: RunContext,
    readers: ReaderSet,
    logger: Optional[GateLogger] = None,
) -> List[Finding]:
    """Parse every loaded artifact, in reader order.

    A category whose known-failed flag is explicitly ``False`` is skipped;
    an absent artifact contributes nothing.
    """
    sources = (
        (readers.golden, artifacts.golden_diffs),
        (readers.coverage, artifacts.coverage_text),
        (readers.tests, artifacts.test_report),
    )
    findings: List[Finding] = []
    for reader, raw in sources:
        if context.is_skipped(reader.kind):
            if logger is not None:
                logger.info("Category marked as passing; skipped", kind=reader.kind.value)
            continue
        if raw is None:
            continue
        findings.extend(reader.parse(raw))
    return findings


def build_summary(
    artifacts: ArtifactSet,
    context: RunContext,
    readers: Optional[ReaderSet] = None,
    logger: Optional[GateLogger] = None,
) -> Summary:
    if readers is None:
        readers = ReaderSet(
            golden=GoldenDiffReader(logger=logger),
            coverage=CoverageReader(logger=logger),
            tests=PatternLogReader(logger=logger),
        )
    findings = collect_findings(artifacts, context, readers, logger)
    issues = classify_findings(findings, context.thresholds)
    if logger is not None:
        logger.info(
            "Findings classified",
            findings=len(findings),
            issues=[issue.kind.value for issue in issues],
        )
    return Summary(issues=tuple(issues))
