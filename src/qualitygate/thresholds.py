from __future__ import annotations

from typing import Iterable, List, Mapping, Optional

from .models import DEFAULT_THRESHOLDS, MetricName, MetricResult


def evaluate_thresholds(
    observed: Mapping[MetricName, float],
    thresholds: Optional[Mapping[MetricName, float]] = None,
) -> List[MetricResult]:
    """One row per metric in the fixed order lines, functions, branches, statements.

    Missing observations count as 0 and missing thresholds fall back to the
    defaults. This never decides whether coverage failed overall; that comes
    from the upstream ``coverage_failed_checks`` signal.
    """
    configured = {**DEFAULT_THRESHOLDS, **(thresholds or {})}
    return [
        MetricResult(
            name=metric,
            observed=observed.get(metric, 0) or 0,
            threshold=configured[metric],
        )
        for metric in MetricName
    ]


def overall_passed(results: Iterable[MetricResult]) -> bool:
    return all(result.passed for result in results)


def failing_metrics(results: Iterable[MetricResult]) -> List[MetricResult]:
    return [result for result in results if not result.passed]
