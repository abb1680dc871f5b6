from __future__ import annotations

from qualitygate.artifacts import ArtifactSet
from qualitygate.models import IssueKind, RunContext
from qualitygate.readers import LogArtifact
from qualitygate.report import build_summary


def _artifacts(**overrides) -> ArtifactSet:
    values = dict(
        golden_diffs=("login_test_diff.png",),
        coverage_text="coverage_failed_checks=1\nlines_covered=72\n",
        test_report=(LogArtifact(name="unit.log", text="Some tests failed.\n"),),
    )
    values.update(overrides)
    return ArtifactSet(**values)


def test_all_absent_means_no_issues() -> None:
    summary = build_summary(ArtifactSet(), RunContext())

    assert summary.has_issues is False
    assert summary.issues == ()


def test_clean_artifacts_mean_no_issues() -> None:
    artifacts = ArtifactSet(
        golden_diffs=(),
        coverage_text="coverage_failed_checks=0\n",
        test_report=(LogArtifact(name="unit.log", text="All tests passed!\n"),),
    )

    assert build_summary(artifacts, RunContext()).has_issues is False


def test_every_signal_produces_one_issue_in_order() -> None:
    summary = build_summary(_artifacts(), RunContext())

    assert summary.has_issues is True
    assert [i.kind for i in summary.issues] == [IssueKind.GOLDEN, IssueKind.COVERAGE, IssueKind.TEST]


def test_flag_explicitly_false_skips_category() -> None:
    context = RunContext(golden_failed=False, tests_failed=True)

    summary = build_summary(_artifacts(), context)

    assert [i.kind for i in summary.issues] == [IssueKind.COVERAGE, IssueKind.TEST]


def test_flag_true_without_artifact_is_not_an_issue() -> None:
    context = RunContext(golden_failed=True, coverage_failed=True, tests_failed=True)

    summary = build_summary(ArtifactSet(), context)

    assert summary.has_issues is False
