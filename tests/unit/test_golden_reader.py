from __future__ import annotations

from pathlib import Path

from qualitygate.models import IssueKind
from qualitygate.readers import GoldenDiffReader


def _touch(directory: Path, *names: str) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    for name in names:
        (directory / name).write_bytes(b"\x89PNG")


def test_diff_file_becomes_finding_with_suffix_stripped(tmp_path: Path) -> None:
    _touch(tmp_path / "failures", "login_test_diff.png")

    findings = GoldenDiffReader().read(tmp_path / "failures")

    assert len(findings) == 1
    assert findings[0].kind == IssueKind.GOLDEN
    assert findings[0].identifier == "login_test"
    assert findings[0].detail == "login_test_diff.png"


def test_missing_directory_yields_no_findings(tmp_path: Path) -> None:
    reader = GoldenDiffReader()

    assert reader.load(tmp_path / "nope") is None
    assert reader.read(tmp_path / "nope") == []


def test_plain_images_are_not_diffs(tmp_path: Path) -> None:
    _touch(tmp_path, "login_test.png", "notes.txt")

    assert GoldenDiffReader().read(tmp_path) == []


def test_entries_are_sorted_and_deduplicated(tmp_path: Path) -> None:
    _touch(tmp_path, "b_diff.png", "a_diff.png", "a_DIFF.PNG")

    identifiers = [f.identifier for f in GoldenDiffReader().read(tmp_path)]

    assert identifiers == ["a", "b"]


def test_custom_suffixes(tmp_path: Path) -> None:
    _touch(tmp_path, "card_isolatedDiff.png", "card_maskedDiff.png", "card_testImage.png")
    reader = GoldenDiffReader(suffixes=("_isolatedDiff.png", "_maskedDiff.png"))

    findings = reader.read(tmp_path)

    assert [f.identifier for f in findings] == ["card"]


def test_parse_is_pure_over_entry_names() -> None:
    findings = GoldenDiffReader().parse(["home_diff.png", "_diff.png", "home.png"])

    assert [f.identifier for f in findings] == ["home"]
