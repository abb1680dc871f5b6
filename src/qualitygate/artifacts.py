from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from .config import QualityGateConfig
from .logging import GateLogger
from .readers import CoverageReader, GoldenDiffReader, PatternLogReader, TestReportReader
from .utils import count_matching


@dataclass(frozen=True)
class ReaderSet:
    golden: GoldenDiffReader
    coverage: CoverageReader
    tests: TestReportReader

    @classmethod
    def from_config(cls, config: QualityGateConfig, logger: Optional[GateLogger] = None) -> "ReaderSet":
        return cls(
            golden=GoldenDiffReader(config.diff_suffixes(), logger=logger),
            coverage=CoverageReader(logger=logger),
            tests=PatternLogReader(config.compiled_fail_patterns(), logger=logger),
        )


@dataclass(frozen=True)
class ArtifactSet:
    """Raw inputs of one CI run, loaded once.

    ``None`` means the artifact is absent, which is not the same as an empty
    (clean) artifact.
    """

    golden_diffs: Optional[Tuple[str, ...]] = None
    coverage_text: Optional[str] = None
    test_report: Optional[Any] = None
    golden_image_count: int = 0
    test_suite_count: int = 0


def load_artifact_set(
    config: QualityGateConfig,
    readers: ReaderSet,
    logger: Optional[GateLogger] = None,
) -> ArtifactSet:
    """Load every artifact exactly once. Missing or unreadable inputs become ``None``."""
    artifacts = ArtifactSet(
        golden_diffs=readers.golden.load(config.golden_diff_dir),
        coverage_text=readers.coverage.load(config.coverage_file),
        test_report=readers.tests.load(config.test_log_paths()),
        golden_image_count=count_matching(config.goldens_dir, "*.png"),
        test_suite_count=count_matching(config.test_dir, config.test_suite_glob),
    )
    if logger is not None:
        logger.info(
            "Artifacts loaded",
            golden_diffs=None if artifacts.golden_diffs is None else len(artifacts.golden_diffs),
            coverage_file=artifacts.coverage_text is not None,
            test_logs=artifacts.test_report is not None,
            golden_images=artifacts.golden_image_count,
            test_suites=artifacts.test_suite_count,
        )
    return artifacts
