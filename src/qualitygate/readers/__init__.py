from __future__ import annotations

from .base import ArtifactReader, TestReportReader
from .coverage import CoverageReader
from .golden import GoldenDiffReader
from .test_logs import LogArtifact, PatternLogReader

__all__ = [
    "ArtifactReader",
    "CoverageReader",
    "GoldenDiffReader",
    "LogArtifact",
    "PatternLogReader",
    "TestReportReader",
]
