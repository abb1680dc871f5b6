from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import AliasChoices, Field, SecretStr, confloat, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import DEFAULT_DIFF_SUFFIXES, DEFAULT_FAIL_PATTERNS
from .errors import ConfigError
from .models import MetricName, RunContext, SummaryMode

Percent = confloat(ge=0, le=100)

_TRUE_VALUES = {"true", "1", "yes", "on"}
_FALSE_VALUES = {"false", "0", "no", "off"}

# Earlier workflow steps export these with or without the action-input prefix.
FLAG_ENV_NAMES: Dict[str, Tuple[str, ...]] = {
    "golden_tests_failed": ("INPUT_GOLDEN_TESTS_FAILED", "GOLDEN_TESTS_FAILED"),
    "coverage_failed": ("INPUT_COVERAGE_FAILED", "COVERAGE_FAILED"),
    "tests_failed": ("INPUT_TESTS_FAILED", "TESTS_FAILED"),
}


def parse_flag(value: Any) -> Optional[bool]:
    """Read a known-failed flag. Anything but a plain true/false spelling is unset."""
    if value is None or isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    return None


def unrecognized_flag_inputs(environ: Optional[Mapping[str, str]] = None) -> List[Tuple[str, str]]:
    """Flag variables whose non-blank value ``parse_flag`` ignores, as ``(name, value)``."""
    environ = os.environ if environ is None else environ
    ignored: List[Tuple[str, str]] = []
    for names in FLAG_ENV_NAMES.values():
        for name in names:
            value = environ.get(name)
            if value and value.strip() and parse_flag(value) is None:
                ignored.append((name, value))
    return ignored


def _split_list(raw: str) -> List[str]:
    items = re.split(r"[,\n]", raw or "")
    return [item.strip() for item in items if item.strip()]


class QualityGateConfig(BaseSettings):
    """Configuration loaded from GitHub Actions inputs."""

    model_config = SettingsConfigDict(
        env_prefix="INPUT_",
        frozen=True,
        extra="ignore",
    )

    # Artifact locations
    golden_diff_dir: Path = Field(default=Path("test/failures"), description="Directory of golden-image diffs")
    golden_diff_suffixes: str = Field(
        default=",".join(DEFAULT_DIFF_SUFFIXES),
        description="Comma separated file-name suffixes that mark an image diff",
    )
    goldens_dir: Path = Field(default=Path("goldens"), description="Directory of golden reference images")
    coverage_file: Path = Field(
        default=Path("coverage/coverage_results.txt"),
        description="KEY=VALUE coverage results file",
    )
    test_logs: str = Field(default="test-results.log", description="Comma or newline separated test log paths")
    fail_patterns: str = Field(
        default="",
        description="Newline separated regular expressions; empty uses the built-in list",
    )
    test_dir: Path = Field(default=Path("test"))
    test_suite_glob: str = Field(default="*_test.dart")

    # Coverage thresholds
    lines_threshold: Percent = Field(default=85)
    functions_threshold: Percent = Field(default=90)
    branches_threshold: Percent = Field(default=80)
    statements_threshold: Percent = Field(default=85)

    # Known-failed flags set by earlier workflow steps
    golden_tests_failed: Optional[bool] = Field(
        default=None,
        validation_alias=AliasChoices(*FLAG_ENV_NAMES["golden_tests_failed"]),
    )
    coverage_failed: Optional[bool] = Field(
        default=None,
        validation_alias=AliasChoices(*FLAG_ENV_NAMES["coverage_failed"]),
    )
    tests_failed: Optional[bool] = Field(
        default=None,
        validation_alias=AliasChoices(*FLAG_ENV_NAMES["tests_failed"]),
    )

    # Publishing
    summary_mode: SummaryMode = Field(default=SummaryMode.ISSUES_ONLY)
    update_existing_comment: bool = Field(
        default=False,
        description="Update the previous summary comment in place instead of adding a new one",
    )
    github_token: SecretStr = Field(default="", description="GitHub token used for API calls")
    http_timeout_seconds: float = Field(default=15, gt=0)

    # Reference documents linked from the "Next steps" section
    testing_guide_url: str = Field(default="docs/TESTING.md")
    ci_guide_url: str = Field(default="docs/CI_CD.md")

    debug: bool = Field(default=False)

    @field_validator("summary_mode", mode="before")
    @classmethod
    def _normalize_mode(cls, value: str) -> str:
        if isinstance(value, str):
            return value.strip().lower().replace("_", "-")
        return value

    @field_validator("golden_tests_failed", "coverage_failed", "tests_failed", mode="before")
    @classmethod
    def _lenient_flag(cls, value: Any) -> Optional[bool]:
        return parse_flag(value)

    def test_log_paths(self) -> List[Path]:
        return [Path(p) for p in _split_list(self.test_logs)]

    def diff_suffixes(self) -> Tuple[str, ...]:
        return tuple(_split_list(self.golden_diff_suffixes)) or DEFAULT_DIFF_SUFFIXES

    def compiled_fail_patterns(self) -> List[re.Pattern]:
        """Compile the configured fail patterns, in order.

        Raises:
            ConfigError: if a pattern is not a valid regular expression.
        """
        raw = [line.strip() for line in self.fail_patterns.splitlines() if line.strip()]
        compiled: List[re.Pattern] = []
        for pattern in raw or DEFAULT_FAIL_PATTERNS:
            try:
                compiled.append(re.compile(pattern, re.IGNORECASE | re.MULTILINE))
            except re.error as exc:
                raise ConfigError(f"Invalid fail pattern {pattern!r}: {exc}") from exc
        return compiled

    def thresholds(self) -> Dict[MetricName, float]:
        return {
            MetricName.LINES: self.lines_threshold,
            MetricName.FUNCTIONS: self.functions_threshold,
            MetricName.BRANCHES: self.branches_threshold,
            MetricName.STATEMENTS: self.statements_threshold,
        }

    def references(self) -> Tuple[Tuple[str, str], ...]:
        return (
            ("Testing guide", self.testing_guide_url),
            ("CI/CD quality gates", self.ci_guide_url),
        )

    def run_context(self) -> RunContext:
        return RunContext(
            golden_failed=self.golden_tests_failed,
            coverage_failed=self.coverage_failed,
            tests_failed=self.tests_failed,
            thresholds=self.thresholds(),
            mode=self.summary_mode,
        )
