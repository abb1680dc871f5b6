from __future__ import annotations

import os
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest

_ENV_PREFIXES = ("INPUT_", "GITHUB_")
_ENV_NAMES = ("GOLDEN_TESTS_FAILED", "COVERAGE_FAILED", "TESTS_FAILED", "RUNNER_DEBUG")


@pytest.fixture(autouse=True)
def _clean_actions_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the runner's own Actions variables out of the tests."""
    for name in list(os.environ):
        if name.startswith(_ENV_PREFIXES) or name in _ENV_NAMES:
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def event_pr_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "event_pr.json"


@pytest.fixture
def event_push_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "event_push.json"


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """An empty CI workspace used as the working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
