from __future__ import annotations

import json

import pytest

from qualitygate.constants import ExitCode
from qualitygate.errors import ComposeError, ConfigError, PublishError
from qualitygate.logging import GateLogger, escape_workflow_command


def test_logger_emits_json(capsys) -> None:
    logger = GateLogger("run-1")
    logger.info("hello", detail="world")
    captured = capsys.readouterr()

    payload = json.loads(captured.err.strip().splitlines()[0])
    assert payload["run_id"] == "run-1"
    assert payload["level"] == "info"
    assert payload["message"] == "hello"
    assert payload["detail"] == "world"


def test_logger_emits_annotations(capsys) -> None:
    logger = GateLogger("run-2")
    logger.warning("careful")
    logger.error("fail\nnext line")
    err = capsys.readouterr().err

    assert "::warning::careful" in err
    assert "::error::fail%0Anext line" in err


def test_logger_redacts_sensitive_keys(capsys) -> None:
    logger = GateLogger("run-3")
    logger.info("secret", github_token="ghs-test", api_key="sk-test")
    payload = json.loads(capsys.readouterr().err.strip().splitlines()[0])

    assert payload["github_token"] == "***"
    assert payload["api_key"] == "***"


def test_debug_is_silent_unless_enabled(capsys) -> None:
    GateLogger("run-4").debug("quiet")
    GateLogger("run-5", debug=True).debug("loud")
    err = capsys.readouterr().err

    assert "quiet" not in err
    assert "loud" in err


def test_stage_logs_error_and_reraises(capsys) -> None:
    logger = GateLogger("run-6")

    with pytest.raises(RuntimeError):
        with logger.stage("compose"):
            raise RuntimeError("boom")

    records = [json.loads(line) for line in capsys.readouterr().err.splitlines() if line.startswith("{")]
    assert [r["message"] for r in records] == ["stage_start", "stage_error", "stage_end"]
    assert records[-1]["status"] == "error"


def test_escape_workflow_command() -> None:
    assert escape_workflow_command("50%\r\n") == "50%25%0D%0A"


def test_error_exit_codes() -> None:
    assert ConfigError().exit_code == ExitCode.ERROR
    assert ComposeError().exit_code == ExitCode.ERROR
    assert PublishError().exit_code == ExitCode.SUCCESS
    assert int(ExitCode.SUCCESS) == 0
