from __future__ import annotations

from .constants import ExitCode


class QualityGateError(Exception):
    """Base exception for all quality gate errors."""

    exit_code: ExitCode = ExitCode.ERROR


class ConfigError(QualityGateError):
    """Configuration validation failed."""

    exit_code = ExitCode.ERROR


class ComposeError(QualityGateError):
    """Summary could not be rendered (internal fault)."""

    exit_code = ExitCode.ERROR


class PublishError(QualityGateError):
    """Comment post rejected (never fails the job)."""

    exit_code = ExitCode.SUCCESS
