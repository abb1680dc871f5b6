from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from ..logging import GateLogger
from ..models import Finding, IssueKind


class ArtifactReader(ABC):
    """Turns one artifact location into Findings of a single kind.

    ``load`` does the I/O and returns ``None`` when the artifact is absent.
    ``parse`` is pure. Neither raises: problems are logged and produce an
    empty result so a broken artifact never fails the job.
    """

    def __init__(self, logger: Optional[GateLogger] = None) -> None:
        self.logger = logger or GateLogger.for_run()

    @property
    @abstractmethod
    def kind(self) -> IssueKind:
        raise NotImplementedError

    @abstractmethod
    def load(self, location: Any) -> Optional[Any]:
        raise NotImplementedError

    @abstractmethod
    def parse(self, raw: Any) -> List[Finding]:
        raise NotImplementedError

    def read(self, location: Any) -> List[Finding]:
        raw = self.load(location)
        if raw is None:
            return []
        return self.parse(raw)


class TestReportReader(ArtifactReader):
    """Capability interface for test-failure sources.

    Pattern scanning of free-text logs is the default implementation; a
    structured report reader can take its place without touching the
    classifier or the composer.
    """

    __test__ = False

    @property
    def kind(self) -> IssueKind:
        return IssueKind.TEST
