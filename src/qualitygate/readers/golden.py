from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from ..constants import DEFAULT_DIFF_SUFFIXES
from ..logging import GateLogger
from ..models import Finding, IssueKind
from .base import ArtifactReader


class GoldenDiffReader(ArtifactReader):
    """One Finding per image-diff file in the golden failures directory."""

    def __init__(
        self,
        suffixes: Sequence[str] = DEFAULT_DIFF_SUFFIXES,
        logger: Optional[GateLogger] = None,
    ) -> None:
        super().__init__(logger)
        self.suffixes = tuple(suffixes)

    @property
    def kind(self) -> IssueKind:
        return IssueKind.GOLDEN

    def load(self, location: Path) -> Optional[Tuple[str, ...]]:
        directory = Path(location)
        if not directory.is_dir():
            self.logger.debug("golden_diff_dir_missing", path=str(directory))
            return None
        try:
            return tuple(sorted(entry.name for entry in directory.iterdir()))
        except OSError as exc:
            self.logger.warning("golden_diff_dir_unreadable", path=str(directory), error=str(exc))
            return None

    def parse(self, raw: Iterable[str]) -> List[Finding]:
        findings: List[Finding] = []
        seen = set()
        for name in raw:
            identifier = self._strip_suffix(name)
            if identifier is None or identifier in seen:
                continue
            seen.add(identifier)
            findings.append(
                Finding(
                    kind=IssueKind.GOLDEN,
                    identifier=identifier,
                    detail=name,
                )
            )
        return findings

    def _strip_suffix(self, name: str) -> Optional[str]:
        lowered = name.lower()
        for suffix in self.suffixes:
            if lowered.endswith(suffix.lower()) and len(name) > len(suffix):
                return name[: -len(suffix)]
        return None
