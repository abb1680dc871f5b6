from __future__ import annotations

import os
from typing import Optional

from ..logging import GateLogger


def write_step_summary(body: Optional[str], logger: Optional[GateLogger] = None) -> bool:
    """
    Append the summary to the GitHub Actions job summary.

    This appears on the run page even when no comment is posted.
    """
    summary_path = os.environ.get("GITHUB_STEP_SUMMARY")
    if not summary_path or not body:
        return False

    try:
        with open(summary_path, "a", encoding="utf-8") as summary_file:
            summary_file.write(body)
            summary_file.write("\n")
    except OSError as exc:
        if logger is not None:
            logger.warning("Step summary write failed", error=str(exc))
        return False
    return True
