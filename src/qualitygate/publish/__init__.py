from __future__ import annotations

from .pr_comment import publish_pr_comment, should_post
from .step_summary import write_step_summary

__all__ = [
    "publish_pr_comment",
    "should_post",
    "write_step_summary",
]
