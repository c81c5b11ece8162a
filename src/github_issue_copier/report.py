"""
Console rendering of the dry-run listing and the final run summary.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

from .issue_builder import format_labels

if TYPE_CHECKING:
    from .models import RunSummary, SourceIssue


def format_issue_preview(issue: SourceIssue) -> str:
    """Render the dry-run entry for one issue."""
    return (
        f"  #{issue.number}: {issue.title}\n"
        f"       Labels: {format_labels(issue.labels)}\n"
        f"       URL: {issue.html_url}\n"
    )


def format_summary(summary: RunSummary) -> str:
    return (
        "Summary:\n"
        f"  Successfully copied: {summary.succeeded}\n"
        f"  Failed: {summary.failed}\n"
        f"  Total: {summary.total}"
    )


def print_summary(summary: RunSummary, file: TextIO | None = None) -> None:
    """Print the final summary block."""
    out = file if file is not None else sys.stdout
    print(file=out)
    print(format_summary(summary), file=out)
