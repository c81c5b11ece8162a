"""Build target issue creation requests from source issues."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .models import CreationRequest

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .models import Label, SourceIssue


def build_issue_body(issue: SourceIssue) -> str:
    """Build the copied issue body: provenance line, separator, original body."""
    body = f"_Copied from original issue: {issue.html_url}_\n\n"
    body += "---\n\n"
    body += issue.body
    return body


def build_creation_request(issue: SourceIssue) -> CreationRequest:
    """Map a source issue to the request creating its copy.

    Labels are passed by name only. Names unknown to the target repository are
    left for GitHub to handle.
    """
    return CreationRequest(
        title=issue.title,
        body=build_issue_body(issue),
        labels=tuple(issue.label_names),
    )


def format_labels(labels: Iterable[Label]) -> str:
    names = [label.name for label in labels]
    return ", ".join(names) if names else "none"
