"""Fetch the open issues of a repository, page by page."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final

from .models import SourceIssue

if TYPE_CHECKING:
    from .github_client import GitHubClient

logger: logging.Logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE: Final[int] = 100


def fetch_open_issues(client: GitHubClient, repo: str, *, per_page: int = DEFAULT_PAGE_SIZE) -> list[SourceIssue]:
    """Return all open issues of the repository, pull requests excluded, in listing order.

    Paging continues while a page is full (counted before filtering), so a
    repository holding an exact multiple of `per_page` records costs one extra
    request that returns an empty page.

    Raises:
        CopyError: Any client error, unchanged
    """
    issues: list[SourceIssue] = []
    page = 1

    while True:
        records = client.list_issues(repo, page=page, per_page=per_page)
        decoded = [SourceIssue.from_api(record) for record in records]
        kept = [issue for issue in decoded if not issue.is_pull_request]
        issues.extend(kept)
        logger.info(f"Fetched page {page} of {repo}: {len(records)} records, {len(kept)} issues")

        if len(records) < per_page:
            break
        page += 1

    return issues
