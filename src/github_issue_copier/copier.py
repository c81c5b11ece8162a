"""Copy orchestrator that drives a whole run.

A run goes through three steps:

1. Fetch
    - List every open issue of the source repository (pull requests excluded)
    - Any error here aborts the run: without the full list there is nothing to copy

2. Preview (dry run) or copy
    - Dry run: print each issue and stop; the target is never contacted
    - Copy: for each issue, in fetch order, build the creation request and
      create it on the target, one at a time. A failing item is recorded and
      the loop moves on. A fixed delay follows each successful creation but
      the last, to stay under the GitHub request rate limits.

3. Report
    - Aggregate the per-item outcomes into a RunSummary
"""

from __future__ import annotations

import logging
import sys
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, TextIO

from .exceptions import CopyError
from .fetcher import DEFAULT_PAGE_SIZE, fetch_open_issues
from .issue_builder import build_creation_request
from .models import CopyOutcome, RunSummary
from .report import format_issue_preview

if TYPE_CHECKING:
    from .github_client import GitHubClient
    from .models import SourceIssue

logger = logging.getLogger(__name__)

DEFAULT_DELAY_SECONDS = 1.0


@dataclass(frozen=True)
class CopyConfig:
    """Settings for one copy run."""

    source_repo: str
    target_repo: str
    dry_run: bool = False
    delay: float = DEFAULT_DELAY_SECONDS
    per_page: int = DEFAULT_PAGE_SIZE


class IssueCopier:
    """Copies the open issues of one repository to another.

    Usage:
        with GitHubClient(token) as client:
            summary = IssueCopier(client, CopyConfig("owner/src", "owner/dst")).run()

    The copier keeps no state between runs; counts are returned in the RunSummary.
    """

    _client: GitHubClient
    _config: CopyConfig

    def __init__(
        self,
        client: GitHubClient,
        config: CopyConfig,
        *,
        sleep: Callable[[float], None] = time.sleep,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self._client = client
        self._config = config
        self._sleep = sleep
        self._out = out
        self._err = err

    @property
    def config(self) -> CopyConfig:
        return self._config

    def _print(self, message: str = "", *, error: bool = False) -> None:
        # Resolve the default streams late so redirections made after construction apply
        stream = (self._err or sys.stderr) if error else (self._out or sys.stdout)
        print(message, file=stream)

    def run(self) -> RunSummary:
        """Execute the run.

        Returns:
            RunSummary with the number of fetched, copied and failed issues

        Raises:
            CopyError: If fetching the source issues fails
        """
        config = self._config
        self._print(f"Fetching open issues from {config.source_repo}...")
        issues = fetch_open_issues(self._client, config.source_repo, per_page=config.per_page)
        self._print(f"Found {len(issues)} open issues")
        self._print()

        if config.dry_run:
            self._preview(issues)
            return RunSummary(total=len(issues), dry_run=True)

        self._print(f"Copying issues to {config.target_repo}...")
        self._print()
        outcomes = self._copy_all(issues)
        return RunSummary.from_outcomes(len(issues), outcomes)

    def _preview(self, issues: list[SourceIssue]) -> None:
        self._print("DRY RUN - Issues that would be copied:")
        for issue in issues:
            self._print(format_issue_preview(issue))

    def _copy_all(self, issues: list[SourceIssue]) -> list[CopyOutcome]:
        outcomes: list[CopyOutcome] = []
        total = len(issues)

        for index, issue in enumerate(issues, start=1):
            self._print(f"[{index}/{total}] Copying issue #{issue.number}: {issue.title}")
            outcome = self.copy_issue(issue)
            outcomes.append(outcome)

            if outcome.created is not None:
                self._print(f"  Created as issue #{outcome.created.number}: {outcome.created.html_url}")
                self._print()
                if index < total:
                    self._sleep(self._config.delay)
            else:
                self._print(f"  Failed: {outcome.error}", error=True)

        return outcomes

    def copy_issue(self, issue: SourceIssue) -> CopyOutcome:
        """Create the copy of one issue on the target. Never raises CopyError."""
        request = build_creation_request(issue)
        try:
            created = self._client.create_issue(self._config.target_repo, request)
        except CopyError as e:
            logger.debug(f"Failed to copy issue #{issue.number} to {self._config.target_repo}", exc_info=True)
            return CopyOutcome(source=issue, error=e)

        logger.debug(f"Copied issue #{issue.number} as #{created.number}")
        return CopyOutcome(source=issue, created=created)
