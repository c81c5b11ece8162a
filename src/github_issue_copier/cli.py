"""
Command-line interface for the GitHub issue copier.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TYPE_CHECKING

from .copier import DEFAULT_DELAY_SECONDS, CopyConfig, IssueCopier
from .exceptions import ConfigError, CopyError
from .github_client import GitHubClient, get_token, parse_repo_path
from .report import print_summary
from .utils import setup_logging

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_REPO = "Kong/kongctl"
DEFAULT_TARGET_REPO = "rspurgeon/kongctl"

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2


def parse_arguments(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Copy open issues (pull requests excluded) from one GitHub repository to another"
    )

    _ = parser.add_argument(
        "--source",
        "-source",
        default=DEFAULT_SOURCE_REPO,
        help=f"Source repository (owner/repo, default: {DEFAULT_SOURCE_REPO})",
    )
    _ = parser.add_argument(
        "--target",
        "-target",
        default=DEFAULT_TARGET_REPO,
        help=f"Target repository (owner/repo, default: {DEFAULT_TARGET_REPO})",
    )
    _ = parser.add_argument(
        "--token",
        "-token",
        help="GitHub personal access token (default: GITHUB_TOKEN env var or pass github/cli/token)",
    )
    _ = parser.add_argument("--pass-token", help="Path for GitHub token in pass utility")
    _ = parser.add_argument(
        "--dry-run", "-dry-run", action="store_true", help="Print issues to be copied without creating them"
    )
    _ = parser.add_argument(
        "--delay",
        type=float,
        default=DEFAULT_DELAY_SECONDS,
        help=f"Seconds to wait between issue creations (default: {DEFAULT_DELAY_SECONDS})",
    )
    _ = parser.add_argument(
        "--verbose", "-v", action="count", default=0, help="Increase console logging (-v for INFO, -vv for DEBUG)"
    )

    args = parser.parse_args(argv)
    if args.delay < 0:
        parser.error("--delay must not be negative")
    return args


def run(args: argparse.Namespace) -> int:
    """Run the copy described by the parsed arguments and return the process exit code."""
    try:
        parse_repo_path(args.source)
        parse_repo_path(args.target)
        token = get_token(args.token, args.pass_token)
        if not token:
            msg = "GitHub token is required. Set GITHUB_TOKEN environment variable or use -token flag"
            raise ConfigError(msg)

        config = CopyConfig(
            source_repo=args.source.strip(),
            target_repo=args.target.strip(),
            dry_run=args.dry_run,
            delay=args.delay,
        )
        with GitHubClient(token) as client:
            summary = IssueCopier(client, config).run()
    except CopyError as e:
        logger.debug("Copy run aborted", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FATAL

    if summary.dry_run:
        return EXIT_OK

    print_summary(summary)
    if summary.has_failures:
        logger.warning(f"{summary.failed} of {summary.total} issues could not be copied")
        return EXIT_PARTIAL_FAILURE
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> None:
    """Main entry point."""
    args = parse_arguments(argv)
    verbosity: int = getattr(args, "verbose", 0)
    setup_logging(verbosity=verbosity)
    sys.exit(run(args))
