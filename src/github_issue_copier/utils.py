"""
Utility functions for the GitHub issue copier.
"""

from __future__ import annotations

import logging
import re
import subprocess
from subprocess import CompletedProcess

_CONSOLE_LEVELS: tuple[int, ...] = (logging.WARNING, logging.INFO, logging.DEBUG)


class PassError(Exception):
    """Base class for pass-related errors."""


class InvalidPassPathError(PassError):
    """Raised when the pass path is not in the password store."""


def setup_logging(*, verbosity: int = 0, log_file: str | None = "copy-issues.log") -> None:
    """Configure logging for the copy run.

    The console shows warnings by default, INFO with one ``-v`` and DEBUG with two.
    The log file, if any, always receives DEBUG records.
    """
    console_handler = logging.StreamHandler()
    console_handler.setLevel(_CONSOLE_LEVELS[min(max(verbosity, 0), len(_CONSOLE_LEVELS) - 1)])
    handlers: list[logging.Handler] = [console_handler]
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setLevel(logging.DEBUG)
        handlers.append(file_handler)

    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )
    # urllib3 is chatty at DEBUG and would log request URLs for every page
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def get_pass_value(pass_path: str) -> str:
    """Read the first line stored at `pass_path` in the password store.

    Runs non-interactively: an entry whose GPG key needs a passphrase the agent
    cannot supply fails like any other unreadable entry.

    Raises:
        ValueError: If the path contains anything but slash-separated names
        InvalidPassPathError: If the entry does not exist
        PassError: For any other pass failure
    """
    if not re.fullmatch(r"[A-Za-z0-9_-]+(?:/[A-Za-z0-9_-]+)*", pass_path):
        msg = f"Invalid pass path: {pass_path}"
        raise ValueError(msg)

    try:
        result: CompletedProcess[str] = subprocess.run(  # noqa: S603
            ["pass", "show", pass_path],  # noqa: S607
            capture_output=True,
            text=True,
            check=True,
            stdin=subprocess.DEVNULL,
        )
    except subprocess.CalledProcessError as e:
        if "not in the password store" in e.stderr.lower():
            msg = f"Pass path '{pass_path}' not found."
            raise InvalidPassPathError(msg) from e
        msg = f"pass exited with status {e.returncode}: {e.stderr.strip()}"
        raise PassError(msg) from e

    lines = result.stdout.splitlines()
    return lines[0].strip() if lines else ""
