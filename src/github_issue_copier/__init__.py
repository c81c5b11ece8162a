"""
GitHub Issue Copier

Copies the open issues of one GitHub repository to another, keeping title,
body and labels and linking every copy back to its original.
"""

from __future__ import annotations

from .cli import main
from .copier import CopyConfig, IssueCopier
from .exceptions import APIError, ConfigError, CopyError, DecodeError, TransportError
from .github_client import GitHubClient
from .models import RunSummary, SourceIssue
from .utils import setup_logging

# Package version
__version__ = "0.1.0"

__all__ = [
    "APIError",
    "ConfigError",
    "CopyConfig",
    "CopyError",
    "DecodeError",
    "GitHubClient",
    "IssueCopier",
    "RunSummary",
    "SourceIssue",
    "TransportError",
    "main",
    "setup_logging",
]
