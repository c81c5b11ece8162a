"""
Custom exception classes for the GitHub issue copier.
"""

from __future__ import annotations


class CopyError(Exception):
    """Base exception for issue copy errors."""


class ConfigError(CopyError):
    """Raised when the run cannot start because of missing or invalid configuration."""


class TransportError(CopyError):
    """Raised when the GitHub API cannot be reached or the request times out."""


class APIError(CopyError):
    """Raised when the GitHub API answers with an unexpected status code."""

    status_code: int
    raw_body: str

    def __init__(self, status_code: int, raw_body: str) -> None:
        self.status_code = status_code
        self.raw_body = raw_body
        super().__init__(f"GitHub API returned status {status_code}: {raw_body}")


class DecodeError(CopyError):
    """Raised when a GitHub API response cannot be decoded."""
