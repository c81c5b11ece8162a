from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Any, Final

import requests

from . import utils
from .exceptions import APIError, ConfigError, DecodeError, TransportError
from .models import CreatedIssue

if TYPE_CHECKING:
    from types import TracebackType

    from .models import CreationRequest

# Module-wide logger
logger: logging.Logger = logging.getLogger(__name__)

GITHUB_API_BASE: Final[str] = "https://api.github.com"
GITHUB_API_VERSION: Final[str] = "2022-11-28"
USER_AGENT: Final[str] = "github-issue-copier/0.1.0"
DEFAULT_TIMEOUT: Final[float] = 30.0

_TOKEN_ENV_VAR: Final[str] = "GITHUB_TOKEN"  # noqa: S105
_DEFAULT_TOKEN_PASS_PATH: Final[str] = "github/cli/token"  # noqa: S105


def get_token(cli_token: str | None = None, pass_path: str | None = None) -> str | None:
    """Get GitHub token from the command line, a pass path, env var GITHUB_TOKEN, or the default pass location.

    Raises:
        ConfigError: If an explicitly requested pass entry cannot be read
    """
    if cli_token:
        return cli_token

    if pass_path:
        try:
            return utils.get_pass_value(pass_path)
        except (ValueError, utils.PassError, OSError) as e:
            msg = f"Cannot read GitHub token from pass entry '{pass_path}': {e}"
            raise ConfigError(msg) from e

    token: str | None = os.environ.get(_TOKEN_ENV_VAR)
    if token:
        return token

    try:
        return utils.get_pass_value(_DEFAULT_TOKEN_PASS_PATH)
    except (utils.PassError, OSError) as e:
        logger.warning(f"No GitHub token specified nor found: {e}")
        return None


def parse_repo_path(repo_path: str) -> tuple[str, str]:
    """Split an 'owner/repo' path into its two parts.

    Raises:
        ConfigError: If the path is not of the form 'owner/repo'
    """
    stripped = repo_path.strip()
    if stripped.count("/") != 1:
        msg = f"Invalid GitHub repository path '{repo_path}'. Expected format: 'owner/repository'"
        raise ConfigError(msg)

    owner, name = stripped.split("/")
    if not owner or not name:
        msg = f"Invalid GitHub repository path '{repo_path}'. Both owner and repository name must be non-empty"
        raise ConfigError(msg)
    return owner, name


class GitHubClient:
    """Minimal client for the GitHub REST issue endpoints.

    Every request is authenticated with a bearer token and pinned to a REST API
    version. Calls block until the response arrives or `timeout` expires.
    """

    def __init__(
        self,
        token: str,
        *,
        base_url: str = GITHUB_API_BASE,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url: str = base_url.rstrip("/")
        self.timeout: float = timeout
        self.session: requests.Session = session if session is not None else requests.Session()
        self.session.headers.update(
            {
                "Accept": "application/vnd.github+json",
                "Authorization": f"Bearer {token}",
                "User-Agent": USER_AGENT,
                "X-GitHub-Api-Version": GITHUB_API_VERSION,
            }
        )

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        payload: dict[str, Any] | None = None,
        expected_status: int = 200,
    ) -> Any:
        """Send one request and return the decoded JSON response body.

        Args:
            method: HTTP method (e.g. "GET", "POST")
            path: API path starting with '/', relative to the base URL
            params: Query string parameters
            payload: JSON request body
            expected_status: The only status code treated as success

        Raises:
            TransportError: If the connection fails or times out
            APIError: If the response status differs from expected_status
            DecodeError: If the response body is not valid JSON
        """
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {url} params={params}")
        try:
            response = self.session.request(method, url, params=params, json=payload, timeout=self.timeout)
        except requests.Timeout as e:
            msg = f"Request {method} {url} timed out after {self.timeout}s"
            raise TransportError(msg) from e
        except requests.RequestException as e:
            msg = f"Request {method} {url} failed: {e}"
            raise TransportError(msg) from e

        if response.status_code != expected_status:
            raise APIError(response.status_code, response.text)

        try:
            return response.json()
        except ValueError as e:
            msg = f"Invalid JSON in response to {method} {url}: {e}"
            raise DecodeError(msg) from e

    def list_issues(self, repo: str, *, page: int, per_page: int = 100, state: str = "open") -> list[Any]:
        """Fetch one page of the repository issue listing (raw records, pull requests included)."""
        owner, name = parse_repo_path(repo)
        data = self.request(
            "GET",
            f"/repos/{owner}/{name}/issues",
            params={"state": state, "per_page": per_page, "page": page},
        )
        if not isinstance(data, list):
            msg = f"Expected a list of issues from {repo}, got {type(data).__name__}"
            raise DecodeError(msg)
        return data

    def create_issue(self, repo: str, request: CreationRequest) -> CreatedIssue:
        """Create an issue on the repository."""
        owner, name = parse_repo_path(repo)
        data = self.request(
            "POST",
            f"/repos/{owner}/{name}/issues",
            payload=request.to_payload(),
            expected_status=201,
        )
        try:
            return CreatedIssue(number=int(data["number"]), html_url=str(data["html_url"]))
        except (KeyError, TypeError, ValueError) as e:
            msg = f"Malformed response for created issue in {repo}: {e}"
            raise DecodeError(msg) from e
