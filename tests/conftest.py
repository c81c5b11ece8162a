"""
Pytest configuration and fixtures.

This module configures pytest behavior for different test types:
- Integration tests: Skipped without the required environment variables,
  and failed on any warnings logged by the code under test
- Unit tests: Allow warnings
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Any
from unittest.mock import Mock

import pytest
import requests
from typing_extensions import override

if TYPE_CHECKING:
    from collections.abc import Generator

INTEGRATION_ENV_VARS: tuple[str, ...] = ("GITHUB_TOKEN", "SOURCE_GITHUB_TEST_REPO", "TARGET_GITHUB_TEST_REPO")

# Store warning records during test execution
_integration_test_warnings: dict[str, list[logging.LogRecord]] = {}


class IntegrationTestWarningHandler(logging.Handler):
    """Custom logging handler to capture warnings during integration tests."""

    test_nodeid: str

    def __init__(self, test_nodeid: str) -> None:
        super().__init__()
        self.test_nodeid = test_nodeid
        self.setLevel(logging.WARNING)

    @override
    def emit(self, record: logging.LogRecord) -> None:
        """Capture WARNING and above level logs."""
        _integration_test_warnings.setdefault(self.test_nodeid, []).append(record)


@pytest.fixture(autouse=True)
def check_integration_test_env_vars(request: pytest.FixtureRequest) -> None:
    """Skip integration tests when the environment does not name a token and test repositories."""
    if request.node.get_closest_marker("integration") is None:
        return

    missing = [name for name in INTEGRATION_ENV_VARS if not os.environ.get(name)]
    if missing:
        pytest.skip(f"Integration tests require environment variables: {', '.join(missing)}")


@pytest.fixture(autouse=True)
def fail_on_log_warnings_for_integration_tests(
    request: pytest.FixtureRequest,
) -> Generator[None]:
    """
    Capture WARNING and ERROR logs emitted during integration tests.

    The records are checked in pytest_runtest_makereport, which turns a passed
    integration test into a failure when anything was captured.
    """
    if request.node.get_closest_marker("integration") is None:
        yield
        return

    test_nodeid = request.node.nodeid
    _integration_test_warnings[test_nodeid] = []

    handler = IntegrationTestWarningHandler(test_nodeid)
    root_logger = logging.getLogger()
    root_logger.addHandler(handler)

    try:
        yield
    finally:
        root_logger.removeHandler(handler)


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(
    item: pytest.Item, call: pytest.CallInfo[None]
) -> Generator[None]:  # type: ignore[misc]
    """Mark a passed integration test as failed if warnings were logged during it."""
    outcome = yield
    report = outcome.get_result()

    if call.when == "call" and report.outcome == "passed":
        test_nodeid = item.nodeid
        warning_records = _integration_test_warnings.get(test_nodeid, [])

        if warning_records:
            warning_messages = [
                f"{record.levelname}: {record.getMessage()} (in {record.name}:{record.lineno})"
                for record in warning_records
            ]
            report.outcome = "failed"
            report.longrepr = f"Integration test failed: {len(warning_records)} warning(s) detected:\n" + "\n".join(
                f"  - {msg}" for msg in warning_messages
            )

        _integration_test_warnings.pop(test_nodeid, None)


def issue_record(
    number: int,
    *,
    title: str | None = None,
    body: str | None = "Body",
    labels: list[str] | None = None,
    repo: str = "source-org/source-repo",
    pull_request: bool = False,
) -> dict[str, Any]:
    """Build a record as returned by the GitHub issue listing endpoint."""
    kind = "pull" if pull_request else "issues"
    record: dict[str, Any] = {
        "number": number,
        "title": title if title is not None else f"Issue {number}",
        "body": body,
        "state": "open",
        "labels": [{"name": name, "color": "ededed"} for name in labels or []],
        "user": {"login": "octocat"},
        "html_url": f"https://github.com/{repo}/{kind}/{number}",
    }
    if pull_request:
        record["pull_request"] = {"url": f"https://api.github.com/repos/{repo}/pulls/{number}"}
    return record


def make_response(status_code: int = 200, json_data: Any = None, text: str | None = None) -> Mock:
    """Build a mock requests.Response."""
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.text = text if text is not None else repr(json_data)
    if json_data is None and text is not None:
        response.json.side_effect = ValueError("Expecting value: line 1 column 1 (char 0)")
    else:
        response.json.return_value = json_data
    return response


@pytest.fixture
def mock_session() -> Mock:
    """A requests.Session double with a real headers dict."""
    session = Mock(spec=requests.Session)
    session.headers = {}
    return session
