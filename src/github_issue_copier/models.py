"""Data models for issues copied between GitHub repositories.

Records fetched from the source repository are decoded once into immutable
`SourceIssue` objects. Everything derived from them (creation requests,
per-item outcomes, the run summary) is built by value and never shared.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from .exceptions import CopyError, DecodeError


@dataclass(frozen=True)
class Label:
    """A label attached to an issue. Only the name is reused on the target."""

    name: str
    color: str = ""  # Hex color without '#' prefix (e.g., "ff0000")


@dataclass(frozen=True)
class SourceIssue:
    """A record of the source repository issue listing.

    The listing includes pull requests, flagged by `is_pull_request`.
    """

    number: int
    title: str
    body: str
    state: str
    html_url: str
    labels: tuple[Label, ...] = ()
    author: str = ""
    is_pull_request: bool = False

    @classmethod
    def from_api(cls, record: Any) -> SourceIssue:
        """Decode one record of the issue listing endpoint.

        Raises:
            DecodeError: If the record is not an object or lacks a required field
        """
        if not isinstance(record, Mapping):
            msg = f"Expected issue object, got {type(record).__name__}"
            raise DecodeError(msg)

        try:
            number = int(record["number"])
            title = str(record["title"])
            html_url = str(record["html_url"])
        except (KeyError, TypeError, ValueError) as e:
            msg = f"Malformed issue record: missing or invalid {e}"
            raise DecodeError(msg) from e

        labels = tuple(
            Label(name=str(label["name"]), color=str(label.get("color") or ""))
            for label in record.get("labels") or []
            if isinstance(label, Mapping) and "name" in label
        )
        user = record.get("user") or {}

        return cls(
            number=number,
            title=title,
            body=record.get("body") or "",
            state=str(record.get("state") or "open"),
            html_url=html_url,
            labels=labels,
            author=str(user.get("login", "")) if isinstance(user, Mapping) else "",
            # The issues endpoint lists pull requests too; the URL shape covers records without the key
            is_pull_request="pull_request" in record or "/pull/" in html_url,
        )

    @property
    def label_names(self) -> list[str]:
        return [label.name for label in self.labels]


@dataclass(frozen=True)
class CreationRequest:
    """Payload for creating one issue on the target repository."""

    title: str
    body: str
    labels: tuple[str, ...] = ()

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"title": self.title, "body": self.body}
        if self.labels:
            payload["labels"] = list(self.labels)
        return payload


@dataclass(frozen=True)
class CreatedIssue:
    """The issue created on the target repository."""

    number: int
    html_url: str


@dataclass(frozen=True)
class CopyOutcome:
    """Result of copying a single issue: either the created issue or the error."""

    source: SourceIssue
    created: CreatedIssue | None = None
    error: CopyError | None = None

    def __post_init__(self) -> None:
        if (self.created is None) == (self.error is None):
            msg = "CopyOutcome needs exactly one of 'created' or 'error'"
            raise ValueError(msg)

    @property
    def ok(self) -> bool:
        return self.created is not None


@dataclass(frozen=True)
class RunSummary:
    """Counts reported at the end of a run."""

    total: int
    succeeded: int = 0
    failed: int = 0
    dry_run: bool = False
    outcomes: tuple[CopyOutcome, ...] = field(default=(), compare=False, repr=False)

    @classmethod
    def from_outcomes(cls, total: int, outcomes: Iterable[CopyOutcome]) -> RunSummary:
        outcomes = tuple(outcomes)
        succeeded = sum(1 for outcome in outcomes if outcome.ok)
        return cls(
            total=total,
            succeeded=succeeded,
            failed=len(outcomes) - succeeded,
            outcomes=outcomes,
        )

    @property
    def has_failures(self) -> bool:
        return self.failed > 0
