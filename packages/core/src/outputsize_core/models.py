"""Data carried through a single publish run.

Nothing here is persisted: every object is built from the triggering event
or from a platform response and discarded when the run ends.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class TriggerContext:
    """Repository identity plus the raw event payload that started the run."""

    owner: str
    repo: str
    event_name: str
    payload: dict = field(default_factory=dict)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    @property
    def workflow_run(self) -> dict | None:
        return self.payload.get("workflow_run") or None

    @classmethod
    def from_environment(
        cls,
        repository: str | None = None,
        event_name: str | None = None,
        event_path: str | None = None,
    ) -> TriggerContext:
        """Build a context from the variables GitHub Actions exports to every step.

        Explicit arguments win over ``GITHUB_REPOSITORY``, ``GITHUB_EVENT_NAME``
        and ``GITHUB_EVENT_PATH``. A missing event file yields an empty payload,
        which the publisher reports as a trigger mismatch.
        """
        repository = repository or os.environ.get("GITHUB_REPOSITORY", "")
        event_name = event_name or os.environ.get("GITHUB_EVENT_NAME", "")
        event_path = event_path or os.environ.get("GITHUB_EVENT_PATH")

        if "/" not in repository:
            raise ValueError(f"Repository must be in owner/name format, got: {repository!r}")
        owner, repo = repository.split("/", 1)

        payload: dict = {}
        if event_path and Path(event_path).exists():
            with open(event_path, encoding="utf-8") as f:
                payload = json.load(f) or {}

        return cls(owner=owner, repo=repo, event_name=event_name, payload=payload)


@dataclass
class RunRecord:
    """The upstream workflow run described by a ``workflow_run`` event."""

    name: str
    conclusion: str | None  # "success" | "failure" | "cancelled" | ...
    id: int
    pull_requests: list[int] = field(default_factory=list)

    @classmethod
    def from_payload(cls, data: dict) -> RunRecord:
        return cls(
            name=data.get("name", ""),
            conclusion=data.get("conclusion"),
            id=data.get("id", 0),
            pull_requests=[pr["number"] for pr in data.get("pull_requests") or []],
        )


@dataclass
class ArtifactInfo:
    name: str
    id: int


@dataclass
class ExistingComment:
    """A comment already present on a pull request."""

    author: str
    body: str
    node_id: str
    url: str = ""


@dataclass
class PublishedComment:
    pr_number: int
    body: str
    url: str


@dataclass
class PublishSummary:
    """Result returned by publish_report once the report has been handled for every PR."""

    run_id: int
    artifact: ArtifactInfo
    pull_requests: list[int] = field(default_factory=list)
    hidden: dict[int, list[str]] = field(default_factory=dict)
    published: list[PublishedComment] = field(default_factory=list)
