"""Abstract hosting-platform interface.

The publisher depends on BasePlatform, not on PyGithub, so tests and
alternative hosts can supply their own implementation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from outputsize_core.models import ArtifactInfo, ExistingComment, PublishedComment


class BasePlatform(ABC):
    """The handful of platform operations a publish run needs.

    Every method may raise whatever transport error the implementation uses;
    the publisher never catches them.
    """

    @abstractmethod
    def list_artifacts(self, run_id: int) -> list[ArtifactInfo]:
        """Return every artifact uploaded by the given workflow run."""

    @abstractmethod
    def download_artifact(self, artifact_id: int) -> bytes:
        """Return the artifact as a zip archive."""

    @abstractmethod
    def list_comments(self, pr_number: int) -> list[ExistingComment]:
        """Return all issue comments on a pull request."""

    @abstractmethod
    def create_comment(self, pr_number: int, body: str) -> PublishedComment:
        """Post a new issue comment on a pull request."""

    @abstractmethod
    def minimize_comment(self, node_id: str) -> None:
        """Collapse a comment as outdated, keyed by its GraphQL node id."""
