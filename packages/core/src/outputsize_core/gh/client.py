from __future__ import annotations

import logging

import requests
from github import Github

from outputsize_core.gh.base import BasePlatform
from outputsize_core.models import ArtifactInfo, ExistingComment, PublishedComment

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"


class GitHubPlatform(BasePlatform):
    """GitHub implementation backed by PyGithub.

    PyGithub only exposes the artifact's download URL, not the zip itself, so
    the download goes through requests with the same token.
    """

    def __init__(self, repo_name: str, token: str, api_url: str | None = None, timeout: int = 30):
        self._api_url = (api_url or DEFAULT_API_URL).rstrip("/")
        self._repo_name = repo_name
        self._token = token
        self._timeout = timeout
        self._gh = Github(token, base_url=self._api_url)
        self._repo = None

    @property
    def repo(self):
        if self._repo is None:
            self._repo = self._gh.get_repo(self._repo_name)
        return self._repo

    def list_artifacts(self, run_id: int) -> list[ArtifactInfo]:
        run = self.repo.get_workflow_run(run_id)
        return [ArtifactInfo(name=a.name, id=a.id) for a in run.get_artifacts()]

    def download_artifact(self, artifact_id: int) -> bytes:
        url = f"{self._api_url}/repos/{self._repo_name}/actions/artifacts/{artifact_id}/zip"
        logger.debug("Downloading artifact %s from %s", artifact_id, url)
        headers = {
            "Authorization": f"Bearer {self._token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        # GitHub answers with a redirect to blob storage; requests drops the
        # Authorization header when the host changes.
        response = requests.get(url, headers=headers, timeout=self._timeout)
        response.raise_for_status()
        return response.content

    def list_comments(self, pr_number: int) -> list[ExistingComment]:
        issue = self.repo.get_issue(pr_number)
        return [
            ExistingComment(
                author=c.user.login if c.user else "",
                body=c.body or "",
                node_id=c.node_id,
                url=c.html_url,
            )
            for c in issue.get_comments()
        ]

    def create_comment(self, pr_number: int, body: str) -> PublishedComment:
        comment = self.repo.get_issue(pr_number).create_comment(body)
        return PublishedComment(pr_number=pr_number, body=body, url=comment.html_url)

    def minimize_comment(self, node_id: str) -> None:
        # The requester derives the GraphQL endpoint from base_url and raises
        # GithubException when the response carries errors.
        self._gh.requester.graphql_named_mutation(
            mutation_name="minimizeComment",
            mutation_input={"subjectId": node_id, "classifier": "OUTDATED"},
            output_schema="minimizedComment { isMinimized }",
        )
