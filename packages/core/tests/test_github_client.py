"""Tests for the PyGithub-backed platform client."""

from unittest.mock import MagicMock

import pytest
import requests
from github import GithubException

from outputsize_core.gh.client import GitHubPlatform
from outputsize_core.models import ArtifactInfo


def _artifact(name, id_):
    a = MagicMock()
    a.name = name
    a.id = id_
    return a


def _comment(login, body, node_id, url="https://github.com/o/r/pull/1#issuecomment-1"):
    c = MagicMock()
    c.user.login = login
    c.body = body
    c.node_id = node_id
    c.html_url = url
    return c


@pytest.fixture
def gh(mocker):
    github_cls = mocker.patch("outputsize_core.gh.client.Github")
    return github_cls.return_value


@pytest.fixture
def repo(gh):
    return gh.get_repo.return_value


class TestConstruction:
    def test_uses_default_api_url(self, mocker):
        github_cls = mocker.patch("outputsize_core.gh.client.Github")
        GitHubPlatform("owner/repo", "tok")
        github_cls.assert_called_once_with("tok", base_url="https://api.github.com")

    def test_uses_enterprise_api_url(self, mocker):
        github_cls = mocker.patch("outputsize_core.gh.client.Github")
        GitHubPlatform("owner/repo", "tok", api_url="https://ghe.example.com/api/v3/")
        github_cls.assert_called_once_with("tok", base_url="https://ghe.example.com/api/v3")

    def test_repo_fetched_once(self, gh):
        platform = GitHubPlatform("owner/repo", "tok")
        platform.repo
        platform.repo
        gh.get_repo.assert_called_once_with("owner/repo")


class TestArtifacts:
    def test_list_artifacts(self, repo):
        repo.get_workflow_run.return_value.get_artifacts.return_value = [_artifact("report", 1), _artifact("logs", 2)]

        result = GitHubPlatform("owner/repo", "tok").list_artifacts(99)

        repo.get_workflow_run.assert_called_once_with(99)
        assert result == [ArtifactInfo("report", 1), ArtifactInfo("logs", 2)]

    def test_download_artifact(self, gh, mocker):
        mock_get = mocker.patch("outputsize_core.gh.client.requests.get")
        mock_get.return_value.content = b"PK\x03\x04"

        data = GitHubPlatform("owner/repo", "tok").download_artifact(12)

        assert data == b"PK\x03\x04"
        url = mock_get.call_args.args[0]
        assert url == "https://api.github.com/repos/owner/repo/actions/artifacts/12/zip"
        assert mock_get.call_args.kwargs["headers"]["Authorization"] == "Bearer tok"
        mock_get.return_value.raise_for_status.assert_called_once()

    def test_download_artifact_http_error_propagates(self, gh, mocker):
        mock_get = mocker.patch("outputsize_core.gh.client.requests.get")
        mock_get.return_value.raise_for_status.side_effect = requests.HTTPError("410 Gone")

        with pytest.raises(requests.HTTPError):
            GitHubPlatform("owner/repo", "tok").download_artifact(12)


class TestComments:
    def test_list_comments(self, repo):
        repo.get_issue.return_value.get_comments.return_value = [
            _comment("github-actions[bot]", "Size\n\n#outputSize", "IC_1"),
            _comment("octocat", None, "IC_2"),
        ]

        comments = GitHubPlatform("owner/repo", "tok").list_comments(5)

        repo.get_issue.assert_called_once_with(5)
        assert [(c.author, c.body, c.node_id) for c in comments] == [
            ("github-actions[bot]", "Size\n\n#outputSize", "IC_1"),
            ("octocat", "", "IC_2"),
        ]

    def test_create_comment(self, repo):
        repo.get_issue.return_value.create_comment.return_value.html_url = "https://github.com/o/r/pull/5#c"

        published = GitHubPlatform("owner/repo", "tok").create_comment(5, "body")

        repo.get_issue.return_value.create_comment.assert_called_once_with("body")
        assert published.pr_number == 5
        assert published.url == "https://github.com/o/r/pull/5#c"


class TestMinimize:
    def test_uses_named_minimize_mutation(self, gh):
        GitHubPlatform("owner/repo", "tok").minimize_comment("IC_1")

        gh.requester.graphql_named_mutation.assert_called_once_with(
            mutation_name="minimizeComment",
            mutation_input={"subjectId": "IC_1", "classifier": "OUTDATED"},
            output_schema="minimizedComment { isMinimized }",
        )

    def test_does_not_post_raw_requests(self, gh, mocker):
        mock_post = mocker.patch("outputsize_core.gh.client.requests.post")
        GitHubPlatform("owner/repo", "tok").minimize_comment("IC_1")
        mock_post.assert_not_called()

    def test_mutation_errors_propagate(self, gh):
        gh.requester.graphql_named_mutation.side_effect = GithubException(
            200, {"errors": [{"message": "Could not resolve to a node"}]}
        )

        with pytest.raises(GithubException):
            GitHubPlatform("owner/repo", "tok").minimize_comment("IC_missing")
