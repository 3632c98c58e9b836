"""publish command — post a workflow run's report on its pull requests."""

from __future__ import annotations

import subprocess

import click
import requests
from github import GithubException
from rich.console import Console

from outputsize_core.actions import ActionsReporter
from outputsize_core.gh.client import GitHubPlatform
from outputsize_core.models import TriggerContext
from outputsize_core.process import CommandRunner
from outputsize_core.publisher import publish_report

console = Console()


@click.command("publish")
@click.option("--artifact-name", default=None, help="Name of the report artifact. Overrides config file.")
@click.option("--repo", envvar="GITHUB_REPOSITORY", default=None, help="GitHub repository in owner/name format.")
@click.option("--event-name", envvar="GITHUB_EVENT_NAME", default=None, help="Name of the triggering event.")
@click.option(
    "--event-path",
    envvar="GITHUB_EVENT_PATH",
    default=None,
    type=click.Path(dir_okay=False),
    help="Path to the JSON payload of the triggering event.",
)
@click.option(
    "--shadow",
    "-s",
    is_flag=True,
    help="Dry-run mode: print the report comment without hiding or posting anything.",
)
@click.pass_context
def publish_cmd(
    ctx,
    artifact_name: str | None,
    repo: str | None,
    event_name: str | None,
    event_path: str | None,
    shadow: bool,
):
    """Publish the report artifact of a finished workflow run.

    Meant to run in a workflow triggered by `workflow_run`. Finds the report
    artifact of the upstream run, hides previous report comments on the
    linked pull requests and posts the new report.

    \b
    Required environment variables:
      GITHUB_TOKEN         GitHub token (or use gh CLI)
      GITHUB_REPOSITORY    Set by Actions; or pass --repo
      GITHUB_EVENT_PATH    Set by Actions; or pass --event-path
    """
    from outputsize_core.config import load_config
    from outputsize_cli.auth import resolve_github_token

    config_path = (ctx.obj or {}).get("config_path", ".outputsize.yml")
    config = load_config(config_path, cli_overrides={"artifact_name": artifact_name})

    token = resolve_github_token()
    if not token:
        raise click.UsageError(
            "No GitHub token found. Set GITHUB_TOKEN or run `gh auth login` first.\n"
            "Create a token at https://github.com/settings/tokens"
        )
    config["github_token"] = token

    try:
        context = TriggerContext.from_environment(repository=repo, event_name=event_name, event_path=event_path)
    except ValueError as e:
        raise click.UsageError(str(e)) from e

    platform = GitHubPlatform(
        context.full_name,
        token,
        api_url=config.get("api_url"),
    )

    try:
        summary = publish_report(
            platform,
            context,
            ActionsReporter(),
            CommandRunner(),
            config["artifact_name"],
            config=config,
            shadow=shadow,
        )
    except (GithubException, requests.RequestException, subprocess.CalledProcessError, OSError) as e:
        raise click.ClickException(f"Publishing the report failed ({type(e).__name__}): {e}") from e

    if summary is None:
        return

    if shadow:
        console.print(
            f"[bold]Shadow run complete. The report would be posted on {len(summary.published)} pull request(s).[/bold]"
        )
    else:
        hidden = sum(len(ids) for ids in summary.hidden.values())
        console.print(
            f"[green]Report posted on {len(summary.published)} pull request(s), "
            f"{hidden} previous report(s) hidden.[/green]"
        )
