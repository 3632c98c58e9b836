"""init command — write .outputsize.yml and the workflow that publishes reports.

The report is produced by an upstream workflow that runs on pull_request and
uploads it as an artifact. Publishing happens in a second workflow triggered
by workflow_run, which has a write token even for pull requests from forks.
"""

from __future__ import annotations

from pathlib import Path

import click
import yaml
from rich.console import Console

console = Console()

_WORKFLOW_PATH = Path(".github/workflows/output-size-comment.yml")

_WORKFLOW_TEMPLATE = """\
name: Output Size Comment

on:
  workflow_run:
    workflows: ["{upstream}"]
    types: [completed]

jobs:
  comment:
    runs-on: ubuntu-latest
    if: ${{{{ github.event.workflow_run.event == 'pull_request' }}}}
    permissions:
      actions: read
      pull-requests: write

    steps:
      - name: Set up Python
        uses: actions/setup-python@v5
        with:
          python-version: "3.12"

      - name: Install outputsize
        run: pip install "outputsize=={version}"

      - name: Publish report
        env:
          GITHUB_TOKEN: ${{{{ secrets.GITHUB_TOKEN }}}}
        run: outputsize publish --artifact-name "{artifact_name}"
"""


@click.command("init")
@click.option("--artifact-name", default=None, help="Name of the report artifact uploaded by the upstream workflow.")
@click.option("--workflow", "upstream", default=None, help="Name of the upstream workflow that builds the report.")
def init_cmd(artifact_name: str | None, upstream: str | None):
    """Set up report publishing for this repository.

    Creates .outputsize.yml and, optionally, a GitHub Actions workflow that
    runs `outputsize publish` whenever the upstream workflow completes.
    """
    console.print("\n[bold cyan]outputsize init[/bold cyan] — setup wizard\n")

    if artifact_name is None:
        artifact_name = click.prompt("Report artifact name", default="report")

    _write_config({"artifact_name": artifact_name})
    console.print("[green]Created .outputsize.yml[/green]")

    setup_ci = click.confirm(f"\nGenerate {_WORKFLOW_PATH} for GitHub Actions?", default=True)
    if setup_ci:
        if upstream is None:
            upstream = click.prompt("Name of the workflow that uploads the report")
        _write_workflow(upstream, artifact_name)
        console.print(f"[green]Created {_WORKFLOW_PATH}[/green]")

    console.print("\n[bold green]Setup complete![/bold green]")


def _write_config(config: dict) -> None:
    """Write or update .outputsize.yml, preserving any existing keys."""
    path = Path(".outputsize.yml")
    existing: dict = {}
    if path.exists():
        existing = yaml.safe_load(path.read_text()) or {}
    existing.update(config)
    path.write_text(yaml.dump(existing, default_flow_style=False, sort_keys=False))


def _get_version() -> str:
    """Read the current outputsize version from the installed package metadata."""
    from importlib.metadata import PackageNotFoundError, version

    try:
        return version("outputsize")
    except PackageNotFoundError:
        return "0.1.0"


def _write_workflow(upstream: str, artifact_name: str) -> None:
    _WORKFLOW_PATH.parent.mkdir(parents=True, exist_ok=True)
    _WORKFLOW_PATH.write_text(
        _WORKFLOW_TEMPLATE.format(upstream=upstream, artifact_name=artifact_name, version=_get_version())
    )
