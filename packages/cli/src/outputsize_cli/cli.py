"""CLI entry point for outputsize.

Commands:
  publish  — post the report artifact of a finished workflow run on its pull requests
  init     — write .outputsize.yml and the workflow_run workflow that calls publish
"""

from __future__ import annotations

import importlib.metadata

import click

from outputsize_cli.commands.init import init_cmd
from outputsize_cli.commands.publish import publish_cmd


@click.group()
@click.version_option(
    version=importlib.metadata.version("outputsize"),
    prog_name="outputsize",
)
@click.option(
    "--config",
    "config_path",
    default=".outputsize.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="OUTPUTSIZE_CONFIG",
)
@click.pass_context
def main(ctx: click.Context, config_path: str):
    """Publish workflow size reports as pull request comments."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


main.add_command(publish_cmd)
main.add_command(init_cmd)
