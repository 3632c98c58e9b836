"""GitHub token lookup for the publish command.

Inside Actions the workflow passes the job's GITHUB_TOKEN. For a local
shadow run against a real repository, an existing `gh auth login` session
is reused so no personal token has to be exported.
"""

from __future__ import annotations

import logging
import os
import subprocess

from rich.console import Console

from outputsize_core.process import CommandRunner

logger = logging.getLogger(__name__)

_GH_TIMEOUT = 5


def resolve_github_token(runner: CommandRunner | None = None) -> str | None:
    """Return GITHUB_TOKEN, else the gh CLI session token, else None.

    A missing or logged-out gh is not an error here; the command decides
    what to do without a token.
    """
    token = os.environ.get("GITHUB_TOKEN")
    if token:
        return token

    runner = runner or CommandRunner(console=Console(stderr=True))
    try:
        gh_token = runner.capture("gh", "auth", "token", timeout=_GH_TIMEOUT)
    except (FileNotFoundError, subprocess.CalledProcessError, subprocess.TimeoutExpired) as e:
        logger.debug("No token from gh CLI (%s).", type(e).__name__)
        return None

    return gh_token or None
