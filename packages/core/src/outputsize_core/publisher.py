"""Publish a workflow's report artifact as a pull request comment."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from rich.console import Console

from outputsize_core.config import DEFAULT_CONFIG
from outputsize_core.gh.base import BasePlatform
from outputsize_core.models import (
    ArtifactInfo,
    ExistingComment,
    PublishedComment,
    PublishSummary,
    RunRecord,
    TriggerContext,
)

console = Console()
logger = logging.getLogger(__name__)


def is_size_report(comment: ExistingComment, marker: str, bot_login: str) -> bool:
    """Return True only for comments the bot posted that carry the report marker."""
    return comment.author == bot_login and marker in comment.body


def compose_body(report: str, marker: str) -> str:
    return f"{report}\n\n{marker}"


def find_report_artifact(artifacts: list[ArtifactInfo], artifact_name: str) -> ArtifactInfo | None:
    """Return the first artifact with the exact configured name, in platform order."""
    matches = [a for a in artifacts if a.name == artifact_name]
    if not matches:
        return None
    return matches[0]


def hide_stale_reports(platform: BasePlatform, comments: list[ExistingComment], max_workers: int = 8) -> list[str]:
    """Minimize every given comment concurrently and return the hidden node ids.

    All submitted hides are allowed to settle; the first failure observed is
    then re-raised. Hides that already went through are left in place.
    """
    if not comments:
        return []

    for c in comments:
        logger.debug("Hiding previous report %s (%s)", c.node_id, c.url)

    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(comments)))) as pool:
        futures = [pool.submit(platform.minimize_comment, c.node_id) for c in comments]
        for future in as_completed(futures):
            future.result()

    return [c.node_id for c in comments]


def extract_report(platform: BasePlatform, runner, artifact: ArtifactInfo, config: dict) -> str:
    """Download the artifact zip, unpack it with the external unzip tool and read the report."""
    workdir = Path(config["workdir"])
    archive = workdir / config["archive_path"]

    data = platform.download_artifact(artifact.id)
    archive.write_bytes(data)
    logger.debug("Wrote %d bytes to %s", len(data), archive)

    runner.exec(config["unzip_command"], "-o", str(archive), "-d", str(workdir))
    return (workdir / config["report_filename"]).read_text(encoding="utf-8", errors="replace")


def publish_report(
    platform: BasePlatform,
    context: TriggerContext,
    reporter,
    runner,
    artifact_name: str,
    config: dict | None = None,
    shadow: bool = False,
) -> PublishSummary | None:
    """Post the run's report on every pull request linked to the triggering workflow run.

    Returns None when the run is skipped (wrong trigger, no pull requests,
    unsuccessful run, no report artifact). Platform and extraction failures
    propagate to the caller.
    """
    cfg = {**DEFAULT_CONFIG, **(config or {})}
    marker = cfg["comment_marker"]
    bot_login = cfg["bot_login"]

    # Step 1: only workflow_run events carry the upstream run.
    raw_run = context.workflow_run
    if raw_run is None:
        reporter.error(
            f'This action should be used in a workflow with "workflow_run" trigger, got: {context.event_name}.'
        )
        return None

    run = RunRecord.from_payload(raw_run)
    if not run.pull_requests:
        reporter.info(
            f"The triggering workflow {run.name} is not associated with pull requests, nowhere to post a comment to."
        )
        return None
    if run.conclusion != "success":
        reporter.info(f"Report can only be published for a successful workflow, got: {run.conclusion}.")
        return None

    # Step 2: find the report artifact.
    artifact = find_report_artifact(platform.list_artifacts(run.id), artifact_name)
    if artifact is None:
        reporter.info("No report artifacts found, nothing to post.")
        return None

    # Step 3: download and unpack it.
    report = extract_report(platform, runner, artifact, cfg)

    # Step 4: pull requests, in event order and not deduplicated.
    prs = list(run.pull_requests)
    reporter.info(f"Associated pull requests: {', '.join(str(pr) for pr in prs)}")

    summary = PublishSummary(run_id=run.id, artifact=artifact, pull_requests=prs)
    body = compose_body(report, marker)

    for pr in prs:
        with reporter.group(f"Pull request #{pr}"):
            # Step 5: hide previous reports, which are now obsolete.
            stale = [c for c in platform.list_comments(pr) if is_size_report(c, marker, bot_login)]

            if shadow:
                reporter.info(f"Would hide {len(stale)} previous report(s) on #{pr}.")
                console.print(body, markup=False, highlight=False)
                summary.published.append(PublishedComment(pr_number=pr, body=body, url=""))
                continue

            if stale:
                reporter.info(f"Hiding {len(stale)} previous report(s) on #{pr}.")
            summary.hidden[pr] = hide_stale_reports(platform, stale, cfg["max_parallel_hides"])

            # Step 6: publish the fresh report.
            comment = platform.create_comment(pr, body)
            summary.published.append(comment)
            reporter.info(f"Commented at {comment.url}")

    return summary
