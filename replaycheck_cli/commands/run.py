"""
Run command: fetch workflow histories, replay them, publish the report.

Exit codes:
    0: All replays passed (or failures tolerated with --no-fail-on-replay-error)
    1: Replay failures
    2: Invalid inputs or a batch-fatal error (selection, build, connection, query)
"""

import json
import sys
import traceback
from typing import Optional

import typer
from rich.console import Console

from replaycheck.config import load_config
from replaycheck.logging_config import get_logger, setup_logging
from replaycheck.pipeline import run_pipeline
from replaycheck.report import print_report

console = Console()
logger = get_logger(__name__)

ENV_PREFIX = "REPLAYCHECK_"


def _env(name: str) -> str:
    return f"{ENV_PREFIX}{name}"


def run_command(
    workflows_path: str = typer.Option(
        ...,
        "--workflows-path",
        "-w",
        envvar=_env("WORKFLOWS_PATH"),
        help="Workflow code to replay against (.py file, directory or module name)",
    ),
    history_path: str = typer.Option(
        "", "--history-path", envvar=_env("HISTORY_PATH"), help="Glob of exported history JSON files"
    ),
    workflow_ids: str = typer.Option(
        "", "--workflow-ids", envvar=_env("WORKFLOW_IDS"), help="Comma-separated workflow IDs"
    ),
    task_queue: str = typer.Option(
        "", "--task-queue", envvar=_env("TASK_QUEUE"), help="Replay workflows from this task queue"
    ),
    query: str = typer.Option(
        "", "--query", envvar=_env("QUERY"), help="Temporal visibility query"
    ),
    max_histories: int = typer.Option(
        100, "--max-histories", "-n", envvar=_env("MAX_HISTORIES"), help="Maximum histories to replay"
    ),
    address: str = typer.Option(
        "localhost:7233", "--address", envvar=_env("TEMPORAL_ADDRESS"), help="Temporal frontend address"
    ),
    namespace: str = typer.Option(
        "default", "--namespace", envvar=_env("TEMPORAL_NAMESPACE"), help="Temporal namespace"
    ),
    build_command: str = typer.Option(
        "", "--build-command", envvar=_env("BUILD_COMMAND"), help="Command to build workflow code"
    ),
    skip_build: bool = typer.Option(
        False, "--skip-build", envvar=_env("SKIP_BUILD"), help="Skip the build step"
    ),
    working_directory: str = typer.Option(
        ".", "--working-directory", "-C", envvar=_env("WORKING_DIRECTORY"), help="Project directory"
    ),
    fail_on_replay_error: bool = typer.Option(
        True,
        "--fail-on-replay-error/--no-fail-on-replay-error",
        envvar=_env("FAIL_ON_REPLAY_ERROR"),
        help="Exit non-zero when any replay fails",
    ),
    create_job_summary: bool = typer.Option(
        True,
        "--job-summary/--no-job-summary",
        envvar=_env("CREATE_JOB_SUMMARY"),
        help="Append a Markdown report to the GitHub job summary",
    ),
    summary_path: Optional[str] = typer.Option(
        None, "--summary-path", envvar=_env("SUMMARY_PATH"), help="Job summary file (default: $GITHUB_STEP_SUMMARY)"
    ),
    results_path: Optional[str] = typer.Option(
        None, "--results-path", envvar=_env("RESULTS_PATH"), help="Write replay results as JSON"
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING, ERROR"),
    log_format: Optional[str] = typer.Option(None, "--log-format", help="text, json or github"),
    json_output: bool = typer.Option(False, "--json", help="Output results as JSON"),
):
    """
    Replay workflow histories against current workflow code.

    Examples:
        replaycheck run -w workflows.py --history-path 'histories/*.json'
        replaycheck run -w app.workflows --task-queue orders --max-histories 20
        replaycheck run -w app.workflows --workflow-ids wf-1,wf-2 --json
    """
    # Keep stdout clean for JSON output
    setup_logging(level=log_level, log_format=log_format, stream=sys.stderr if json_output else None)

    try:
        config = load_config(
            {
                "temporal": {"address": address, "namespace": namespace},
                "selection": {
                    "history_path": history_path,
                    "workflow_ids": workflow_ids,
                    "task_queue": task_queue,
                    "query": query,
                    "max_histories": max_histories,
                },
                "build": {
                    "workflows_path": workflows_path,
                    "build_command": build_command,
                    "skip_build": skip_build,
                    "working_directory": working_directory,
                },
                "output": {
                    "fail_on_replay_error": fail_on_replay_error,
                    "create_job_summary": create_job_summary,
                    "summary_path": summary_path,
                    "results_path": results_path,
                },
            }
        )
        outcome = run_pipeline(config)
    except Exception as e:
        logger.error(f"Action failed: {e}")
        logger.debug(traceback.format_exc())
        if json_output:
            print(json.dumps({"success": False, "error": str(e)}))
        else:
            console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    if json_output:
        output = {"success": not outcome.failed, **outcome.result.to_dict()}
        print(json.dumps(output, indent=2))
    else:
        print_report(outcome.report, console)

    if outcome.failed:
        if not json_output:
            console.print(f"[red]✗ {outcome.failure_message}[/red]")
        raise typer.Exit(1)
    raise typer.Exit(0)
