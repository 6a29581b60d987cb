"""
Replay runner: replay every fetched history, one at a time.

Histories are replayed strictly in input order and never concurrently;
replay mutates worker state and logs must stay attributable to a single
workflow.
"""

from typing import List, Sequence

from ..core.engine import HistoryRecord
from ..core.outcomes import AggregateResult, ReplayOutcome
from ..core.records import extract_workflow_id
from ..logging_config import get_logger
from .executor import ReplayExecutor

logger = get_logger(__name__)


def run_replays(
    histories: Sequence[HistoryRecord],
    workflows_path: str,
    executor: ReplayExecutor,
) -> AggregateResult:
    """
    Replay histories sequentially and aggregate the outcomes.

    Args:
        histories: Histories in the order they were fetched
        workflows_path: Location of the workflow code to replay against
        executor: Executor wrapping the replay engine

    Returns:
        AggregateResult whose counters are derived from the outcome list
    """
    total = len(histories)
    logger.info(f"Running replay tests for {total} workflow histories")
    logger.info(f"Using workflows from: {workflows_path}")

    outcomes: List[ReplayOutcome] = []
    for index, history in enumerate(histories, start=1):
        workflow_id = extract_workflow_id(history)
        get_logger(__name__, trace_id=workflow_id).info(
            f"Replaying workflow {index}/{total}: {workflow_id}"
        )
        outcomes.append(executor.replay_as(workflows_path, workflow_id, history))

    result = AggregateResult.from_outcomes(outcomes)
    logger.info(
        "Replay Results Summary:\n"
        f"  Total: {result.total}\n"
        f"  Successful: {result.successful}\n"
        f"  Failed: {result.failed}\n"
        f"  Determinism Violations: {result.determinism_violations}\n"
        f"  Other Errors: {result.other_errors}"
    )
    return result
