"""
Replay executor: replay one history and classify the outcome.

The engine call is the single capture point. Every failure, typed or not,
ends up in the returned ReplayOutcome instead of propagating, except
KeyboardInterrupt and SystemExit which stop the run.
"""

import traceback
from typing import Optional

from ..core.engine import HistoryRecord, ReplayEngine
from ..core.outcomes import ErrorDetail, ErrorKind, ReplayOutcome
from ..core.records import extract_workflow_id
from ..logging_config import get_logger


def failure_name(error: BaseException) -> str:
    """Reported kind of a failure: an explicit string `name` attribute, else the class name."""
    name = getattr(error, "name", None)
    if isinstance(name, str) and name:
        return name
    return type(error).__name__


def _format_trace(error: BaseException) -> Optional[str]:
    if error.__traceback__ is None:
        return None
    return "".join(traceback.format_exception(type(error), error, error.__traceback__))


class ReplayExecutor:
    """
    Replays single histories through a ReplayEngine.

    Args:
        engine: Replay engine to invoke
        determinism_signal: Failure name marking a determinism violation
            (defaults to the engine's own signal)
    """

    def __init__(self, engine: ReplayEngine, determinism_signal: Optional[str] = None) -> None:
        self.engine = engine
        self.determinism_signal = determinism_signal or engine.determinism_signal

    def classify(self, error: BaseException) -> ErrorKind:
        if failure_name(error) == self.determinism_signal:
            return ErrorKind.DETERMINISM_VIOLATION
        return ErrorKind.REPLAY_ERROR

    def replay_one(self, workflows_path: str, record: HistoryRecord) -> ReplayOutcome:
        return self.replay_as(workflows_path, extract_workflow_id(record), record)

    def replay_as(self, workflows_path: str, workflow_id: str, record: HistoryRecord) -> ReplayOutcome:
        """Replay a record whose workflow ID is already known."""
        logger = get_logger(__name__, trace_id=workflow_id)

        try:
            self.engine.run_replay(workflows_path, workflow_id, record)
        except (KeyboardInterrupt, SystemExit):
            raise
        except BaseException as e:
            kind = self.classify(e)
            message = str(e)
            if kind is ErrorKind.DETERMINISM_VIOLATION:
                logger.error(f"✗ Determinism violation in {workflow_id}: {message}")
            else:
                logger.error(f"✗ Replay error in {workflow_id}: {message}")
            return ReplayOutcome.failed(
                workflow_id, ErrorDetail(kind=kind, message=message, trace=_format_trace(e))
            )

        logger.info(f"✓ Replay successful: {workflow_id}")
        return ReplayOutcome.passed(workflow_id)
