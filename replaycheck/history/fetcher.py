"""
History fetcher: obtain workflow histories from the selected source.

File and ID sources fail per item (a bad file or a missing workflow is
skipped with a warning). Query sources fail as a whole, since a broken
query cannot partially succeed.
"""

import glob
import json
import os
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from ..core.engine import EngineHandle, HistoryRecord
from ..core.errors import EngineRequiredError, FetchError
from ..core.selection import (
    FilePatternSource,
    QuerySource,
    SelectionConfig,
    TaskQueueSource,
    WorkflowIdsSource,
)
from ..logging_config import get_logger

logger = get_logger(__name__)


def select_histories(
    config: SelectionConfig, engine: Optional[EngineHandle] = None
) -> List[HistoryRecord]:
    """
    Fetch up to config.max_histories histories from the selected source.

    Args:
        config: Workflow selection inputs
        engine: Engine handle; only needed for server-backed sources

    Returns:
        Histories in source order

    Raises:
        SelectionError: If no selection method is populated
        EngineRequiredError: If a server-backed source is chosen without an engine
        FetchError: If a query-based listing fails
    """
    source = config.resolve()
    limit = config.max_histories

    if isinstance(source, FilePatternSource):
        return fetch_from_files(source.pattern, limit)

    if engine is None:
        raise EngineRequiredError("Temporal client required for server-based history fetching")

    if isinstance(source, WorkflowIdsSource):
        return fetch_by_ids(engine, source.workflow_ids, limit)
    if isinstance(source, TaskQueueSource):
        logger.info(f"Fetching histories from task queue: {source.task_queue}")
        return fetch_by_query(engine, source.to_query(), limit)
    if isinstance(source, QuerySource):
        return fetch_by_query(engine, source.query, limit)

    raise TypeError(f"Unsupported history source: {type(source).__name__}")


def _expand_pattern(pattern: str) -> List[str]:
    matches = glob.glob(os.path.expanduser(pattern), recursive=True)
    return sorted(os.path.abspath(p) for p in matches if os.path.isfile(p))


def fetch_from_files(pattern: str, max_histories: int) -> List[HistoryRecord]:
    logger.info(f"Searching for history files: {pattern}")
    files = _expand_pattern(pattern)
    logger.info(f"Found {len(files)} history file(s)")

    if not files:
        logger.warning(f"No history files found matching pattern: {pattern}")
        return []

    if len(files) > max_histories:
        logger.warning(f"Limiting to first {max_histories} files (out of {len(files)} found)")
    limited = files[:max_histories]

    histories: List[HistoryRecord] = []
    for path in limited:
        try:
            histories.append(json.loads(Path(path).read_text(encoding="utf-8")))
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to load history from {path}: {e}")
            continue
        logger.debug(f"Loaded history from {os.path.basename(path)}")

    logger.info(f"Successfully loaded {len(histories)} workflow histories from files")
    return histories


def fetch_by_ids(
    engine: EngineHandle, workflow_ids: Sequence[str], max_histories: int
) -> List[HistoryRecord]:
    logger.info(f"Fetching histories for {len(workflow_ids)} workflow ID(s)")

    if len(workflow_ids) > max_histories:
        logger.warning(
            f"Limiting to first {max_histories} workflow IDs (out of {len(workflow_ids)} provided)"
        )
    limited = list(workflow_ids)[:max_histories]

    histories: List[HistoryRecord] = []
    for workflow_id in limited:
        try:
            history = engine.get_handle(workflow_id).fetch_history()
        except Exception as e:
            logger.warning(f"Failed to fetch history for {workflow_id}: {e}")
            continue
        histories.append(history)
        logger.debug(f"Fetched history for workflow ID: {workflow_id}")

    logger.info(f"Successfully fetched {len(histories)} workflow histories")
    return histories


def _take(histories: Iterable[HistoryRecord], max_histories: int) -> List[HistoryRecord]:
    taken: List[HistoryRecord] = []
    for history in histories:
        if len(taken) >= max_histories:
            logger.warning(f"Reached max histories limit of {max_histories}")
            break
        taken.append(history)
        logger.debug(f"Fetched history {len(taken)}/{max_histories}")
    return taken


def fetch_by_query(engine: EngineHandle, query: str, max_histories: int) -> List[HistoryRecord]:
    logger.info(f"Fetching histories with query: {query}")

    try:
        histories = _take(engine.list(query).iterate_histories(), max_histories)
    except Exception as e:
        logger.error(f"Failed to fetch histories: {e}")
        raise FetchError(f"Failed to fetch workflow histories: {e}") from e

    logger.info(f"Successfully fetched {len(histories)} workflow histories")
    return histories
