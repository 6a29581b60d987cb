"""
Best-effort identifiers for opaque history records.

Strategies are tried in order; the first to return a non-empty string wins.
Any structural mismatch inside a strategy falls through to the next one.
"""

import logging
from typing import Any, Callable, List, Optional

UNKNOWN_WORKFLOW_ID = "unknown"

logger = logging.getLogger(__name__)


def _top_level_id(record: Any) -> Optional[str]:
    if isinstance(record, dict):
        value = record.get("workflowId")
    else:
        value = getattr(record, "workflow_id", None)
    return value if isinstance(value, str) else None


def _started_event_id(record: Any) -> Optional[str]:
    if isinstance(record, dict):
        events = record.get("events")
    else:
        events = getattr(record, "events", None)
    if not isinstance(events, (list, tuple)) or not events:
        return None
    attrs = events[0].get("workflowExecutionStartedEventAttributes")
    if not attrs:
        return None
    value = attrs.get("workflowId")
    return value if value else None


ID_STRATEGIES: List[Callable[[Any], Optional[str]]] = [
    _top_level_id,
    _started_event_id,
]


def extract_workflow_id(record: Any) -> str:
    """
    Derive a human-readable workflow ID from a history record.

    Never raises. Returns "unknown" when no strategy matches.
    """
    for strategy in ID_STRATEGIES:
        try:
            value = strategy(record)
        except Exception as e:
            logger.debug(f"Failed to extract workflow ID via {strategy.__name__}: {e}")
            continue
        if value:
            return str(value)
    return UNKNOWN_WORKFLOW_ID
