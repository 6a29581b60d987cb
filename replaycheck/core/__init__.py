"""
Core replay check primitives.

This module provides:
- SelectionConfig / HistorySource: which histories to replay
- EngineHandle / ReplayEngine: workflow engine contracts
- ReplayOutcome / AggregateResult: replay result model
- extract_workflow_id: best-effort record identifiers
"""

from .errors import (
    ReplayCheckError,
    ConfigError,
    SelectionError,
    EngineRequiredError,
    FetchError,
    BuildError,
    EngineConnectionError,
    WorkflowLoadError,
)
from .engine import EngineHandle, WorkflowHandle, WorkflowListing, ReplayEngine, HistoryRecord
from .selection import (
    SelectionConfig,
    HistorySource,
    FilePatternSource,
    WorkflowIdsSource,
    TaskQueueSource,
    QuerySource,
    DEFAULT_MAX_HISTORIES,
)
from .outcomes import ErrorKind, ErrorDetail, ReplayOutcome, AggregateResult
from .records import extract_workflow_id, UNKNOWN_WORKFLOW_ID

__all__ = [
    "ReplayCheckError",
    "ConfigError",
    "SelectionError",
    "EngineRequiredError",
    "FetchError",
    "BuildError",
    "EngineConnectionError",
    "WorkflowLoadError",
    "EngineHandle",
    "WorkflowHandle",
    "WorkflowListing",
    "ReplayEngine",
    "HistoryRecord",
    "SelectionConfig",
    "HistorySource",
    "FilePatternSource",
    "WorkflowIdsSource",
    "TaskQueueSource",
    "QuerySource",
    "DEFAULT_MAX_HISTORIES",
    "ErrorKind",
    "ErrorDetail",
    "ReplayOutcome",
    "AggregateResult",
    "extract_workflow_id",
    "UNKNOWN_WORKFLOW_ID",
]
