"""
Workflow selection: which histories to replay.

SelectionConfig carries the raw, possibly overlapping inputs. resolve()
collapses them into exactly one HistorySource using a fixed priority:

    history file pattern > workflow IDs > task queue > custom query
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from pydantic import BaseModel, Field, field_validator

from .errors import SelectionError

logger = logging.getLogger(__name__)

DEFAULT_MAX_HISTORIES = 100


@dataclass(frozen=True)
class FilePatternSource:
    """Pre-exported history files matched by a glob pattern."""
    pattern: str


@dataclass(frozen=True)
class WorkflowIdsSource:
    """Explicit workflow IDs, fetched one by one from the server."""
    workflow_ids: Tuple[str, ...]


@dataclass(frozen=True)
class TaskQueueSource:
    """All workflows on a task queue."""
    task_queue: str

    def to_query(self) -> str:
        return f'TaskQueue="{self.task_queue}"'


@dataclass(frozen=True)
class QuerySource:
    """Engine visibility query passed through verbatim."""
    query: str


HistorySource = Union[FilePatternSource, WorkflowIdsSource, TaskQueueSource, QuerySource]


class SelectionConfig(BaseModel):
    history_path: str = ""
    workflow_ids: List[str] = Field(default_factory=list)
    task_queue: str = ""
    query: str = ""
    max_histories: int = Field(default=DEFAULT_MAX_HISTORIES, ge=1)

    @field_validator("workflow_ids", mode="before")
    @classmethod
    def _split_ids(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            value = value.split(",")
        return [str(v).strip() for v in value if str(v).strip()]

    def _candidates(self) -> List[HistorySource]:
        candidates: List[HistorySource] = []
        if self.history_path.strip():
            candidates.append(FilePatternSource(self.history_path.strip()))
        if self.workflow_ids:
            candidates.append(WorkflowIdsSource(tuple(self.workflow_ids)))
        if self.task_queue.strip():
            candidates.append(TaskQueueSource(self.task_queue.strip()))
        if self.query.strip():
            candidates.append(QuerySource(self.query.strip()))
        return candidates

    def is_populated(self) -> bool:
        return bool(self._candidates())

    def primary(self) -> Optional[HistorySource]:
        """Highest-priority populated source, or None. Logs nothing."""
        candidates = self._candidates()
        return candidates[0] if candidates else None

    def resolve(self) -> HistorySource:
        """
        Pick the single history source to use.

        Returns:
            Highest-priority populated source

        Raises:
            SelectionError: If no selection method is populated
        """
        candidates = self._candidates()
        if not candidates:
            raise SelectionError(
                "Must specify at least one workflow selection method: "
                "workflow-history-path, workflow-ids, workflow-task-queue, or workflow-query"
            )
        if len(candidates) > 1:
            logger.warning(
                "Multiple selection methods provided. "
                "Priority: history-path > workflow-ids > task-queue > query"
            )
        return candidates[0]
