"""
Collaborator contracts for the workflow engine.

EngineHandle gives access to recorded histories on the server.
ReplayEngine re-executes workflow code against one history.
"""

from abc import ABC, abstractmethod
from typing import Any, Iterator

# Opaque engine-defined history: a parsed JSON mapping or an SDK object.
HistoryRecord = Any


class WorkflowHandle(ABC):
    """Handle to a single workflow execution."""

    @abstractmethod
    def fetch_history(self) -> HistoryRecord:
        """
        Fetch the full event history of the execution.

        Raises:
            Exception: Engine-specific failure (not found, permission, ...)
        """
        ...


class WorkflowListing(ABC):
    """Result of a visibility query over workflow executions."""

    @abstractmethod
    def iterate_histories(self) -> Iterator[HistoryRecord]:
        """
        Lazily yield histories of matching executions.

        The sequence may be unbounded; callers stop pulling when done.
        """
        ...


class EngineHandle(ABC):
    """
    Access to histories stored by the workflow engine.

    Implementations must be safe to call sequentially from one thread.
    """

    @abstractmethod
    def get_handle(self, workflow_id: str) -> WorkflowHandle:
        ...

    @abstractmethod
    def list(self, query: str) -> WorkflowListing:
        ...


class ReplayEngine(ABC):
    """
    Replays one history against workflow code.

    A mismatch is reported by raising. Failures whose type name equals
    determinism_signal are treated as determinism violations.
    """

    determinism_signal: str = "NondeterminismError"

    @abstractmethod
    def run_replay(self, workflows_path: str, name: str, record: HistoryRecord) -> None:
        """
        Replay record against the workflows found at workflows_path.

        Args:
            workflows_path: File, directory or module holding workflow code
            name: Identifier used for logging by the engine
            record: History to replay

        Raises:
            Exception: On any replay failure
        """
        ...
