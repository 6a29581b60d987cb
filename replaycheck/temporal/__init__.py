"""
Temporal adapters for the engine contracts.

- TemporalEngineHandle: fetch and list histories through temporalio.client
- TemporalReplayEngine: replay histories through temporalio.worker.Replayer
"""

from .loop import LoopBridge
from .client import TemporalEngineHandle
from .replayer import TemporalReplayEngine, load_workflows, resolve_workflows_path

__all__ = [
    "LoopBridge",
    "TemporalEngineHandle",
    "TemporalReplayEngine",
    "load_workflows",
    "resolve_workflows_path",
]
