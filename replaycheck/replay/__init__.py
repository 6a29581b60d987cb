"""
Replay system: run fetched histories against current workflow code.

Each history is replayed individually so a single failure is attributed to
one workflow and never aborts the run.
"""

from .executor import ReplayExecutor, failure_name
from .runner import run_replays

__all__ = [
    "ReplayExecutor",
    "failure_name",
    "run_replays",
]
