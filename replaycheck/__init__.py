"""
Temporal Replay Check

Replays recorded workflow histories against current workflow code to catch
non-deterministic changes before they are deployed.
"""

__version__ = "0.1.0"
