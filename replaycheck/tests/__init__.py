"""
Test suite for replaycheck.

Focus areas:
- Selection priority and history source behavior
- Replay outcome classification
- Aggregate invariants
- Report structure
"""
