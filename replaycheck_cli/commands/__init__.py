"""replaycheck CLI commands."""
