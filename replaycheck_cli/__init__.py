"""
replaycheck CLI - Temporal workflow replay testing

Commands:
- replaycheck run - Fetch histories, replay them and publish a report
- replaycheck version - Show version information
"""

from replaycheck import __version__

__all__ = ["__version__"]
