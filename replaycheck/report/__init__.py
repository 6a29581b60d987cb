"""
Replay reporting.

build_report produces a structured Report; sinks publish it.
"""

from .builder import (
    Cell,
    Heading,
    Table,
    Raw,
    Report,
    build_report,
    format_success_rate,
    truncate_message,
)
from .sinks import render_markdown, write_job_summary, write_outputs, step_outputs, print_report

__all__ = [
    "Cell",
    "Heading",
    "Table",
    "Raw",
    "Report",
    "build_report",
    "format_success_rate",
    "truncate_message",
    "render_markdown",
    "write_job_summary",
    "write_outputs",
    "step_outputs",
    "print_report",
]
