"""
Report sinks: publish a Report.

- Markdown job summary ($GITHUB_STEP_SUMMARY or an explicit path)
- Step outputs ($GITHUB_OUTPUT)
- Rich console rendering
"""

import os
from pathlib import Path
from typing import Dict, List, Optional, Union

from rich.console import Console
from rich.markdown import Markdown
from rich.table import Table as RichTable

from ..core.outcomes import AggregateResult
from ..logging_config import get_logger
from .builder import Cell, Heading, Raw, Report, Row, Table

logger = get_logger(__name__)


def _cell_text(cell: Union[Cell, str]) -> str:
    return cell.data if isinstance(cell, Cell) else cell


def _md_escape(text: str) -> str:
    return text.replace("|", "\\|").replace("\r", " ").replace("\n", " ")


def _md_row(row: Row) -> str:
    return "| " + " | ".join(_md_escape(_cell_text(c)) for c in row) + " |"


def _md_table(table: Table) -> List[str]:
    if not table.rows:
        return []
    header = table.header
    lines = [_md_row(header), "| " + " | ".join("---" for _ in header) + " |"]
    lines.extend(_md_row(r) for r in table.body)
    return lines


def render_markdown(report: Report) -> str:
    lines: List[str] = []
    for block in report.blocks:
        if isinstance(block, Heading):
            lines.append(f"{'#' * block.level} {block.text}")
            lines.append("")
        elif isinstance(block, Table):
            lines.extend(_md_table(block))
            lines.append("")
        elif isinstance(block, Raw):
            lines.append(block.text)
    return "\n".join(lines).rstrip("\n") + "\n"


def write_job_summary(report: Report, path: Optional[str] = None) -> Optional[Path]:
    """
    Append the Markdown report to the job summary file.

    Returns the path written, or None when no summary file is configured.
    """
    target = path or os.environ.get("GITHUB_STEP_SUMMARY")
    if not target:
        logger.info("No job summary path configured, skipping job summary")
        return None

    logger.info("Generating GitHub job summary")
    summary_path = Path(target)
    summary_path.parent.mkdir(parents=True, exist_ok=True)
    with open(summary_path, "a", encoding="utf-8") as f:
        f.write(render_markdown(report))
    logger.info("Job summary created")
    return summary_path


def step_outputs(result: AggregateResult) -> Dict[str, int]:
    return {
        "total-replays": result.total,
        "successful-replays": result.successful,
        "failed-replays": result.failed,
        "determinism-violations": result.determinism_violations,
    }


def write_outputs(result: AggregateResult, path: Optional[str] = None) -> Dict[str, int]:
    """Write step outputs to $GITHUB_OUTPUT (when set) and return them."""
    outputs = step_outputs(result)
    target = path or os.environ.get("GITHUB_OUTPUT")
    if not target:
        logger.debug("GITHUB_OUTPUT not set, outputs not written")
        return outputs
    with open(target, "a", encoding="utf-8") as f:
        for key, value in outputs.items():
            f.write(f"{key}={value}\n")
    return outputs


def _rich_table(table: Table, title: Optional[str] = None) -> RichTable:
    rendered = RichTable(title=title)
    for i, cell in enumerate(table.header):
        style = "cyan" if i == len(table.header) - 1 else "green"
        rendered.add_column(_cell_text(cell), style=style, overflow="fold")
    for row in table.body:
        rendered.add_row(*(_cell_text(c) for c in row))
    return rendered


def print_report(report: Report, console: Optional[Console] = None) -> None:
    console = console or Console()
    pending_title: Optional[str] = None
    for block in report.blocks:
        if isinstance(block, Heading):
            pending_title = block.text
        elif isinstance(block, Table):
            console.print(_rich_table(block, title=pending_title))
            pending_title = None
        elif isinstance(block, Raw) and block.text.strip() and block.text.strip() != "---":
            console.print(Markdown(block.text.strip()))
