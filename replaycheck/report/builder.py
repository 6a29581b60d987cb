"""
Report builder: turn an AggregateResult into a structured summary.

build_report is pure. Sinks in report.sinks decide how blocks are rendered
(Markdown job summary, rich console).
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union

from ..core.outcomes import AggregateResult, ReplayOutcome

REPORT_TITLE = "Temporal Replay Test Results"
FAILED_TITLE = "Failed Replays"
MESSAGE_LIMIT = 100
NO_MESSAGE = "No error message"
UNKNOWN_KIND = "Unknown"
ALL_PASSED = "\n✅ All replay tests passed successfully!\n"
SEPARATOR = "\n\n---\n\n"
FOOTER = "*Generated by replaycheck (Temporal Replay Testing Action)*"


@dataclass(frozen=True)
class Cell:
    data: str
    header: bool = False


Row = Tuple[Union[Cell, str], ...]


@dataclass(frozen=True)
class Heading:
    text: str
    level: int = 2


@dataclass(frozen=True)
class Table:
    rows: Tuple[Row, ...]

    @property
    def header(self) -> Row:
        return self.rows[0] if self.rows else ()

    @property
    def body(self) -> Tuple[Row, ...]:
        return self.rows[1:]


@dataclass(frozen=True)
class Raw:
    text: str


Block = Union[Heading, Table, Raw]


@dataclass(frozen=True)
class Report:
    """
    Ordered report blocks plus the figures they were built from.

    Fields:
        blocks: Headings, tables and raw text in display order
        success_rate: Formatted success rate ("70.0%", "0%" for empty runs)
    """
    blocks: Tuple[Block, ...]
    success_rate: str

    def tables(self) -> List[Table]:
        return [b for b in self.blocks if isinstance(b, Table)]


def format_success_rate(successful: int, total: int) -> str:
    if total == 0:
        return "0%"
    return f"{successful / total * 100:.1f}%"


def truncate_message(message: str, limit: int = MESSAGE_LIMIT) -> str:
    if len(message) <= limit:
        return message
    return message[:limit] + "..."


def _header(*titles: str) -> Row:
    return tuple(Cell(t, header=True) for t in titles)


def _summary_table(result: AggregateResult, success_rate: str) -> Table:
    return Table(
        rows=(
            _header("Metric", "Count"),
            ("Total Workflows", str(result.total)),
            ("✅ Successful", str(result.successful)),
            ("❌ Failed", str(result.failed)),
            ("⚠️ Determinism Violations", str(result.determinism_violations)),
            ("Success Rate", success_rate),
        )
    )


def _failure_row(outcome: ReplayOutcome) -> Row:
    if outcome.error is None:
        return (outcome.workflow_id, UNKNOWN_KIND, NO_MESSAGE)
    message = truncate_message(outcome.error.message) or NO_MESSAGE
    return (outcome.workflow_id, outcome.error.kind.value, message)


def _failures_table(failures: Sequence[ReplayOutcome]) -> Table:
    rows: List[Row] = [_header("Workflow ID", "Error Type", "Message")]
    rows.extend(_failure_row(o) for o in failures)
    return Table(rows=tuple(rows))


def build_report(result: AggregateResult) -> Report:
    success_rate = format_success_rate(result.successful, result.total)

    blocks: List[Block] = [
        Heading(REPORT_TITLE, 2),
        _summary_table(result, success_rate),
    ]

    if result.failed > 0:
        blocks.append(Heading(FAILED_TITLE, 3))
        blocks.append(_failures_table(result.failures))
    else:
        blocks.append(Raw(ALL_PASSED))

    blocks.append(Raw(SEPARATOR))
    blocks.append(Raw(FOOTER))

    return Report(blocks=tuple(blocks), success_rate=success_rate)
