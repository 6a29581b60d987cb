"""
Replay outcome model.

ReplayOutcome is the result of replaying one history.
AggregateResult summarizes a whole run and is only built from outcomes,
so its counters can never drift from the outcome list.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Sequence, Tuple


class ErrorKind(str, Enum):
    DETERMINISM_VIOLATION = "DeterminismViolation"
    REPLAY_ERROR = "ReplayError"


@dataclass(frozen=True)
class ErrorDetail:
    """
    Failure detail for one replay.

    Fields:
        kind: DeterminismViolation or ReplayError
        message: Stringified failure
        trace: Formatted traceback, when available
    """
    kind: ErrorKind
    message: str
    trace: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.kind.value, "message": self.message, "stack": self.trace}


@dataclass(frozen=True)
class ReplayOutcome:
    workflow_id: str
    success: bool
    error: Optional[ErrorDetail] = None

    def __post_init__(self) -> None:
        if self.success != (self.error is None):
            raise ValueError("ReplayOutcome.success must be True iff error is None")

    @classmethod
    def passed(cls, workflow_id: str) -> "ReplayOutcome":
        return cls(workflow_id=workflow_id, success=True, error=None)

    @classmethod
    def failed(cls, workflow_id: str, error: ErrorDetail) -> "ReplayOutcome":
        return cls(workflow_id=workflow_id, success=False, error=error)

    @property
    def is_determinism_violation(self) -> bool:
        return self.error is not None and self.error.kind is ErrorKind.DETERMINISM_VIOLATION

    def to_dict(self) -> Dict[str, Any]:
        return {
            "workflowId": self.workflow_id,
            "success": self.success,
            "error": self.error.to_dict() if self.error else None,
        }


@dataclass(frozen=True)
class AggregateResult:
    """
    Aggregate of a replay run.

    Invariants:
        total == len(outcomes) == successful + failed
        determinism_violations <= failed
        outcomes keep the order histories were supplied in
    """
    total: int
    successful: int
    failed: int
    determinism_violations: int
    outcomes: Tuple[ReplayOutcome, ...] = field(default_factory=tuple)

    @classmethod
    def from_outcomes(cls, outcomes: Sequence[ReplayOutcome]) -> "AggregateResult":
        outcomes = tuple(outcomes)
        successful = sum(1 for o in outcomes if o.success)
        return cls(
            total=len(outcomes),
            successful=successful,
            failed=len(outcomes) - successful,
            determinism_violations=sum(1 for o in outcomes if o.is_determinism_violation),
            outcomes=outcomes,
        )

    @classmethod
    def empty(cls) -> "AggregateResult":
        return cls.from_outcomes(())

    @property
    def other_errors(self) -> int:
        return self.failed - self.determinism_violations

    @property
    def failures(self) -> Tuple[ReplayOutcome, ...]:
        return tuple(o for o in self.outcomes if not o.success)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "successful": self.successful,
            "failed": self.failed,
            "determinismViolations": self.determinism_violations,
            "results": [o.to_dict() for o in self.outcomes],
        }
