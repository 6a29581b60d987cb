"""
Replay check pipeline.

build -> connect -> select histories -> replay -> report -> outputs

Each stage is a single pass; the first fatal error aborts the run.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Optional

from .build import build_workflows
from .config import ActionConfig, TemporalSettings
from .core.engine import EngineHandle, ReplayEngine
from .core.outcomes import AggregateResult
from .history import select_histories
from .logging_config import get_logger
from .replay import ReplayExecutor, run_replays
from .report import Report, build_report, write_job_summary, write_outputs
from .temporal import LoopBridge, TemporalEngineHandle, TemporalReplayEngine, resolve_workflows_path

logger = get_logger(__name__)

EngineFactory = Callable[[TemporalSettings], EngineHandle]


@dataclass(frozen=True)
class PipelineResult:
    """
    Outcome of a full pipeline run.

    Fields:
        result: Aggregated replay outcomes
        report: Structured report built from result
        outputs: Step outputs that were published
        failed: True when replay failures should fail the job
    """
    result: AggregateResult
    report: Report
    outputs: Dict[str, int]
    failed: bool

    @property
    def failure_message(self) -> str:
        return (
            f"Replay testing failed: {self.result.failed} failure(s), "
            f"{self.result.determinism_violations} determinism violation(s)"
        )


def _write_results(result: AggregateResult, path: str) -> None:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(result.to_dict(), indent=2), encoding="utf-8")
    logger.info(f"Wrote replay results to {target}")


def run_pipeline(
    config: ActionConfig,
    engine_factory: Optional[EngineFactory] = None,
    replay_engine: Optional[ReplayEngine] = None,
) -> PipelineResult:
    """
    Run the full replay check.

    Args:
        config: Validated action configuration
        engine_factory: Creates the engine handle for server-backed sources
            (defaults to a plain Temporal client connection)
        replay_engine: Replay engine (defaults to the Temporal SDK replayer)

    Raises:
        ReplayCheckError: On any batch-fatal condition (selection, build,
            connection or query failure)
    """
    bridge = LoopBridge()
    try:
        logger.info("Starting Temporal Replay Testing")
        build_workflows(config.build)

        engine: Optional[EngineHandle] = None
        if config.needs_engine:
            if engine_factory is None:
                engine = TemporalEngineHandle.connect(
                    config.temporal.address, config.temporal.namespace, bridge=bridge
                )
            else:
                engine = engine_factory(config.temporal)
        else:
            logger.info("Using pre-exported history files - skipping Temporal connection")

        logger.info("Fetching workflow histories...")
        histories = select_histories(config.selection, engine)
        if not histories:
            logger.warning("No workflow histories found to replay")

        workflows_path = resolve_workflows_path(
            config.build.working_directory, config.build.workflows_path
        )
        executor = ReplayExecutor(replay_engine or TemporalReplayEngine(bridge=bridge))
        result = run_replays(histories, workflows_path, executor)
    finally:
        bridge.close()

    report = build_report(result)
    if config.output.create_job_summary:
        write_job_summary(report, config.output.summary_path)
    outputs = write_outputs(result)
    if config.output.results_path:
        _write_results(result, config.output.results_path)

    failed = config.output.fail_on_replay_error and result.failed > 0
    pipeline_result = PipelineResult(result=result, report=report, outputs=outputs, failed=failed)
    if failed:
        logger.error(pipeline_result.failure_message)
    else:
        logger.info("Replay testing completed successfully")
    return pipeline_result
