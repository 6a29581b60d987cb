"""
Action configuration.

Inputs come from CLI options or REPLAYCHECK_* environment variables and are
validated here once, before any work starts.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ValidationError

from .core.errors import ConfigError, SelectionError
from .core.selection import FilePatternSource, SelectionConfig
from .logging_config import get_logger

logger = get_logger(__name__)

LARGE_MAX_HISTORIES = 10000


class TemporalSettings(BaseModel):
    address: str = "localhost:7233"
    namespace: str = "default"


class BuildSettings(BaseModel):
    workflows_path: str = Field(min_length=1)
    build_command: str = ""
    skip_build: bool = False
    working_directory: str = "."


class OutputSettings(BaseModel):
    fail_on_replay_error: bool = True
    create_job_summary: bool = True
    summary_path: Optional[str] = None
    results_path: Optional[str] = None


class ActionConfig(BaseModel):
    temporal: TemporalSettings = Field(default_factory=TemporalSettings)
    selection: SelectionConfig = Field(default_factory=SelectionConfig)
    build: BuildSettings
    output: OutputSettings = Field(default_factory=OutputSettings)

    @property
    def needs_engine(self) -> bool:
        return not isinstance(self.selection.primary(), FilePatternSource)


def _describe(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(p) for p in item.get("loc", ()))
        parts.append(f"{location}: {item.get('msg')}")
    return "; ".join(parts)


def load_config(data: Dict[str, Any]) -> ActionConfig:
    """
    Validate raw inputs into an ActionConfig.

    Raises:
        ConfigError: On missing or invalid inputs
        SelectionError: When no selection method is given
    """
    try:
        config = ActionConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid action inputs: {_describe(e)}") from e

    if not config.selection.is_populated():
        raise SelectionError(
            "Must specify at least one workflow selection method: "
            "workflow-history-path, workflow-ids, workflow-task-queue, or workflow-query"
        )
    if config.selection.max_histories > LARGE_MAX_HISTORIES:
        logger.warning("max-histories is very large. This may take a long time.")
    return config
