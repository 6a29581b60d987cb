"""
Temporal-backed ReplayEngine.

Loads @workflow.defn classes from the workflow code location and replays
histories with temporalio.worker.Replayer. A changed workflow surfaces as
temporalio.workflow.NondeterminismError.
"""

import importlib
import importlib.util
import inspect
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from temporalio import workflow
from temporalio.client import WorkflowHistory
from temporalio.worker import Replayer

from ..core.engine import ReplayEngine
from ..core.errors import WorkflowLoadError
from ..logging_config import get_logger
from .loop import LoopBridge

logger = get_logger(__name__)

WORKFLOW_DEFINITION_ATTR = "__temporal_workflow_definition"


def _ensure_on_path(directory: Path) -> None:
    entry = str(directory)
    if entry not in sys.path:
        sys.path.insert(0, entry)


def _load_file(path: Path) -> Any:
    _ensure_on_path(path.parent)
    spec = importlib.util.spec_from_file_location(path.stem, str(path))
    if spec is None or spec.loader is None:
        raise WorkflowLoadError(f"Cannot load workflow module: {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[path.stem] = module
    spec.loader.exec_module(module)
    return module


def _load_modules(target: str) -> List[Any]:
    path = Path(target)
    if path.is_file():
        return [_load_file(path.resolve())]
    if path.is_dir():
        files = sorted(p for p in path.resolve().glob("*.py") if not p.name.startswith("_"))
        return [_load_file(p) for p in files]
    _ensure_on_path(Path.cwd())
    return [importlib.import_module(target)]


def workflow_classes(modules: List[Any]) -> List[type]:
    found: List[type] = []
    for module in modules:
        for obj in vars(module).values():
            if not inspect.isclass(obj) or obj in found:
                continue
            if getattr(obj, WORKFLOW_DEFINITION_ATTR, None) is not None:
                found.append(obj)
    return found


def load_workflows(target: str) -> List[type]:
    """
    Collect workflow classes from a .py file, a directory of modules or a
    dotted module name.

    Raises:
        WorkflowLoadError: If nothing can be imported or no workflow is found
    """
    try:
        modules = _load_modules(target)
    except WorkflowLoadError:
        raise
    except Exception as e:
        raise WorkflowLoadError(f"Failed to import workflows from {target}: {e}") from e

    classes = workflow_classes(modules)
    if not classes:
        raise WorkflowLoadError(f"No @workflow.defn classes found in {target}")
    logger.debug(f"Loaded {len(classes)} workflow(s) from {target}")
    return classes


def to_workflow_history(name: str, record: Any) -> WorkflowHistory:
    if isinstance(record, WorkflowHistory):
        return record
    return WorkflowHistory.from_json(name, record)


class TemporalReplayEngine(ReplayEngine):
    """
    Replays histories with the Temporal Python SDK.

    Replayers are cached per workflows path so workflow modules are imported
    once per run.
    """

    determinism_signal = workflow.NondeterminismError.__name__

    def __init__(self, bridge: Optional[LoopBridge] = None) -> None:
        self.bridge = bridge or LoopBridge()
        self._replayers: Dict[str, Replayer] = {}

    def replayer_for(self, workflows_path: str) -> Replayer:
        replayer = self._replayers.get(workflows_path)
        if replayer is None:
            replayer = Replayer(workflows=load_workflows(workflows_path))
            self._replayers[workflows_path] = replayer
        return replayer

    def run_replay(self, workflows_path: str, name: str, record: Any) -> None:
        replayer = self.replayer_for(workflows_path)
        history = to_workflow_history(name, record)
        self.bridge.run(replayer.replay_workflow(history))


def resolve_workflows_path(working_directory: str, workflows_path: str) -> str:
    """
    Resolve workflows_path against the working directory.

    Returns an absolute path when one exists, otherwise workflows_path is
    returned unchanged and treated as a dotted module name importable from
    the working directory.
    """
    candidate = os.path.abspath(os.path.join(working_directory, workflows_path))
    if os.path.exists(candidate):
        return candidate
    _ensure_on_path(Path(working_directory).resolve())
    return workflows_path
