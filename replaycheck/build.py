"""
Workflow build step.

Runs the configured build command before replay. Without a build command
the step is skipped; package manager detection is left to the caller.
"""

import subprocess

from .config import BuildSettings
from .core.errors import BuildError
from .logging_config import get_logger

logger = get_logger(__name__)


def build_workflows(build: BuildSettings) -> bool:
    """
    Run build.build_command in build.working_directory.

    Returns:
        True if a build ran, False if there was nothing to run

    Raises:
        BuildError: If the command exits non-zero or cannot be started
    """
    if build.skip_build:
        logger.info("Skipping build step")
        return False
    if not build.build_command.strip():
        logger.info("No build command configured, skipping build step")
        return False

    logger.info(f"Running custom build command: {build.build_command}")
    try:
        subprocess.run(build.build_command, shell=True, cwd=build.working_directory, check=True)
    except subprocess.CalledProcessError as e:
        raise BuildError(f"Custom build failed: exit status {e.returncode}") from e
    except OSError as e:
        raise BuildError(f"Custom build failed: {e}") from e
    logger.info("Custom build completed successfully")
    return True
