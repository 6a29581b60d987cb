"""
Exception types for the replay check pipeline.
"""


class ReplayCheckError(Exception):
    """Base class for errors that abort a replay check run."""
    pass


class ConfigError(ReplayCheckError):
    """Raised when action inputs are missing or invalid."""
    pass


class SelectionError(ReplayCheckError):
    """Raised when no workflow selection method is populated."""
    pass


class EngineRequiredError(ReplayCheckError):
    """Raised when a server-backed source is selected without an engine handle."""
    pass


class FetchError(ReplayCheckError):
    """Raised when a query-based history listing fails as a whole."""
    pass


class BuildError(ReplayCheckError):
    """Raised when the workflow build command fails."""
    pass


class EngineConnectionError(ReplayCheckError):
    """Raised when the workflow engine cannot be reached."""
    pass


class WorkflowLoadError(ReplayCheckError):
    """Raised when workflow definitions cannot be loaded for replay."""
    pass
