"""
Temporal-backed EngineHandle.

Wraps temporalio.client.Client behind the synchronous EngineHandle contract.
"""

from typing import Iterator, Optional

from temporalio.client import Client, WorkflowHistory

from ..core.engine import EngineHandle, WorkflowHandle, WorkflowListing
from ..core.errors import EngineConnectionError
from ..logging_config import get_logger
from .loop import LoopBridge

logger = get_logger(__name__)


class TemporalWorkflowHandle(WorkflowHandle):
    def __init__(self, client: Client, bridge: LoopBridge, workflow_id: str) -> None:
        self._handle = client.get_workflow_handle(workflow_id)
        self._bridge = bridge

    def fetch_history(self) -> WorkflowHistory:
        return self._bridge.run(self._handle.fetch_history())


class TemporalWorkflowListing(WorkflowListing):
    def __init__(self, client: Client, bridge: LoopBridge, query: str) -> None:
        self._client = client
        self._bridge = bridge
        self.query = query

    def iterate_histories(self) -> Iterator[WorkflowHistory]:
        executions = self._client.list_workflows(self.query)
        return self._bridge.iterate(executions.map_histories())


class TemporalEngineHandle(EngineHandle):
    """
    EngineHandle over a connected Temporal client.

    Args:
        client: Connected temporalio Client
        bridge: Event loop bridge the client was created on
    """

    def __init__(self, client: Client, bridge: LoopBridge) -> None:
        self.client = client
        self.bridge = bridge

    @classmethod
    def connect(
        cls, address: str, namespace: str, bridge: Optional[LoopBridge] = None
    ) -> "TemporalEngineHandle":
        """
        Connect to a Temporal frontend (plain connection, no TLS).

        Raises:
            EngineConnectionError: If the server cannot be reached
        """
        bridge = bridge or LoopBridge()
        logger.info(f"Connecting to Temporal at {address}")
        try:
            client = bridge.run(Client.connect(address, namespace=namespace))
        except Exception as e:
            raise EngineConnectionError(f"Failed to connect to Temporal: {e}") from e
        logger.info(f"Successfully connected to Temporal namespace: {namespace}")
        return cls(client, bridge)

    def get_handle(self, workflow_id: str) -> TemporalWorkflowHandle:
        return TemporalWorkflowHandle(self.client, self.bridge, workflow_id)

    def list(self, query: str) -> TemporalWorkflowListing:
        return TemporalWorkflowListing(self.client, self.bridge, query)
