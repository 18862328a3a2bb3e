"""
Lifecycle controller for the transcode pod.

Submits the pod, waits for it to finish or for a shutdown request,
whichever comes first, and deletes it on every path that created it.
"""

import asyncio
import logging
from typing import Optional

from kubeplex.modules.api.errors import (
    CleanupError,
    GatewayError,
    SubmissionError,
    WorkloadFailedError,
)
from kubeplex.modules.api.models import PodDescriptor, RunResult, RunState, WorkloadHandle
from kubeplex.modules.gateway.gateway import ClusterGateway
from kubeplex.modules.lifecycle.observer import wait_for_completion

logger = logging.getLogger("kubeplex.lifecycle")


class LifecycleController:
    """Runs exactly one transcode pod from creation to deletion."""

    def __init__(
        self,
        gateway: ClusterGateway,
        namespace: str,
        cancellation: asyncio.Event,
        poll_interval: float = 1.0,
    ):
        """
        Initialize the controller.

        Args:
            gateway: Cluster operations (create, status, delete)
            namespace: Namespace the pod is created in
            cancellation: Set once when the host asks the shim to stop
            poll_interval: Seconds between status reads
        """
        self.gateway = gateway
        self.namespace = namespace
        self.cancellation = cancellation
        self.poll_interval = poll_interval

    async def run(self, descriptor: PodDescriptor) -> RunResult:
        """
        Run the pod to a terminal state and clean it up.

        Returns:
            RunResult describing how the run ended

        Raises:
            CleanupError: If the pod could not be deleted
        """
        try:
            handle = await self.gateway.submit(descriptor, self.namespace)
        except SubmissionError as e:
            logger.error(f"Error creating pod: {e}")
            return RunResult(state=RunState.ERRORED, error=e)

        logger.info(f"Created pod {handle}")

        try:
            result = await self._wait(handle)
        finally:
            await self._cleanup(handle)
        return result

    async def _wait(self, handle: WorkloadHandle) -> RunResult:
        """Race pod completion against the cancellation notification."""
        observer = asyncio.create_task(
            wait_for_completion(self.gateway, handle, self.poll_interval),
            name=f"observe-{handle.name}",
        )
        cancelled = asyncio.create_task(self.cancellation.wait(), name="cancellation")

        try:
            done, _ = await asyncio.wait(
                {observer, cancelled}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            for task in (observer, cancelled):
                if not task.done():
                    task.cancel()
            await asyncio.gather(observer, cancelled, return_exceptions=True)

        # A terminal phase observed in the same tick as the signal still counts
        if observer in done:
            return self._outcome(handle, observer)

        logger.info("Exit requested.")
        return RunResult(state=RunState.CANCELLED, handle=handle)

    def _outcome(self, handle: WorkloadHandle, observer: asyncio.Task) -> RunResult:
        error: Optional[BaseException] = observer.exception()
        if error is None:
            logger.info(f"Pod {handle} succeeded")
            return RunResult(state=RunState.SUCCEEDED, handle=handle)
        if isinstance(error, WorkloadFailedError):
            logger.error(f"Error waiting for pod to complete: {error}")
            return RunResult(state=RunState.FAILED, handle=handle, error=error)
        if isinstance(error, GatewayError):
            logger.error(f"Error waiting for pod to complete: {error}")
            return RunResult(state=RunState.ERRORED, handle=handle, error=error)
        raise error

    async def _cleanup(self, handle: WorkloadHandle) -> None:
        logger.info("Cleaning up pod...")
        try:
            await self.gateway.remove(handle)
        except Exception as e:
            logger.critical(f"Error cleaning up pod {handle}: {e}")
            raise CleanupError(handle.name, handle.namespace, e) from e
