import asyncio
import logging
from typing import AsyncIterator

from kubeplex.modules.api.errors import WorkloadFailedError
from kubeplex.modules.api.models import PodPhase, WorkloadHandle
from kubeplex.modules.gateway.gateway import ClusterGateway

logger = logging.getLogger("kubeplex.lifecycle")


async def observe_phases(
    gateway: ClusterGateway, handle: WorkloadHandle, interval: float = 1.0
) -> AsyncIterator[PodPhase]:
    """
    Yield the pod's phase once per interval, reading it fresh each time.

    The pause happens after a phase has been consumed, so a consumer that
    stops on a terminal phase never waits for another tick. Gateway
    errors propagate out of the iteration.
    """
    while True:
        yield await gateway.get_phase(handle)
        await asyncio.sleep(interval)


async def wait_for_completion(
    gateway: ClusterGateway, handle: WorkloadHandle, interval: float = 1.0
) -> PodPhase:
    """
    Poll until the pod reaches a terminal phase.

    Returns:
        PodPhase.SUCCEEDED

    Raises:
        WorkloadFailedError: If the pod ended Failed
        TransportError: If a status read failed
    """
    phases = observe_phases(gateway, handle, interval)
    try:
        async for phase in phases:
            if phase is PodPhase.SUCCEEDED:
                return phase
            if phase is PodPhase.FAILED:
                raise WorkloadFailedError(handle.name, handle.namespace)
            if phase is PodPhase.UNKNOWN:
                logger.warning(f'Warning: pod "{handle.name}" is in an unknown state')
            else:
                logger.debug(f'Pod "{handle.name}" is {phase.value}')
    finally:
        await phases.aclose()
    raise RuntimeError("phase observation ended without a terminal phase")
