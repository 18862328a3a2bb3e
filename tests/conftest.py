"""
Shared pytest fixtures for Kube-Plex tests.

This module provides common fixtures including:
- ScriptedGateway: ClusterGateway double that replays a phase sequence
- Transcoder and cluster configuration samples
- A ready-built pod descriptor
"""

import asyncio
import os
import sys
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Union

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from kubeplex.config.provider import ClusterConfig, TranscoderConfig
from kubeplex.modules.api import PodDescriptor, PodPhase, WorkloadHandle
from kubeplex.modules.builder import build_pod_descriptor


# =============================================================================
# Scripted Gateway
# =============================================================================

@dataclass
class GatewayCall:
    """Record of a gateway call made during testing."""
    operation: str
    namespace: str
    name: Optional[str] = None


class ScriptedGateway:
    """
    ClusterGateway double that answers status reads from a script.

    Each entry of ``phases`` answers one get_phase call; an exception
    entry is raised instead of returned. Once the script is exhausted the
    last entry keeps being replayed.

    Usage:
        async def test_success(descriptor):
            gateway = ScriptedGateway([PodPhase.PENDING, PodPhase.SUCCEEDED])
            controller = LifecycleController(gateway, "media", asyncio.Event(), 0)

            result = await controller.run(descriptor)

            assert gateway.polls == 2
            assert gateway.removals == 1
    """

    def __init__(
        self,
        phases: Sequence[Union[PodPhase, Exception]] = (PodPhase.SUCCEEDED,),
        submit_error: Optional[Exception] = None,
        remove_error: Optional[Exception] = None,
        on_poll: Optional[Callable[[int], None]] = None,
        pod_name: str = "pms-elastic-transcoder-x7k2p",
    ):
        self.phases = list(phases)
        self.submit_error = submit_error
        self.remove_error = remove_error
        self.on_poll = on_poll
        self.pod_name = pod_name
        self.calls: List[GatewayCall] = []
        self.submitted: Optional[PodDescriptor] = None
        self.closed = False

    async def submit(self, descriptor: PodDescriptor, namespace: str) -> WorkloadHandle:
        self.calls.append(GatewayCall("submit", namespace))
        self.submitted = descriptor
        if self.submit_error is not None:
            raise self.submit_error
        return WorkloadHandle(name=self.pod_name, namespace=namespace)

    async def get_phase(self, handle: WorkloadHandle) -> PodPhase:
        self.calls.append(GatewayCall("get_phase", handle.namespace, handle.name))
        poll = self.polls
        if self.on_poll is not None:
            self.on_poll(poll)
        entry = self.phases[min(poll, len(self.phases)) - 1]
        if isinstance(entry, Exception):
            raise entry
        return entry

    async def remove(self, handle: WorkloadHandle) -> None:
        self.calls.append(GatewayCall("remove", handle.namespace, handle.name))
        if self.remove_error is not None:
            raise self.remove_error

    async def close(self) -> None:
        self.closed = True

    def count(self, operation: str) -> int:
        return sum(1 for call in self.calls if call.operation == operation)

    @property
    def polls(self) -> int:
        return self.count("get_phase")

    @property
    def removals(self) -> int:
        return self.count("remove")

    @property
    def operations(self) -> List[str]:
        return [call.operation for call in self.calls]


# =============================================================================
# Configuration Fixtures
# =============================================================================

@pytest.fixture
def transcoder_config():
    """Create a complete TranscoderConfig."""
    return TranscoderConfig(
        namespace="media",
        data_pvc="plex-data",
        config_pvc="plex-config",
        transcode_pvc="plex-transcode",
        image="plexinc/pms-docker:1.40.0",
        internal_address="http://plex.media.svc:32400",
        poll_interval=0,
    )


@pytest.fixture
def cluster_config():
    """Create a ClusterConfig pointing at a fake API server."""
    return ClusterConfig(
        api_url="https://kubernetes.test:6443",
        token="test-token",
        ca_cert=None,
    )


@pytest.fixture
def plex_env():
    """Environment the shim would see from Plex Media Server."""
    return {
        "PLEX_MEDIA_SERVER_INFO_MODEL": "x86_64",
        "FFMPEG_EXTERNAL_LIBS": "/config/Library/Codecs/",
        "X_PLEX_TOKEN": "abc=def",
    }


@pytest.fixture
def transcode_args():
    """A trimmed-down Plex Transcoder command line."""
    return [
        "/usr/lib/plexmediaserver/Plex Transcoder",
        "-codec:0", "h264",
        "-loglevel", "quiet",
        "-loglevel_plex", "error",
        "-progressurl", "http://127.0.0.1:32400/video/:/transcode/session/abc/progress",
        "-segment_list", "http://127.0.0.1:32400/video/:/transcode/session/abc/seglist",
        "-manifest_name", "http://127.0.0.1:32400/video/:/transcode/session/abc/manifest",
        "/transcode/Transcode/Sessions/plex-transcode-abc/media-%05d.ts",
    ]


@pytest.fixture
def descriptor(transcoder_config, plex_env, transcode_args):
    """Create a pod descriptor from the sample invocation."""
    return build_pod_descriptor("/transcode/Sessions/abc", plex_env, transcode_args, transcoder_config)


@pytest.fixture
def cancellation():
    """Fresh cancellation event."""
    return asyncio.Event()
