"""
API Module - Black Box Interface

Purpose: Shared data models and error types
Interface: Pod manifest models, PodPhase, WorkloadHandle, RunResult, errors
Hidden: Kubernetes field aliasing and manifest validation rules

Every other module speaks in these types; none of them build raw dicts.
"""

from .errors import (
    CleanupError,
    ConfigurationError,
    GatewayError,
    KubePlexError,
    MalformedInvocationError,
    SubmissionError,
    TransportError,
    WorkloadFailedError,
)
from .models import (
    VOLUME_LAYOUT,
    Container,
    EnvVar,
    ObjectMeta,
    PersistentVolumeClaimSource,
    PodDescriptor,
    PodPhase,
    PodSpec,
    RestartPolicy,
    RunResult,
    RunState,
    Volume,
    VolumeMount,
    WorkloadHandle,
)

__all__ = [
    "VOLUME_LAYOUT",
    "CleanupError",
    "ConfigurationError",
    "Container",
    "EnvVar",
    "GatewayError",
    "KubePlexError",
    "MalformedInvocationError",
    "ObjectMeta",
    "PersistentVolumeClaimSource",
    "PodDescriptor",
    "PodPhase",
    "PodSpec",
    "RestartPolicy",
    "RunResult",
    "RunState",
    "SubmissionError",
    "TransportError",
    "Volume",
    "VolumeMount",
    "WorkloadFailedError",
    "WorkloadHandle",
]
