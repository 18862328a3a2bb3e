"""
Kube-Plex shared data models.

These models define the structure of all data passed between
components in the Kube-Plex system. Pod models mirror the core/v1
schema and serialize with its camelCase field names.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Fixed mount layout of every transcode pod: (volume name, mount path, read only)
VOLUME_LAYOUT = (
    ("data", "/data", True),
    ("config", "/config", True),
    ("transcode", "/transcode", False),
)


# Enums


class PodPhase(str, Enum):
    """Lifecycle phase reported by the cluster for a pod."""

    PENDING = "Pending"
    RUNNING = "Running"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: Optional[str]) -> "PodPhase":
        """Map a raw status.phase value; a pod without a phase yet is Pending."""
        if not value:
            return cls.PENDING
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN

    @property
    def is_terminal(self) -> bool:
        return self in (PodPhase.SUCCEEDED, PodPhase.FAILED)


class RestartPolicy(str, Enum):
    ALWAYS = "Always"
    ON_FAILURE = "OnFailure"
    NEVER = "Never"


class RunState(str, Enum):
    """Terminal state of one transcode run."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    ERRORED = "errored"
    CANCELLED = "cancelled"


# Pod manifest models


class KubeModel(BaseModel):
    """Base for models that travel over the Kubernetes API."""

    model_config = ConfigDict(populate_by_name=True)

    def to_manifest(self) -> Dict[str, Any]:
        """Serialize with API field names, dropping unset optionals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class EnvVar(KubeModel):
    name: str = Field(..., min_length=1)
    value: str = ""


class VolumeMount(KubeModel):
    name: str
    mount_path: str = Field(..., alias="mountPath")
    read_only: Optional[bool] = Field(None, alias="readOnly")


class PersistentVolumeClaimSource(KubeModel):
    claim_name: str = Field(..., alias="claimName", min_length=1)


class Volume(KubeModel):
    name: str
    persistent_volume_claim: PersistentVolumeClaimSource = Field(
        ..., alias="persistentVolumeClaim"
    )


class Container(KubeModel):
    name: str
    image: str = Field(..., min_length=1)
    command: List[str] = Field(default_factory=list)
    env: List[EnvVar] = Field(default_factory=list)
    working_dir: Optional[str] = Field(None, alias="workingDir")
    volume_mounts: List[VolumeMount] = Field(default_factory=list, alias="volumeMounts")

    @field_validator("volume_mounts")
    @classmethod
    def validate_volume_mounts(cls, v):
        """Ensure the mounts are exactly the fixed transcode layout."""
        layout = [(m.name, m.mount_path, bool(m.read_only)) for m in v]
        if layout != list(VOLUME_LAYOUT):
            raise ValueError(f"Volume mounts must be {list(VOLUME_LAYOUT)}, got {layout}")
        return v


class PodSpec(KubeModel):
    node_selector: Dict[str, str] = Field(default_factory=dict, alias="nodeSelector")
    restart_policy: RestartPolicy = Field(RestartPolicy.NEVER, alias="restartPolicy")
    containers: List[Container] = Field(..., min_length=1, max_length=1)
    volumes: List[Volume] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_mounts_have_volumes(self):
        declared = {volume.name for volume in self.volumes}
        for container in self.containers:
            for mount in container.volume_mounts:
                if mount.name not in declared:
                    raise ValueError(f"Volume mount {mount.name!r} has no matching volume")
        return self


class ObjectMeta(KubeModel):
    name: Optional[str] = None
    generate_name: Optional[str] = Field(None, alias="generateName")
    namespace: Optional[str] = None


class PodDescriptor(KubeModel):
    """Pod manifest for one transcode run."""

    api_version: str = Field("v1", alias="apiVersion")
    kind: str = "Pod"
    metadata: ObjectMeta
    spec: PodSpec

    @property
    def container(self) -> Container:
        return self.spec.containers[0]


# Run tracking models


class WorkloadHandle(BaseModel):
    """Identity of a created pod, as assigned by the cluster."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    namespace: str = Field(..., min_length=1)

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}"


@dataclass
class RunResult:
    """Outcome of a transcode run."""

    state: RunState
    handle: Optional[WorkloadHandle] = None
    error: Optional[BaseException] = None

    @property
    def exit_code(self) -> int:
        """Process exit status for this outcome; cancellation is a clean exit."""
        if self.state in (RunState.SUCCEEDED, RunState.CANCELLED):
            return 0
        return 1
