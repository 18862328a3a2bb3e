import logging
import ssl
from typing import Optional, Protocol

import httpx

from kubeplex.config.provider import ClusterConfig
from kubeplex.modules.api.errors import SubmissionError, TransportError
from kubeplex.modules.api.models import PodDescriptor, PodPhase, WorkloadHandle

logger = logging.getLogger("kubeplex.gateway")


class ClusterGateway(Protocol):
    """Protocol for the cluster operations the pod lifecycle depends on."""

    async def submit(self, descriptor: PodDescriptor, namespace: str) -> WorkloadHandle:
        """
        Create the pod.

        Raises:
            SubmissionError: If the cluster did not create it
        """
        ...

    async def get_phase(self, handle: WorkloadHandle) -> PodPhase:
        """
        Read the pod's current phase.

        Raises:
            TransportError: If the read failed
        """
        ...

    async def remove(self, handle: WorkloadHandle) -> None:
        """
        Delete the pod; a pod that is already gone counts as deleted.

        Raises:
            TransportError: If the delete failed
        """
        ...


class KubernetesGateway:
    """ClusterGateway over the core/v1 pods REST API."""

    def __init__(
        self,
        config: ClusterConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the gateway.

        Args:
            config: API server address, credentials and TLS settings
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.config = config

        headers = {"Accept": "application/json"}
        if config.token:
            headers["Authorization"] = f"Bearer {config.token}"

        if not config.verify_ssl:
            logger.warning("⚠️  TLS verification disabled for the Kubernetes API")
            verify = False
        elif config.ca_cert:
            verify = ssl.create_default_context(cafile=config.ca_cert)
        else:
            verify = True

        self.client = httpx.AsyncClient(
            base_url=config.api_url,
            headers=headers,
            verify=verify,
            timeout=config.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "KubernetesGateway":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self.client.aclose()

    async def submit(self, descriptor: PodDescriptor, namespace: str) -> WorkloadHandle:
        try:
            response = await self.client.post(
                self._pods_path(namespace), json=descriptor.to_manifest()
            )
        except httpx.HTTPError as e:
            raise SubmissionError(f"Error creating pod: {e}") from e

        if response.is_error:
            raise SubmissionError(
                f"Error creating pod: {_error_message(response)}", response.status_code
            )

        try:
            metadata = _json_field(response, "metadata")
        except ValueError as e:
            raise SubmissionError(f"Error creating pod: {e}", response.status_code) from e

        if not metadata.get("name"):
            raise SubmissionError("Error creating pod: response carried no pod name")
        return WorkloadHandle(
            name=metadata["name"],
            namespace=metadata.get("namespace") or namespace,
        )

    async def get_phase(self, handle: WorkloadHandle) -> PodPhase:
        try:
            response = await self.client.get(self._pod_path(handle))
        except httpx.HTTPError as e:
            raise TransportError(f"Error reading pod {handle}: {e}") from e

        if response.is_error:
            raise TransportError(
                f"Error reading pod {handle}: {_error_message(response)}",
                response.status_code,
            )

        try:
            status = _json_field(response, "status")
        except ValueError as e:
            raise TransportError(f"Error reading pod {handle}: {e}", response.status_code) from e

        return PodPhase.parse(status.get("phase"))

    async def remove(self, handle: WorkloadHandle) -> None:
        try:
            response = await self.client.delete(self._pod_path(handle))
        except httpx.HTTPError as e:
            raise TransportError(f"Error deleting pod {handle}: {e}") from e

        if response.status_code == 404:
            logger.info(f"Pod {handle} already deleted")
            return
        if response.is_error:
            raise TransportError(
                f"Error deleting pod {handle}: {_error_message(response)}",
                response.status_code,
            )

    @staticmethod
    def _pods_path(namespace: str) -> str:
        return f"/api/v1/namespaces/{namespace}/pods"

    def _pod_path(self, handle: WorkloadHandle) -> str:
        return f"{self._pods_path(handle.namespace)}/{handle.name}"


def _error_message(response: httpx.Response) -> str:
    """Extract the message of a Kubernetes Status response, falling back to the raw body."""
    try:
        body = response.json()
    except ValueError:
        return f"{response.status_code} {response.text}".strip()
    if isinstance(body, dict) and body.get("message"):
        return f"{response.status_code} {body['message']}"
    return f"{response.status_code} {response.text}".strip()



def _json_field(response: httpx.Response, field: str) -> dict:
    """
    Decode a successful response body and return one of its object fields.

    A missing or null field reads as an empty object.

    Raises:
        ValueError: If the body is not JSON or not an object
    """
    try:
        body = response.json()
    except ValueError as e:
        raise ValueError(f"{response.status_code} response is not JSON: {e}") from e
    if not isinstance(body, dict):
        raise ValueError(f"{response.status_code} response is not a JSON object")
    value = body.get(field) or {}
    if not isinstance(value, dict):
        raise ValueError(f"{response.status_code} response field {field!r} is not an object")
    return value
