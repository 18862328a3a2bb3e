"""Configuration provider following Black Box Design principles."""
import logging
import math
import os
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Protocol

from kubeplex.modules.api.errors import ConfigurationError

SERVICE_ACCOUNT_DIR = "/var/run/secrets/kubernetes.io/serviceaccount"

# Configuration Contract: environment variables that must be non-empty
REQUIRED_ENV_VARS = {
    "KUBE_NAMESPACE": "Namespace the transcode pod is created in",
    "DATA_PVC": "Claim holding the media library, mounted read-only at /data",
    "CONFIG_PVC": "Claim holding the Plex configuration, mounted read-only at /config",
    "TRANSCODE_PVC": "Claim for transcoder scratch output, mounted at /transcode",
    "PMS_IMAGE": "Plex Media Server image the transcode pod runs",
    "PMS_INTERNAL_ADDRESS": "In-cluster address of the Plex server, replaces http://127.0.0.1:32400",
}


@dataclass(frozen=True)
class TranscoderConfig:
    """Identifiers the transcode pod is built from."""
    namespace: str
    data_pvc: str
    config_pvc: str
    transcode_pvc: str
    image: str
    internal_address: str
    node_arch: str = "amd64"
    poll_interval: float = 1.0
    log_level: str = "INFO"

    def missing_pod_identifiers(self) -> List[str]:
        """Env var names of the pod identifiers that are empty."""
        fields = (
            ("KUBE_NAMESPACE", self.namespace),
            ("PMS_IMAGE", self.image),
            ("DATA_PVC", self.data_pvc),
            ("CONFIG_PVC", self.config_pvc),
            ("TRANSCODE_PVC", self.transcode_pvc),
        )
        return [env for env, value in fields if not value]


@dataclass(frozen=True)
class ClusterConfig:
    """Kubernetes API connection settings."""
    api_url: str
    token: Optional[str]
    ca_cert: Optional[str]
    verify_ssl: bool = True
    timeout: float = 30.0


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_transcoder_config(self) -> TranscoderConfig:
        """Get transcode pod configuration."""
        ...

    def get_cluster_config(self) -> ClusterConfig:
        """Get Kubernetes API connection configuration."""
        ...


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        service_account_dir: str = SERVICE_ACCOUNT_DIR,
    ):
        self.environ = os.environ if environ is None else environ
        self.service_account_dir = service_account_dir

    def get_transcoder_config(self) -> TranscoderConfig:
        """
        Get transcode pod configuration from environment variables.

        Raises:
            ConfigurationError: If any required variable is unset or empty, or an
                optional setting does not parse
        """
        missing = [name for name in REQUIRED_ENV_VARS if not self.environ.get(name)]
        if missing:
            raise ConfigurationError(missing)

        invalid = {}
        poll_interval = self._positive_float("POLL_INTERVAL_SECONDS", "1.0", invalid)
        log_level = self._log_level(invalid)
        if invalid:
            raise ConfigurationError(invalid=invalid)

        return TranscoderConfig(
            namespace=self.environ["KUBE_NAMESPACE"],
            data_pvc=self.environ["DATA_PVC"],
            config_pvc=self.environ["CONFIG_PVC"],
            transcode_pvc=self.environ["TRANSCODE_PVC"],
            image=self.environ["PMS_IMAGE"],
            internal_address=self.environ["PMS_INTERNAL_ADDRESS"],
            node_arch=self.environ.get("PMS_NODE_ARCH") or "amd64",
            poll_interval=poll_interval,
            log_level=log_level,
        )

    def get_cluster_config(self) -> ClusterConfig:
        """
        Get Kubernetes API connection settings.

        Explicit KUBE_* overrides win; otherwise the in-cluster service
        account (KUBERNETES_SERVICE_HOST/PORT plus the mounted token and CA)
        is used.

        Raises:
            ConfigurationError: If no API server address can be determined or
                KUBE_REQUEST_TIMEOUT is not a positive number
        """
        invalid = {}
        timeout = self._positive_float("KUBE_REQUEST_TIMEOUT", "30", invalid)
        if invalid:
            raise ConfigurationError(invalid=invalid)

        api_url = self.environ.get("KUBE_API_URL")
        if not api_url:
            host = self.environ.get("KUBERNETES_SERVICE_HOST")
            port = self.environ.get("KUBERNETES_SERVICE_PORT", "443")
            if not host:
                raise ConfigurationError(["KUBE_API_URL or KUBERNETES_SERVICE_HOST"])
            if ":" in host:
                host = f"[{host}]"
            api_url = f"https://{host}:{port}"

        token = self.environ.get("KUBE_TOKEN") or self._read_service_account_file("token")

        ca_cert = self.environ.get("KUBE_CA_CERT")
        if not ca_cert:
            default_ca = os.path.join(self.service_account_dir, "ca.crt")
            ca_cert = default_ca if os.path.exists(default_ca) else None

        return ClusterConfig(
            api_url=api_url.rstrip("/"),
            token=token,
            ca_cert=ca_cert,
            verify_ssl=self.environ.get("KUBE_SSL_VERIFY", "true").lower() == "true",
            timeout=timeout,
        )

    def _read_service_account_file(self, name: str) -> Optional[str]:
        path = os.path.join(self.service_account_dir, name)
        try:
            with open(path, encoding="utf-8") as handle:
                return handle.read().strip() or None
        except FileNotFoundError:
            return None

    def _positive_float(self, name: str, default: str, invalid: Dict[str, str]) -> float:
        raw = self.environ.get(name) or default
        try:
            value = float(raw)
        except ValueError:
            invalid[name] = f"{raw!r} is not a number of seconds"
            return 0.0
        if not math.isfinite(value) or value <= 0:
            invalid[name] = f"{raw!r} must be a finite number greater than zero"
        return value

    def _log_level(self, invalid: Dict[str, str]) -> str:
        level = (self.environ.get("LOG_LEVEL") or "INFO").upper()
        if level not in logging.getLevelNamesMapping():
            invalid["LOG_LEVEL"] = f"{level!r} is not a logging level"
        return level
