"""
Config Module - Black Box Interface

Purpose: Startup configuration for the transcode shim
Interface: EnvConfigProvider.get_transcoder_config(), get_cluster_config()
Hidden: Environment parsing, service account discovery

Can be replaced with any ConfigProvider implementation (tests inject their own).
"""

from .provider import (
    REQUIRED_ENV_VARS,
    ClusterConfig,
    ConfigProvider,
    EnvConfigProvider,
    TranscoderConfig,
)

__all__ = [
    "REQUIRED_ENV_VARS",
    "ClusterConfig",
    "ConfigProvider",
    "EnvConfigProvider",
    "TranscoderConfig",
]
