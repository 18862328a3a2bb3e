#!/usr/bin/env python3
"""
Kube-Plex - Main Entry Point

Installed in place of the Plex transcoder binary. This is the thin
orchestration layer that:
1. Loads configuration
2. Translates this process's command line and environment
3. Builds the transcode pod manifest
4. Runs the pod to completion and deletes it

The process's own argv is the transcoder command line, so nothing here
parses options.
"""

import asyncio
import logging
import os
import sys
from typing import Mapping, Optional, Sequence

from kubeplex.config.provider import (
    ClusterConfig,
    ConfigProvider,
    EnvConfigProvider,
    TranscoderConfig,
)
from kubeplex.logging_config import configure_logging
from kubeplex.modules.api import (
    CleanupError,
    ConfigurationError,
    MalformedInvocationError,
    PodDescriptor,
    RunResult,
)
from kubeplex.modules.builder import build_pod_descriptor
from kubeplex.modules.gateway import ClusterGateway, KubernetesGateway
from kubeplex.modules.invocation import Invocation, InvocationTranslator
from kubeplex.modules.lifecycle import LifecycleController
from kubeplex.modules.signals import ShutdownSignal

logger = logging.getLogger("kubeplex.main")

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CLEANUP_FAILED = 2


async def run(
    descriptor: PodDescriptor,
    config: TranscoderConfig,
    cluster_config: ClusterConfig,
    gateway: Optional[ClusterGateway] = None,
) -> RunResult:
    """
    Run one transcode pod with shutdown signals wired to cancellation.

    Args:
        descriptor: Pod manifest to submit
        config: Transcoder configuration (namespace, poll interval)
        cluster_config: Kubernetes API settings, used when no gateway is given
        gateway: Optional gateway to use instead of a KubernetesGateway

    Raises:
        CleanupError: If the pod could not be deleted
    """
    shutdown = ShutdownSignal()
    cancellation = shutdown.install()

    owned = gateway is None
    if owned:
        gateway = KubernetesGateway(cluster_config)

    try:
        controller = LifecycleController(
            gateway,
            namespace=config.namespace,
            cancellation=cancellation,
            poll_interval=config.poll_interval,
        )
        return await controller.run(descriptor)
    finally:
        shutdown.uninstall()
        if owned:
            await gateway.close()


def main(
    argv: Optional[Sequence[str]] = None,
    environ: Optional[Mapping[str, str]] = None,
    config_provider: Optional[ConfigProvider] = None,
) -> int:
    """Main entry point. Returns the process exit status."""
    argv = sys.argv if argv is None else argv
    environ = os.environ if environ is None else environ
    config_provider = config_provider or EnvConfigProvider(environ)

    configure_logging()

    try:
        config = config_provider.get_transcoder_config()
        cluster_config = config_provider.get_cluster_config()
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return EXIT_FAILURE

    logging.getLogger("kubeplex").setLevel(config.log_level)

    try:
        translator = InvocationTranslator(config.internal_address)
        invocation = translator.translate(Invocation.from_process(argv, environ))
        descriptor = build_pod_descriptor(
            os.getcwd(), invocation.env_dict, invocation.args, config
        )
    except (ConfigurationError, MalformedInvocationError) as e:
        logger.error(f"Error preparing transcode pod: {e}")
        return EXIT_FAILURE

    try:
        result = asyncio.run(run(descriptor, config, cluster_config))
    except CleanupError as e:
        logger.critical(f"Pod {e.namespace}/{e.name} may have been leaked: {e.cause}")
        return EXIT_CLEANUP_FAILED
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        return EXIT_FAILURE

    return result.exit_code


if __name__ == "__main__":
    sys.exit(main())
