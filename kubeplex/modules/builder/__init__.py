"""
Builder Module - Black Box Interface

Purpose: Produce the pod manifest for a transcode run
Interface: build_pod_descriptor()
Hidden: Volume layout, scheduling constraints, naming

Pure function; performs no I/O and never talks to the cluster.
"""

from .pod_spec import ARCH_LABEL, CONTAINER_NAME, GENERATE_NAME, build_pod_descriptor

__all__ = ["ARCH_LABEL", "CONTAINER_NAME", "GENERATE_NAME", "build_pod_descriptor"]
