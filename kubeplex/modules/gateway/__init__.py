"""
Gateway Module - Black Box Interface

Purpose: Kubernetes API access for the transcode pod
Interface: ClusterGateway protocol (submit, get_phase, remove), KubernetesGateway
Hidden: REST paths, authentication headers, TLS setup, error translation

Can be replaced with any ClusterGateway implementation (tests use a scripted fake).
"""

from .gateway import ClusterGateway, KubernetesGateway

__all__ = ["ClusterGateway", "KubernetesGateway"]
