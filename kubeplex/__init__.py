"""
Kube-Plex - Elastic Transcoder Shim

Runs a single Plex transcode as an ephemeral pod on a Kubernetes cluster
instead of on the media server host.

Architecture:
- Each module is self-contained with clear interfaces
- Modules are completely replaceable
- No module knows the internals of another
- All communication through defined interfaces

Modules:
- api: Shared data models and errors
- invocation: Rewriting of the transcoder command line and environment
- builder: Pod manifest generation
- gateway: Kubernetes API access (create, status, delete)
- lifecycle: Submit, observe and clean up the transcode pod
- signals: Shutdown signal handling
"""

__version__ = "1.0.0"
