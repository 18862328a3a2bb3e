"""
Lifecycle Module - Black Box Interface

Purpose: Own the transcode pod from creation until deletion
Interface: LifecycleController.run(), observe_phases(), wait_for_completion()
Hidden: Task racing, poll pacing, cleanup ordering

Works against any ClusterGateway, so a scripted gateway drives it the same way
the Kubernetes one does.
"""

from .controller import LifecycleController
from .observer import observe_phases, wait_for_completion

__all__ = ["LifecycleController", "observe_phases", "wait_for_completion"]
