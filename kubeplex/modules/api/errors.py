"""
Kube-Plex error hierarchy.

Every failure a run can end in has its own type so the entry point can
map it to an exit status. Cancellation is not an error and has no type here.
"""

from typing import Dict, Optional


class KubePlexError(Exception):
    """Base class for all Kube-Plex errors."""


class ConfigurationError(KubePlexError):
    """A required external identifier is missing or empty, or a setting is malformed."""

    def __init__(self, missing=(), invalid: Optional[Dict[str, str]] = None):
        self.missing = list(missing)
        self.invalid = dict(invalid or {})
        problems = []
        if self.missing:
            problems.append(f"Missing required configuration: {', '.join(self.missing)}.")
        for name, reason in self.invalid.items():
            problems.append(f"Invalid {name}: {reason}.")
        super().__init__(
            " ".join(problems) + " Check environment variables and deployment configuration."
        )


class MalformedInvocationError(KubePlexError, IndexError):
    """A recognized flag was the last argument, so it has no value to rewrite."""

    def __init__(self, flag: str, position: int):
        self.flag = flag
        self.position = position
        super().__init__(f"Flag {flag!r} at position {position} has no value")


class GatewayError(KubePlexError):
    """The cluster API call failed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class SubmissionError(GatewayError):
    """The cluster refused to create the pod."""


class TransportError(GatewayError):
    """Reading or deleting the pod failed after it was created."""


class WorkloadFailedError(KubePlexError):
    """The cluster reported the transcode pod as Failed."""

    def __init__(self, name: str, namespace: Optional[str] = None):
        self.name = name
        self.namespace = namespace
        super().__init__(f'pod "{name}" failed')


class CleanupError(KubePlexError):
    """Deleting the pod failed; it may be leaked on the cluster."""

    def __init__(self, name: str, namespace: str, cause: BaseException):
        self.name = name
        self.namespace = namespace
        self.cause = cause
        super().__init__(f'Error cleaning up pod "{namespace}/{name}": {cause}')
