"""
Invocation Module - Black Box Interface

Purpose: Turn the shim's own command line and environment into the transcode pod's
Interface: Invocation.from_process(), InvocationTranslator.translate()
Hidden: Flag substitution table, loopback address rewriting

Can be replaced with a different substitution table without touching the pod lifecycle.
"""

from .translator import (
    ADDRESS_FLAGS,
    FORCED_LOG_LEVEL,
    LOG_LEVEL_FLAGS,
    LOOPBACK_ADDRESS,
    Invocation,
    InvocationTranslator,
)

__all__ = [
    "ADDRESS_FLAGS",
    "FORCED_LOG_LEVEL",
    "LOG_LEVEL_FLAGS",
    "LOOPBACK_ADDRESS",
    "Invocation",
    "InvocationTranslator",
]
