"""
Signals Module - Black Box Interface

Purpose: Deliver the host's shutdown request as a single cancellation notification
Interface: ShutdownSignal.install() -> asyncio.Event, ShutdownSignal.uninstall()
Hidden: Event loop signal registration, forced exit on a repeated signal
"""

from .handler import SHUTDOWN_SIGNALS, ShutdownSignal

__all__ = ["SHUTDOWN_SIGNALS", "ShutdownSignal"]
