import asyncio
import logging
import os
import signal
from typing import Iterable, Optional

logger = logging.getLogger("kubeplex.signals")

SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class ShutdownSignal:
    """
    Turns SIGINT/SIGTERM into a one-shot cancellation event.

    The first signal sets ``event`` so the run can shut down and clean up.
    A second signal exits the process immediately with status 1.
    """

    def __init__(self, signals: Iterable[int] = SHUTDOWN_SIGNALS):
        self.signals = tuple(signals)
        self.event = asyncio.Event()
        self.received = 0
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    def install(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> asyncio.Event:
        """Register the handlers on the running loop and return the cancellation event."""
        if self._loop is not None:
            raise RuntimeError("Shutdown signal handlers are already installed")
        self._loop = loop or asyncio.get_running_loop()
        for sig in self.signals:
            self._loop.add_signal_handler(sig, self._handle, sig)
        return self.event

    def uninstall(self) -> None:
        if self._loop is None:
            return
        for sig in self.signals:
            self._loop.remove_signal_handler(sig)
        self._loop = None

    def _handle(self, signum: int) -> None:
        self.received += 1
        if self.received == 1:
            logger.info(f"Received {signal.Signals(signum).name}, shutting down")
            self.event.set()
            return
        logger.error(f"Received {signal.Signals(signum).name} again, exiting immediately")
        os._exit(1)
