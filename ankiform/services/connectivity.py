"""Background connectivity probe for the connection banner."""

import asyncio
from typing import Callable, Optional, Protocol

from ..config import Config
from ..utils.logger import setup_logger

logger = setup_logger(__name__)


class SupportsProbe(Protocol):
    async def check_connection(self, timeout: Optional[float] = None) -> bool:
        ...


StatusCallback = Callable[[bool], None]


class ProbeHandle:
    """
    Handle for a running probe loop.

    After cancel() no callback fires, including for a probe that was already
    in flight when cancel() was called.
    """

    def __init__(self) -> None:
        self._task: Optional[asyncio.Task] = None
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True
        if self._task is not None and not self._task.done():
            self._task.cancel()


class ConnectionMonitor:
    """Probe AnkiConnect immediately and then on a fixed interval."""

    def __init__(
        self,
        client: SupportsProbe,
        interval: Optional[float] = None,
        timeout: Optional[float] = None,
    ):
        self.client = client
        self.interval = interval or Config.PROBE_INTERVAL
        self.timeout = timeout or Config.PROBE_TIMEOUT

    async def probe_once(self) -> bool:
        """Run one probe. Any failure counts as not connected."""
        try:
            return await self.client.check_connection(timeout=self.timeout)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning("Connection probe raised %s: %s", type(e).__name__, e)
            return False

    async def _run(self, handle: ProbeHandle, callback: StatusCallback) -> None:
        while not handle.cancelled:
            connected = await self.probe_once()
            if handle.cancelled:
                return
            try:
                callback(connected)
            except Exception as e:
                logger.error("Connection status callback failed: %s", e)
            await asyncio.sleep(self.interval)

    def start(self, callback: StatusCallback) -> ProbeHandle:
        """
        Start probing on the running event loop.

        Args:
            callback: Called with True/False after each probe

        Returns:
            Handle whose cancel() stops the loop
        """
        handle = ProbeHandle()
        handle._task = asyncio.get_running_loop().create_task(self._run(handle, callback))
        logger.debug("Connection monitor started (every %ss)", self.interval)
        return handle
