import asyncio
import logging
from tactics.simulator import MatchSimulator

logger = logging.getLogger(__name__)

class TickRunner:
    """Async driver that advances the match simulator on a fixed cadence."""

    def __init__(self, simulator: MatchSimulator, tick_s: float = 1.0, time_compression: float = 1.0):
        self.simulator = simulator
        self.tick_s = tick_s
        self.time_compression = time_compression
        self.sleep_s = tick_s / max(1.0, time_compression)
        self._task: asyncio.Task | None = None
        self._lock = asyncio.Lock()

    @property
    def running(self) -> bool:
        return self._task is not None

    async def start(self):
        """Start the tick loop."""
        if self._task:
            return
        self._task = asyncio.create_task(self._loop())

    async def stop(self):
        """Stop the tick loop gracefully."""
        if not self._task:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    async def _loop(self):
        """Main tick loop - one simulated second per iteration."""
        while True:
            async with self._lock:
                self.simulator.tick()
            await asyncio.sleep(self.sleep_s)

    def set_time_compression(self, time_compression: float):
        """Update time compression factor (1.0 = real-time, higher = faster)."""
        self.time_compression = max(0.1, min(1000.0, time_compression))
        self.sleep_s = self.tick_s / max(1.0, self.time_compression)
        logger.info("Time compression set to %sx (sleep: %.4fs)", self.time_compression, self.sleep_s)
