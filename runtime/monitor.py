import asyncio
import logging
from typing import Optional
from .eventlog import DEFAULT_MAX_REPORTS, ReportLog
from .pipeline import InferencePipeline, TickReport

logger = logging.getLogger(__name__)

class Monitor:
    """Async poll loop - runs one inference cycle per interval and logs the report."""

    def __init__(self, pipeline: InferencePipeline, poll_interval_s: float = 2.0,
                 max_reports: int = DEFAULT_MAX_REPORTS):
        self.pipeline = pipeline
        self.poll_interval_s = poll_interval_s
        self.reports = ReportLog(max_reports)
        self._task: asyncio.Task | None = None

    @property
    def latest(self) -> Optional[TickReport]:
        return self.reports.latest

    async def start(self):
        """Start the poll loop."""
        if self._task:
            return
        self._task = asyncio.create_task(self._loop())

    async def stop(self):
        """Stop the poll loop gracefully."""
        if not self._task:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    async def run_once(self) -> TickReport:
        report = await self.pipeline.run_tick()
        self.reports.append(report)
        return report

    async def _loop(self):
        while True:
            try:
                await self.run_once()
            except Exception:
                logger.exception("Inference cycle failed; report discarded")
            await asyncio.sleep(self.poll_interval_s)

    def set_poll_interval(self, poll_interval_s: float):
        self.poll_interval_s = max(0.1, poll_interval_s)
        logger.info("Poll interval set to %.1fs", self.poll_interval_s)
