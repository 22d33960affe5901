"""Periodic expiry sweep runner."""

import asyncio
import logging

from doccontrol.application.dto.expiry_dto import SweepReport
from doccontrol.application.use_cases.expiry.expiry_sweep import ExpirySweepUseCase

logger = logging.getLogger(__name__)


class ExpirySweeper:
    """Runs the sweep every interval_seconds until stopped.

    A failed sweep is logged and retried on the next tick; it never stops the loop.
    """

    def __init__(self, sweep: ExpirySweepUseCase, interval_seconds: float) -> None:
        self._sweep = sweep
        self._interval = interval_seconds
        self._stop = asyncio.Event()

    def stop(self) -> None:
        self._stop.set()

    async def run_once(self) -> SweepReport | None:
        try:
            return await self._sweep.execute()
        except Exception:
            logger.exception("Expiry sweep failed")
            return None

    async def run_forever(self) -> None:
        logger.info("Expiry sweeper started (every %ss)", self._interval)
        while not self._stop.is_set():
            await self.run_once()
            try:
                await asyncio.wait_for(self._stop.wait(), timeout=self._interval)
            except TimeoutError:
                continue
        logger.info("Expiry sweeper stopped")
