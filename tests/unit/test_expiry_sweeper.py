"""Unit tests for the periodic sweep runner."""

from unittest.mock import AsyncMock

import pytest

from doccontrol.application.dto.expiry_dto import SweepReport
from doccontrol.interfaces.worker.expiry_sweeper import ExpirySweeper


@pytest.mark.asyncio
async def test_run_once_returns_report() -> None:
    sweep = AsyncMock()
    sweep.execute.return_value = SweepReport()

    report = await ExpirySweeper(sweep, interval_seconds=60).run_once()

    assert report == SweepReport()


@pytest.mark.asyncio
async def test_failed_sweep_is_logged_not_raised(caplog) -> None:
    sweep = AsyncMock()
    sweep.execute.side_effect = RuntimeError("database gone")

    report = await ExpirySweeper(sweep, interval_seconds=60).run_once()

    assert report is None
    assert "Expiry sweep failed" in caplog.text


@pytest.mark.asyncio
async def test_run_forever_keeps_going_after_failure_until_stopped() -> None:
    sweep = AsyncMock()
    sweeper = ExpirySweeper(sweep, interval_seconds=0.01)
    calls = 0

    async def execute():
        nonlocal calls
        calls += 1
        if calls == 1:
            raise RuntimeError("transient")
        sweeper.stop()
        return SweepReport()

    sweep.execute.side_effect = execute

    await sweeper.run_forever()

    assert calls == 2
