"""Advance worker.

Polls the lifecycle service for due "report.advance" jobs and runs them.
This is the single consumer of the advance queue; one tick processes
every due job in scheduled order, then sleeps for the poll interval.
"""

from __future__ import annotations

import asyncio
import signal
from dataclasses import dataclass
from typing import Any

from civic_connect.application.services.report_lifecycle_service import (
    AdvanceResult,
    ReportLifecycleService,
)
from civic_connect.infrastructure.observability.correlation import (
    generate_correlation_id,
    set_correlation_id,
)
from civic_connect.infrastructure.observability.logging import get_logger_for_service


@dataclass
class AdvanceWorkerMetrics:
    """Counters tracked by the advance worker."""

    ticks: int = 0
    advances_processed: int = 0
    reports_advanced: int = 0


class AdvanceWorker:
    """Asyncio loop around ReportLifecycleService.process_due_advances."""

    def __init__(
        self,
        lifecycle: ReportLifecycleService,
        poll_interval_seconds: float = 1.0,
        batch_size: int = 100,
    ) -> None:
        if poll_interval_seconds <= 0:
            raise ValueError(
                f"poll_interval_seconds must be positive, got {poll_interval_seconds}"
            )
        self._lifecycle = lifecycle
        self._poll_interval = poll_interval_seconds
        self._batch_size = batch_size
        self._running = False
        self._stop_event = asyncio.Event()
        self._metrics = AdvanceWorkerMetrics()
        self._log = get_logger_for_service(self.__class__.__name__, component="worker")

    @property
    def is_running(self) -> bool:
        return self._running

    async def run_once(self) -> list[AdvanceResult]:
        """Process every advance that is due right now."""
        set_correlation_id(generate_correlation_id())
        results = await self._lifecycle.process_due_advances(limit=self._batch_size)
        self._metrics.ticks += 1
        self._metrics.advances_processed += len(results)
        self._metrics.reports_advanced += sum(1 for r in results if r.advanced)
        return results

    async def run(self) -> None:
        """Run until stop() is called."""
        self._running = True
        self._stop_event.clear()
        self._log.info("advance_worker_started", poll_interval=self._poll_interval)

        try:
            while self._running:
                await self.run_once()
                try:
                    await asyncio.wait_for(
                        self._stop_event.wait(), timeout=self._poll_interval
                    )
                except asyncio.TimeoutError:
                    pass
        finally:
            self._running = False
            self._log.info("advance_worker_stopped", **self.get_metrics())

    def stop(self) -> None:
        """Signal the worker to stop after the current tick."""
        self._log.info("advance_worker_stop_requested")
        self._running = False
        self._stop_event.set()

    def get_metrics(self) -> dict[str, Any]:
        """Get worker metrics for monitoring."""
        return {
            "ticks": self._metrics.ticks,
            "advances_processed": self._metrics.advances_processed,
            "reports_advanced": self._metrics.reports_advanced,
            "running": self._running,
        }


async def run_advance_worker(worker: AdvanceWorker) -> None:
    """Run an advance worker with graceful shutdown on SIGINT/SIGTERM."""
    loop = asyncio.get_running_loop()

    def signal_handler() -> None:
        worker.stop()

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, signal_handler)

    await worker.run()
