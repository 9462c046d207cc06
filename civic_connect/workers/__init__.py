"""Background workers for CivicConnect."""

from civic_connect.workers.advance_worker import (
    AdvanceWorker,
    AdvanceWorkerMetrics,
    run_advance_worker,
)

__all__ = ["AdvanceWorker", "AdvanceWorkerMetrics", "run_advance_worker"]
