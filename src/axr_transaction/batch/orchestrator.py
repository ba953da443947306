"""Sequential batch of swap jobs with per-attempt failure isolation."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from axr_transaction.acp.jobs import JobClient
from axr_transaction.acp.types import Job, SwapRequest
from axr_transaction.batch.poller import Sleep, poll_until_terminal
from axr_transaction.batch.progress import ProgressLike, as_sink
from axr_transaction.errors import AxrError, ConfigError
from axr_transaction.logging import bind_context, unbind_context

logger = logging.getLogger(__name__)

STATUS_COMPLETED = "completed"
STATUS_FAILED = "failed"


@dataclass(slots=True)
class AttemptResult:
    index: int
    status: str
    result: Job | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {"index": self.index, "status": self.status}
        if self.result is not None:
            payload["result"] = self.result.to_dict()
        if self.error is not None:
            payload["error"] = self.error
        return payload


@dataclass(slots=True)
class BatchResult:
    success: bool
    completed_jobs: int
    failed_jobs: int
    results: list[AttemptResult] = field(default_factory=list)

    def summary(self) -> dict[str, object]:
        return {
            "success": self.success,
            "completedJobs": self.completed_jobs,
            "failedJobs": self.failed_jobs,
        }

    def to_dict(self) -> dict[str, object]:
        return {
            "summary": self.summary(),
            "details": [item.to_dict() for item in self.results],
        }


class BatchOrchestrator:
    def __init__(
        self,
        jobs: JobClient,
        *,
        offering_name: str = "swap_token",
        max_polls: int = 120,
        interval_ms: int = 5000,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.jobs = jobs
        self.offering_name = offering_name
        self.max_polls = max_polls
        self.interval_ms = interval_ms
        self._sleep = sleep

    async def _run_attempt(
        self,
        agent_address: str,
        params: SwapRequest,
        progress: ProgressLike,
    ) -> Job:
        job_id = await self.jobs.create_job(
            agent_address, self.offering_name, params.as_requirements()
        )
        bind_context(job_id=job_id)
        return await poll_until_terminal(
            self.jobs,
            job_id,
            max_polls=self.max_polls,
            interval_ms=self.interval_ms,
            progress=progress,
            sleep=self._sleep,
        )

    async def run_batch(
        self,
        agent_address: str,
        count: int,
        swap_params: Sequence[SwapRequest],
        progress: ProgressLike = None,
    ) -> BatchResult:
        """Submit ``count`` swap jobs one at a time and wait for each.

        Parameters cycle through ``swap_params`` by attempt index. A failed
        attempt is recorded and the batch moves on; ``success`` is only true
        when every attempt completed.
        """
        if count < 0:
            raise ConfigError(f"transaction count must be >= 0, got {count}")
        if not swap_params:
            raise ConfigError("at least one swap parameter set is required")

        sink = as_sink(progress)
        results: list[AttemptResult] = []
        completed = 0
        failed = 0

        sink.emit(f"Starting transaction batch with {count} transactions...")
        for index in range(count):
            label = f"[{index + 1}/{count}]"
            params = swap_params[index % len(swap_params)]
            sink.emit(f"{label} Executing swap: {params.describe()}")
            bind_context(batch_attempt=index + 1)
            try:
                job = await self._run_attempt(agent_address, params, sink)
            except AxrError as exc:
                failed += 1
                results.append(AttemptResult(index=index, status=STATUS_FAILED, error=str(exc)))
                logger.error("%s Failed: %s", label, exc)
                sink.emit(f"{label} ✗ Failed: {exc}")
            else:
                completed += 1
                results.append(AttemptResult(index=index, status=STATUS_COMPLETED, result=job))
                sink.emit(f"{label} ✓ Completed (Job #{job.job_id})")
            finally:
                unbind_context("batch_attempt", "job_id")

        return BatchResult(
            success=completed == count,
            completed_jobs=completed,
            failed_jobs=failed,
            results=results,
        )
