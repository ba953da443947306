"""Poll a job until it reaches a terminal phase."""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from axr_transaction.acp.jobs import JobClient
from axr_transaction.acp.types import PHASE_COMPLETED, PHASE_EXPIRED, PHASE_REJECTED, Job
from axr_transaction.batch.progress import ProgressLike, as_sink
from axr_transaction.errors import JobExpiredError, JobRejectedError, JobTimeoutError

logger = logging.getLogger(__name__)

HEARTBEAT_EVERY_POLLS = 6

Sleep = Callable[[float], Awaitable[object]]


async def poll_until_terminal(
    jobs: JobClient,
    job_id: int,
    *,
    max_polls: int = 120,
    interval_ms: int = 5000,
    progress: ProgressLike = None,
    sleep: Sleep = asyncio.sleep,
) -> Job:
    """Query ``job_id`` until COMPLETED, REJECTED or EXPIRED.

    Every poll sends a status line to ``progress``; every sixth poll (starting
    with the first) is also logged as a heartbeat. Raises JobRejectedError,
    JobExpiredError, or JobTimeoutError once ``max_polls`` queries have been
    spent without a terminal phase. JobQueryError from the client propagates.
    """
    sink = as_sink(progress)
    last_phase = "unknown"

    for poll in range(1, max_polls + 1):
        job = await jobs.get_job_status(job_id)
        last_phase = job.phase

        line = f"[Job #{job_id}] Current phase: {job.phase} ({poll}/{max_polls})"
        if (poll - 1) % HEARTBEAT_EVERY_POLLS == 0:
            logger.info("%s", line)
        sink.emit(line)

        if job.phase == PHASE_COMPLETED:
            return job
        if job.phase == PHASE_REJECTED:
            memo = job.latest_memo()
            raise JobRejectedError(job_id, memo.content if memo and memo.content else None)
        if job.phase == PHASE_EXPIRED:
            raise JobExpiredError(job_id)

        if poll < max_polls:
            await sleep(interval_ms / 1000)

    raise JobTimeoutError(job_id, last_phase=last_phase, budget_ms=max_polls * interval_ms)
