"""Job polling and batch orchestration."""

from axr_transaction.batch.orchestrator import AttemptResult, BatchOrchestrator, BatchResult
from axr_transaction.batch.poller import poll_until_terminal
from axr_transaction.batch.progress import CallbackSink, ListSink, NullSink, ProgressSink

__all__ = [
    "AttemptResult",
    "BatchOrchestrator",
    "BatchResult",
    "CallbackSink",
    "ListSink",
    "NullSink",
    "ProgressSink",
    "poll_until_terminal",
]
