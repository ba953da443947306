"""axr-transaction exception hierarchy.

All project-specific exceptions inherit from AxrError,
enabling structured error handling and cleaner catch clauses.
"""


class AxrError(Exception):
    """Base exception for all axr-transaction errors."""

    def __init__(self, message: str = "", *, retryable: bool = False) -> None:
        super().__init__(message)
        self.retryable = retryable


class ConfigError(AxrError):
    """Invalid or missing configuration."""


class PermissionDeniedError(AxrError):
    """Caller is not whitelisted for any credential."""

    def __init__(self, caller_id: str | None, reason: str = "") -> None:
        message = f"Permission Denied: caller {caller_id!r} is not authorized"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.caller_id = caller_id


class MissingCredentialError(ConfigError):
    """Single-caller credential is not configured."""


class AgentNotFoundError(AxrError):
    """No agent in the directory matches the requested wallet address."""

    def __init__(self, wallet_address: str) -> None:
        super().__init__(f"Agent not found: {wallet_address}")
        self.wallet_address = wallet_address


class UpstreamError(AxrError):
    """Error communicating with the marketplace API."""

    def __init__(self, message: str = "", *, retryable: bool = True) -> None:
        super().__init__(message, retryable=retryable)


class JobCreationError(UpstreamError):
    """The marketplace refused or failed to create a job."""


class JobQueryError(UpstreamError):
    """A job's status could not be fetched or parsed."""


class JobFailedError(AxrError):
    """A job reached a failing terminal outcome while being polled."""

    def __init__(self, message: str, *, job_id: int) -> None:
        super().__init__(message)
        self.job_id = job_id


class JobRejectedError(JobFailedError):
    def __init__(self, job_id: int, reason: str | None = None) -> None:
        message = f"Job #{job_id} was rejected"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, job_id=job_id)
        self.reason = reason


class JobExpiredError(JobFailedError):
    def __init__(self, job_id: int) -> None:
        super().__init__(f"Job #{job_id} expired", job_id=job_id)


class JobTimeoutError(JobFailedError):
    def __init__(self, job_id: int, *, last_phase: str, budget_ms: int) -> None:
        super().__init__(
            f"Job #{job_id} timeout after {budget_ms}ms (last phase: {last_phase})",
            job_id=job_id,
        )
        self.last_phase = last_phase
        self.budget_ms = budget_ms
