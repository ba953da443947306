"""Job lifecycle calls: create, query, list active."""

import logging
from typing import Any

import httpx

from axr_transaction.acp.client import MarketplaceClient, describe_http_error, unwrap_data
from axr_transaction.acp.types import Job, Memo
from axr_transaction.errors import JobCreationError, JobQueryError

logger = logging.getLogger(__name__)


def _job_id(value: object) -> int:
    if isinstance(value, bool):
        raise ValueError(f"invalid job id: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    raise ValueError(f"invalid job id: {value!r}")


def _memo(raw: dict[str, Any]) -> Memo:
    return Memo(
        next_phase=str(raw.get("nextPhase") or ""),
        content=str(raw.get("content") or ""),
        created_at=str(raw.get("createdAt") or ""),
        status=str(raw.get("status") or ""),
    )


def parse_job(data: Any) -> Job:
    if not isinstance(data, dict):
        raise ValueError("job payload is not an object")
    phase = data.get("phase")
    if not isinstance(phase, str):
        raise ValueError("job payload missing 'phase'")
    memos_raw = data.get("memos") or []
    if not isinstance(memos_raw, list):
        raise ValueError("job 'memos' is not a list")
    return Job(
        job_id=_job_id(data.get("id")),
        phase=phase,
        deliverable=data.get("deliverable"),
        memo_history=[_memo(item) for item in memos_raw if isinstance(item, dict)],
    )


class JobClient:
    def __init__(self, client: MarketplaceClient) -> None:
        self.client = client

    async def create_job(
        self,
        provider_wallet: str,
        offering_name: str,
        requirements: dict[str, object],
    ) -> int:
        body: dict[str, object] = {
            "providerWalletAddress": provider_wallet,
            "jobOfferingName": offering_name,
            "serviceRequirements": requirements,
        }
        try:
            payload = await self.client.post_json("/acp/jobs", body)
            data = unwrap_data(payload)
            if not isinstance(data, dict):
                raise ValueError("response 'data' is not an object")
            job_id = _job_id(data.get("jobId"))
        except (httpx.HTTPError, ValueError) as exc:
            raise JobCreationError(f"Failed to create job: {describe_http_error(exc)}") from exc
        logger.info("Created %s job #%s with %s", offering_name, job_id, provider_wallet)
        return job_id

    async def get_job_status(self, job_id: int) -> Job:
        try:
            payload = await self.client.get_json(f"/acp/jobs/{job_id}")
            return parse_job(unwrap_data(payload))
        except (httpx.HTTPError, ValueError) as exc:
            raise JobQueryError(
                f"Failed to get job status: {describe_http_error(exc)}"
            ) from exc

    async def list_active_jobs(self) -> list[Job]:
        try:
            payload = await self.client.get_json("/acp/jobs/active")
            data = unwrap_data(payload) or []
            if not isinstance(data, list):
                raise ValueError("response 'data' is not a list")
            return [parse_job(item) for item in data]
        except (httpx.HTTPError, ValueError) as exc:
            raise JobQueryError(
                f"Failed to list active jobs: {describe_http_error(exc)}"
            ) from exc
