"""Agent directory lookups."""

import logging
from typing import Any

import httpx

from axr_transaction.acp.client import MarketplaceClient, describe_http_error, unwrap_data
from axr_transaction.acp.types import AgentProfile, JobOffering
from axr_transaction.errors import AgentNotFoundError, UpstreamError

logger = logging.getLogger(__name__)


def _text(value: object) -> str:
    return value if isinstance(value, str) else ""


def _price(value: object) -> float:
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return 0.0
    return 0.0


def _parse_offering(raw: dict[str, Any]) -> JobOffering:
    return JobOffering(
        name=_text(raw.get("name")),
        price=_price(raw.get("price")),
        price_type=_text(raw.get("priceType")),
        requirement=_text(raw.get("requirement")),
    )


def parse_agent(raw: dict[str, Any]) -> AgentProfile:
    offerings_raw = raw.get("jobOfferings")
    offerings: list[JobOffering] = []
    if isinstance(offerings_raw, list):
        offerings = [_parse_offering(item) for item in offerings_raw if isinstance(item, dict)]
    return AgentProfile(
        id=str(raw.get("id", "")),
        name=_text(raw.get("name")),
        wallet_address=_text(raw.get("walletAddress")),
        description=_text(raw.get("description")),
        graduation_status=_text(raw.get("graduationStatus")),
        online_status=_text(raw.get("onlineStatus")),
        job_offerings=tuple(offerings),
    )


class AgentDirectory:
    def __init__(self, client: MarketplaceClient) -> None:
        self.client = client

    async def search(self, query: str) -> list[AgentProfile]:
        """Free-text search; the API has no exact wallet-address lookup."""
        try:
            payload = await self.client.get_json("/acp/agents", params={"query": query})
            data = unwrap_data(payload)
        except (httpx.HTTPError, ValueError) as exc:
            raise UpstreamError(f"Failed to get agent: {describe_http_error(exc)}") from exc
        if data is None:
            return []
        if not isinstance(data, list):
            raise UpstreamError("Failed to get agent: 'data' is not a list")
        return [parse_agent(item) for item in data if isinstance(item, dict)]

    async def fetch_agent(self, wallet_address: str) -> AgentProfile:
        candidates = await self.search(wallet_address)
        wanted = wallet_address.lower()
        for agent in candidates:
            if agent.wallet_address.lower() == wanted:
                return agent
        logger.info(
            "No exact wallet match among %d candidate(s) for %s", len(candidates), wallet_address
        )
        raise AgentNotFoundError(wallet_address)
