import json
from pathlib import Path

import httpx
import pytest
import structlog

from axr_transaction.acp.client import MarketplaceClient
from axr_transaction.auth.gate import Credential
from axr_transaction.config import Settings, get_settings

AGENT_ADDRESS = "0x999A1B6033998A05F7e37e4BD471038dF46624E1"


class FakeAcpApi:
    """In-memory stand-in for the ACP marketplace, served through httpx.MockTransport."""

    def __init__(self) -> None:
        self.agents: list[dict[str, object]] = []
        self.active: list[dict[str, object]] = []
        self.phase_script: list[str] = ["COMPLETED"]
        self.scripts: dict[int, list[str]] = {}
        self.memos: dict[int, list[dict[str, str]]] = {}
        self.fail_creates: set[int] = set()
        self.created: list[dict[str, object]] = []
        self.requests: list[httpx.Request] = []
        self.polls: dict[int, int] = {}
        self.first_job_id = 100

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if request.method == "GET" and path == "/acp/agents":
            return httpx.Response(200, json={"data": self.agents})
        if request.method == "POST" and path == "/acp/jobs":
            attempt = len(self.created)
            self.created.append(json.loads(request.content.decode("utf-8")))
            if attempt in self.fail_creates:
                return httpx.Response(500, json={"message": "provider offline"})
            return httpx.Response(200, json={"data": {"jobId": self.first_job_id + attempt}})
        if request.method == "GET" and path == "/acp/jobs/active":
            return httpx.Response(200, json={"data": self.active})
        if request.method == "GET" and path.startswith("/acp/jobs/"):
            job_id = int(path.rsplit("/", 1)[1])
            script = self.scripts.get(job_id, self.phase_script)
            seen = self.polls.get(job_id, 0)
            self.polls[job_id] = seen + 1
            phase = script[min(seen, len(script) - 1)]
            data: dict[str, object] = {
                "id": job_id,
                "phase": phase,
                "memos": self.memos.get(job_id, []),
            }
            if phase == "COMPLETED":
                data["deliverable"] = {"txHash": f"0xabc{job_id}"}
            return httpx.Response(200, json={"data": data})
        return httpx.Response(404, json={"message": "not found"})

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def client(self, secret: str = "acp-test-key") -> MarketplaceClient:
        return MarketplaceClient(
            Credential(secret=secret),
            base_url="https://acp.test",
            transport=self.transport(),
        )


def agent_payload(wallet_address: str = AGENT_ADDRESS, name: str = "Axelrod") -> dict[str, object]:
    return {
        "id": "1234",
        "name": name,
        "walletAddress": wallet_address,
        "description": "Autonomous trading agent",
        "graduationStatus": "GRADUATED",
        "onlineStatus": "ONLINE",
        "jobOfferings": [
            {
                "name": "swap_token",
                "price": 0.01,
                "priceType": "fixed",
                "requirement": "fromSymbol, toSymbol, amount",
            }
        ],
    }


@pytest.fixture(autouse=True)
def test_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.chdir(tmp_path)
    for info in Settings.model_fields.values():
        if info.alias:
            monkeypatch.delenv(info.alias, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def acp_api() -> FakeAcpApi:
    return FakeAcpApi()


@pytest.fixture
def make_agent():
    return agent_payload
