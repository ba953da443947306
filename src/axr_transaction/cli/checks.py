"""Configuration and connectivity checks used by ``axr doctor``."""

from __future__ import annotations

import re
from dataclasses import dataclass

import httpx

from axr_transaction.acp.agents import AgentDirectory
from axr_transaction.acp.client import MarketplaceClient
from axr_transaction.auth.gate import AccessGate, Credential
from axr_transaction.config import Settings, parse_swap_params, validate_settings
from axr_transaction.errors import AxrError

_WALLET_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


@dataclass(frozen=True, slots=True)
class CheckResult:
    name: str
    passed: bool
    message: str
    fix_hint: str = ""


def check_config_loads() -> CheckResult:
    try:
        Settings()
        return CheckResult(name="Settings load without error", passed=True, message="ok")
    except Exception as exc:
        return CheckResult(
            name="Settings load without error",
            passed=False,
            message=str(exc),
            fix_hint="Check .env for typos or non-numeric values.",
        )


def check_config_validates(settings: Settings) -> CheckResult:
    try:
        validate_settings(settings)
        return CheckResult(name="validate_settings() passes", passed=True, message="ok")
    except AxrError as exc:
        return CheckResult(
            name="validate_settings() passes",
            passed=False,
            message=str(exc),
            fix_hint="Fix the listed keys in .env.",
        )


def check_credential(
    settings: Settings, caller_id: str | None
) -> tuple[CheckResult, Credential | None]:
    name = "Credential resolves" if caller_id is None else f"Credential resolves for {caller_id}"
    try:
        credential = AccessGate.from_settings(settings).resolve_credential(caller_id)
    except AxrError as exc:
        hint = (
            'Set CHAT_API_KEY_MAP="chatId1:key1,chatId2:key2" or LITE_AGENT_API_KEY and CHAT_ID.'
            if caller_id is not None
            else "Set LITE_AGENT_API_KEY."
        )
        return CheckResult(name=name, passed=False, message=str(exc), fix_hint=hint), None
    return CheckResult(name=name, passed=True, message=credential.masked()), credential


def check_agent_address(settings: Settings) -> CheckResult:
    address = settings.axelrod_agent_address.strip()
    ok = bool(_WALLET_RE.match(address))
    return CheckResult(
        name="AXELROD_AGENT_ADDRESS",
        passed=ok,
        message=address or "(empty)",
        fix_hint="Use a 0x-prefixed 40 hex digit wallet address.",
    )


def check_batch_size(settings: Settings) -> CheckResult:
    count = settings.batch_transaction_count
    return CheckResult(
        name="BATCH_TRANSACTION_COUNT",
        passed=count >= 0,
        message=str(count),
        fix_hint="Use a non-negative integer.",
    )


def check_swap_params(settings: Settings) -> CheckResult:
    raw = settings.swap_params.strip()
    if not raw:
        return CheckResult(name="SWAP_PARAMS", passed=True, message="not set, using defaults")
    try:
        params = parse_swap_params(raw)
    except ValueError as exc:
        return CheckResult(
            name="SWAP_PARAMS",
            passed=False,
            message=f"{exc}; defaults will be used",
            fix_hint='Use "FROM,TO,AMOUNT;FROM,TO,AMOUNT", e.g. "USDC,WETH,0.001".',
        )
    return CheckResult(
        name="SWAP_PARAMS",
        passed=True,
        message="; ".join(item.describe() for item in params),
    )


async def check_agent_reachable(
    credential: Credential,
    settings: Settings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> CheckResult:
    client = MarketplaceClient.from_settings(credential, settings, transport=transport)
    try:
        agent = await AgentDirectory(client).fetch_agent(settings.axelrod_agent_address)
    except AxrError as exc:
        return CheckResult(
            name="Agent lookup",
            passed=False,
            message=str(exc),
            fix_hint=f"Ensure the credential is valid for {settings.acp_api_base_url}.",
        )
    return CheckResult(
        name="Agent lookup",
        passed=True,
        message=f"{agent.name} ({agent.online_status or 'unknown status'})",
    )
