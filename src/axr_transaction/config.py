"""Application configuration contract."""

import logging
from decimal import Decimal
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from axr_transaction.acp.types import SwapRequest
from axr_transaction.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "https://claw-api.virtuals.io"
DEFAULT_AXELROD_ADDRESS = "0x999A1B6033998A05F7e37e4BD471038dF46624E1"
DEFAULT_SWAP_PARAMS: tuple[SwapRequest, ...] = (
    SwapRequest(from_symbol="USDC", to_symbol="WETH", amount=Decimal("0.001")),
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = Field(alias="APP_ENV", default="dev")
    log_level: str = Field(alias="LOG_LEVEL", default="INFO")

    acp_api_base_url: str = Field(alias="ACP_API_BASE_URL", default=DEFAULT_API_BASE_URL)
    http_timeout_seconds: float = Field(alias="HTTP_TIMEOUT_SECONDS", default=30.0)

    axelrod_agent_address: str = Field(
        alias="AXELROD_AGENT_ADDRESS", default=DEFAULT_AXELROD_ADDRESS
    )
    batch_transaction_count: int = Field(alias="BATCH_TRANSACTION_COUNT", default=10)
    swap_params: str = Field(alias="SWAP_PARAMS", default="")
    swap_job_offering: str = Field(alias="SWAP_JOB_OFFERING", default="swap_token")
    job_max_polls: int = Field(alias="JOB_MAX_POLLS", default=120)
    job_poll_interval_ms: int = Field(alias="JOB_POLL_INTERVAL_MS", default=5000)

    # Access control: multi-caller map plus the legacy single pair
    chat_api_key_map: str = Field(alias="CHAT_API_KEY_MAP", default="")
    chat_id: str | None = Field(alias="CHAT_ID", default=None)
    lite_agent_api_key: str | None = Field(alias="LITE_AGENT_API_KEY", default=None)


def parse_swap_params(raw: str) -> list[SwapRequest]:
    """Parse ``from,to,amount`` triples separated by ``;``.

    Raises ValueError on the first malformed triple.
    """
    params: list[SwapRequest] = []
    for chunk in raw.split(";"):
        if not chunk.strip():
            continue
        fields = [item.strip() for item in chunk.split(",")]
        if len(fields) != 3 or not fields[0] or not fields[1]:
            raise ValueError(f"expected fromSymbol,toSymbol,amount but got {chunk.strip()!r}")
        try:
            amount = Decimal(fields[2])
        except ArithmeticError as exc:
            raise ValueError(f"invalid amount {fields[2]!r}") from exc
        if not amount.is_finite() or amount < 0:
            raise ValueError(f"amount must be a non-negative number, got {fields[2]!r}")
        params.append(SwapRequest(from_symbol=fields[0], to_symbol=fields[1], amount=amount))
    if not params:
        raise ValueError("no swap parameters found")
    return params


def resolve_swap_params(settings: Settings) -> list[SwapRequest]:
    raw = settings.swap_params.strip()
    if not raw:
        return list(DEFAULT_SWAP_PARAMS)
    try:
        return parse_swap_params(raw)
    except ValueError as exc:
        logger.warning("Failed to parse SWAP_PARAMS, using defaults: %s", exc)
        return list(DEFAULT_SWAP_PARAMS)


def validate_settings(settings: Settings) -> None:
    problems: list[str] = []
    base_url = settings.acp_api_base_url.strip()
    if not base_url:
        problems.append("ACP_API_BASE_URL(empty)")
    elif settings.app_env == "prod" and not base_url.startswith("https://"):
        problems.append("ACP_API_BASE_URL(https required in prod)")
    if settings.batch_transaction_count < 0:
        problems.append("BATCH_TRANSACTION_COUNT(must be >= 0)")
    if settings.job_max_polls <= 0:
        problems.append("JOB_MAX_POLLS(must be > 0)")
    if settings.job_poll_interval_ms < 0:
        problems.append("JOB_POLL_INTERVAL_MS(must be >= 0)")
    if settings.http_timeout_seconds <= 0:
        problems.append("HTTP_TIMEOUT_SECONDS(must be > 0)")
    if not settings.swap_job_offering.strip():
        problems.append("SWAP_JOB_OFFERING(empty)")

    if problems:
        keys = ", ".join(problems)
        raise ConfigError(f"invalid configuration: {keys}")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
