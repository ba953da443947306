"""Click CLI group: check_status, transaction, active_jobs and doctor commands."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable

import click
from pydantic import ValidationError

from axr_transaction.acp.agents import AgentDirectory
from axr_transaction.acp.client import MarketplaceClient
from axr_transaction.acp.jobs import JobClient
from axr_transaction.auth.gate import AccessGate, Credential
from axr_transaction.batch.orchestrator import BatchOrchestrator
from axr_transaction.config import Settings, get_settings, resolve_swap_params, validate_settings
from axr_transaction.errors import AxrError, ConfigError, PermissionDeniedError
from axr_transaction.logging import configure_logging

logger = logging.getLogger(__name__)

caller_id_option = click.option(
    "--caller-id",
    "--chat-id",
    "caller_id",
    type=str,
    default=None,
    help="Caller identifier checked against the whitelist. Omit for single-caller mode.",
)


def build_client(credential: Credential, settings: Settings) -> MarketplaceClient:
    return MarketplaceClient.from_settings(credential, settings)


def _print_output(data: object) -> None:
    click.echo(json.dumps(data, indent=2, default=str))


def _print_error(message: str) -> None:
    click.echo(json.dumps({"error": message}, indent=2), err=True)


def _progress(message: str) -> None:
    click.echo(message, err=True)


def _load_settings() -> Settings:
    try:
        settings = get_settings()
    except ValidationError as exc:
        raise ConfigError(f"invalid configuration: {exc}") from exc
    validate_settings(settings)
    return settings


def _run(action: Callable[[], Awaitable[object]]) -> None:
    """Run an async command body and map its outcome to output and exit code.

    PermissionDeniedError is reported on stdout with exit code 0 so calling
    automation can tell "not authorized" apart from a crash.
    """
    try:
        payload = asyncio.run(action())
    except PermissionDeniedError as exc:
        _print_output({"error": str(exc), "code": "permission_denied"})
        return
    except AxrError as exc:
        _print_error(str(exc))
        raise SystemExit(1) from exc
    except Exception as exc:
        logger.exception("Unexpected failure")
        _print_error(f"{type(exc).__name__}: {exc}")
        raise SystemExit(1) from exc
    _print_output(payload)


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Batch swap jobs against the Axelrod agent on the ACP marketplace."""
    if ctx.invoked_subcommand == "doctor":
        return
    try:
        settings = _load_settings()
    except ConfigError as exc:
        _print_error(str(exc))
        raise SystemExit(1) from exc
    configure_logging(settings.log_level)


@cli.command("check_status")
@caller_id_option
def check_status(caller_id: str | None) -> None:
    """Print the configured agent's public profile."""

    async def _action() -> object:
        settings = get_settings()
        credential = AccessGate.from_settings(settings).resolve_credential(caller_id)
        _progress("Querying Axelrod agent status...")
        directory = AgentDirectory(build_client(credential, settings))
        agent = await directory.fetch_agent(settings.axelrod_agent_address)
        return agent.to_dict()

    _run(_action)


@cli.command("transaction")
@click.argument("count", type=click.IntRange(min=0), required=False)
@caller_id_option
def transaction(count: int | None, caller_id: str | None) -> None:
    """Send COUNT swap jobs to the agent (default: BATCH_TRANSACTION_COUNT)."""

    async def _action() -> object:
        settings = get_settings()
        credential = AccessGate.from_settings(settings).resolve_credential(caller_id)
        total = settings.batch_transaction_count if count is None else count
        _progress(f"Sending {total} transactions with Axelrod...")
        _progress("This may take several minutes...")
        orchestrator = BatchOrchestrator(
            JobClient(build_client(credential, settings)),
            offering_name=settings.swap_job_offering,
            max_polls=settings.job_max_polls,
            interval_ms=settings.job_poll_interval_ms,
        )
        result = await orchestrator.run_batch(
            settings.axelrod_agent_address,
            total,
            resolve_swap_params(settings),
            progress=_progress,
        )
        return result.to_dict()

    _run(_action)


@cli.command("active_jobs")
@caller_id_option
def active_jobs(caller_id: str | None) -> None:
    """List jobs that are still in progress for this credential."""

    async def _action() -> object:
        settings = get_settings()
        credential = AccessGate.from_settings(settings).resolve_credential(caller_id)
        jobs = await JobClient(build_client(credential, settings)).list_active_jobs()
        return {"count": len(jobs), "jobs": [job.to_dict() for job in jobs]}

    _run(_action)


@cli.command()
@caller_id_option
@click.option("--online", is_flag=True, help="Also look the agent up through the API.")
@click.option("--json", "json_output", is_flag=True, help="Append JSON output to the report.")
def doctor(caller_id: str | None, online: bool, json_output: bool) -> None:
    """Run configuration checks and print a health report."""
    from axr_transaction.cli.doctor import run_doctor

    run_doctor(caller_id=caller_id, online=online, json_output=json_output)
