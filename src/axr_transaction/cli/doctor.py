"""Doctor command: runs checks and prints a color-coded report."""

from __future__ import annotations

import asyncio
import json
import sys

from axr_transaction.cli.checks import (
    CheckResult,
    check_agent_address,
    check_agent_reachable,
    check_batch_size,
    check_config_loads,
    check_config_validates,
    check_credential,
    check_swap_params,
)
from axr_transaction.config import Settings


def _green(text: str) -> str:
    return f"\033[32m{text}\033[0m"


def _red(text: str) -> str:
    return f"\033[31m{text}\033[0m"


def _yellow(text: str) -> str:
    return f"\033[33m{text}\033[0m"


def _bold(text: str) -> str:
    return f"\033[1m{text}\033[0m"


def _print_result(result: CheckResult) -> None:
    icon = _green("✓") if result.passed else _red("✗")
    print(f"  {icon} {result.name}: {result.message}")
    if not result.passed and result.fix_hint:
        print(f"    {_yellow('Fix:')} {result.fix_hint}")


def _section(title: str) -> None:
    print(f"\n{_bold(title)}")


def run_doctor(
    *,
    caller_id: str | None = None,
    online: bool = False,
    json_output: bool = False,
) -> None:
    all_results: list[CheckResult] = []

    def _run(result: CheckResult) -> bool:
        all_results.append(result)
        _print_result(result)
        return result.passed

    # --- Configuration ---
    _section("Configuration")
    settings: Settings | None = None
    if _run(check_config_loads()):
        settings = Settings()
        _run(check_config_validates(settings))
    else:
        print(f"  {_yellow('⊘')} remaining checks skipped (configuration not loaded)")

    credential = None
    if settings is not None:
        # --- Access ---
        _section("Access")
        credential_result, credential = check_credential(settings, caller_id)
        _run(credential_result)

        # --- Batch ---
        _section("Batch")
        _run(check_agent_address(settings))
        _run(check_batch_size(settings))
        _run(check_swap_params(settings))

        # --- API ---
        _section("API")
        if not online:
            print(f"  {_yellow('⊘')} skipped (pass --online to query the agent directory)")
        elif credential is None:
            print(f"  {_yellow('⊘')} skipped (no credential)")
        else:
            _run(asyncio.run(check_agent_reachable(credential, settings)))

    # --- Summary ---
    fail_count = sum(1 for r in all_results if not r.passed)
    print()
    if fail_count == 0:
        print(_green("All checks passed!"))
    else:
        print(_red(f"{fail_count} check(s) failed."))

    if json_output:
        data = [
            {
                "name": r.name,
                "passed": r.passed,
                "message": r.message,
                "fix_hint": r.fix_hint,
            }
            for r in all_results
        ]
        print("\n" + json.dumps(data, indent=2))

    if fail_count:
        sys.exit(1)
