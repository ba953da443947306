"""Caller authorization package."""

from axr_transaction.auth.gate import AccessGate, Credential
from axr_transaction.auth.whitelist import WhitelistEntry, parse_whitelist

__all__ = ["AccessGate", "Credential", "WhitelistEntry", "parse_whitelist"]
