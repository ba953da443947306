"""Caller-to-credential resolution with whitelist enforcement."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from axr_transaction.auth.whitelist import WILDCARD, WhitelistEntry, parse_whitelist
from axr_transaction.config import Settings
from axr_transaction.errors import MissingCredentialError, PermissionDeniedError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Credential:
    secret: str = field(repr=False)
    caller_id: str | None = None

    def masked(self, visible: int = 10) -> str:
        return f"{self.secret[:visible]}..."


class AccessGate:
    """Resolves credentials for a caller, or for the single-caller deployment.

    Passing ``caller_id=None`` selects single-caller mode, which only reads the
    legacy credential. Any string selects whitelist mode: the multi-entry
    whitelist is searched first, then the legacy ``CHAT_ID`` pair.
    """

    def __init__(
        self,
        whitelist: Sequence[WhitelistEntry] = (),
        *,
        legacy_caller_id: str | None = None,
        legacy_credential: str | None = None,
    ) -> None:
        self._whitelist = tuple(whitelist)
        self._legacy_caller_id = legacy_caller_id
        self._legacy_credential = legacy_credential

    @classmethod
    def from_settings(cls, settings: Settings) -> "AccessGate":
        return cls(
            parse_whitelist(settings.chat_api_key_map),
            legacy_caller_id=settings.chat_id,
            legacy_credential=settings.lite_agent_api_key,
        )

    def resolve_credential(self, caller_id: str | None) -> Credential:
        if caller_id is None:
            return self._resolve_single_caller()
        return self._resolve_whitelisted(caller_id)

    def _resolve_single_caller(self) -> Credential:
        secret = (self._legacy_credential or "").strip()
        if not secret:
            raise MissingCredentialError(
                "Missing LITE_AGENT_API_KEY in environment; configure it or pass a caller id"
            )
        return Credential(secret=secret)

    def _resolve_whitelisted(self, caller_id: str) -> Credential:
        if not isinstance(caller_id, str) or not caller_id.strip():
            raise PermissionDeniedError(caller_id, "empty caller id")

        for entry in self._whitelist:
            if entry.caller_id == caller_id and entry.credential.strip():
                logger.debug("Caller %s resolved from whitelist", caller_id)
                return Credential(secret=entry.credential.strip(), caller_id=caller_id)

        if self._legacy_caller_id is not None and self._legacy_credential is not None:
            legacy_id = self._legacy_caller_id.strip()
            legacy_secret = self._legacy_credential.strip()
            if legacy_id == WILDCARD or not legacy_id or not legacy_secret:
                logger.warning("Legacy CHAT_ID/LITE_AGENT_API_KEY pair is misconfigured")
                raise PermissionDeniedError(caller_id, "legacy credential is misconfigured")
            if legacy_id == caller_id:
                logger.debug("Caller %s resolved from legacy pair", caller_id)
                return Credential(secret=legacy_secret, caller_id=caller_id)

        logger.warning("Caller %s is not whitelisted", caller_id)
        raise PermissionDeniedError(caller_id)
