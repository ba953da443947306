"""Parsing for the caller whitelist (``CHAT_API_KEY_MAP``)."""

import logging
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)

WILDCARD = "*"
_ENTRY_SEPARATORS = re.compile(r"[,;\n]")


@dataclass(frozen=True, slots=True)
class WhitelistEntry:
    caller_id: str
    credential: str

    def __repr__(self) -> str:
        return f"WhitelistEntry(caller_id={self.caller_id!r}, credential=<redacted>)"


def parse_whitelist(raw: str) -> list[WhitelistEntry]:
    """Parse ``id:credential`` pairs into whitelist entries.

    Pairs are split on the first ``:`` so credentials may contain colons.
    A pair is skipped when it has fewer than two fields, an empty field after
    trimming, or the wildcard identifier. Order is preserved.
    """
    entries: list[WhitelistEntry] = []
    for position, chunk in enumerate(_ENTRY_SEPARATORS.split(raw)):
        if not chunk.strip():
            continue
        caller_id, sep, credential = chunk.partition(":")
        caller_id = caller_id.strip()
        credential = credential.strip()
        if not sep:
            logger.warning("Skipping whitelist entry %d: expected id:credential", position)
            continue
        if not caller_id or not credential:
            logger.warning("Skipping whitelist entry %d: empty identifier or credential", position)
            continue
        if caller_id == WILDCARD:
            logger.warning("Skipping whitelist entry %d: wildcard identifier", position)
            continue
        entries.append(WhitelistEntry(caller_id=caller_id, credential=credential))
    return entries
