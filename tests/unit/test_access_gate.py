import pytest

from axr_transaction.auth.gate import AccessGate
from axr_transaction.auth.whitelist import parse_whitelist
from axr_transaction.config import get_settings
from axr_transaction.errors import ConfigError, MissingCredentialError, PermissionDeniedError


def _gate(
    raw_map: str = "",
    legacy_caller_id: str | None = None,
    legacy_credential: str | None = None,
) -> AccessGate:
    return AccessGate(
        parse_whitelist(raw_map),
        legacy_caller_id=legacy_caller_id,
        legacy_credential=legacy_credential,
    )


def test_whitelisted_caller_gets_its_credential() -> None:
    gate = _gate("-5186856333:acp-2039a69042438cd5cf2f")
    credential = gate.resolve_credential("-5186856333")
    assert credential.secret == "acp-2039a69042438cd5cf2f"
    assert credential.caller_id == "-5186856333"


def test_unlisted_caller_is_denied() -> None:
    gate = _gate("-5186856333:acp-2039a69042438cd5cf2f")
    with pytest.raises(PermissionDeniedError) as exc_info:
        gate.resolve_credential("-5225240692")
    assert "-5225240692" in str(exc_info.value)
    assert "Permission Denied" in str(exc_info.value)
    assert "acp-2039a69042438cd5cf2f" not in str(exc_info.value)


@pytest.mark.parametrize("caller_id", ["", "   "])
def test_empty_caller_is_always_denied(caller_id: str) -> None:
    gate = _gate("a:one", legacy_caller_id="a", legacy_credential="legacy")
    with pytest.raises(PermissionDeniedError):
        gate.resolve_credential(caller_id)


def test_match_is_exact() -> None:
    gate = _gate("123:acp-one")
    with pytest.raises(PermissionDeniedError):
        gate.resolve_credential(" 123")
    with pytest.raises(PermissionDeniedError):
        gate.resolve_credential("1234")


def test_first_matching_entry_wins() -> None:
    gate = _gate("a:first,a:second")
    assert gate.resolve_credential("a").secret == "first"


def test_wildcard_caller_request_never_matches() -> None:
    gate = _gate("*:acp-everyone")
    with pytest.raises(PermissionDeniedError):
        gate.resolve_credential("*")


def test_legacy_pair_used_when_map_has_no_match() -> None:
    gate = _gate("a:one", legacy_caller_id=" 77 ", legacy_credential=" acp-legacy ")
    credential = gate.resolve_credential("77")
    assert credential.secret == "acp-legacy"


def test_map_takes_priority_over_legacy() -> None:
    gate = _gate("77:acp-map", legacy_caller_id="77", legacy_credential="acp-legacy")
    assert gate.resolve_credential("77").secret == "acp-map"


@pytest.mark.parametrize(
    ("legacy_caller_id", "legacy_credential"),
    [("*", "acp-legacy"), ("", "acp-legacy"), ("77", "  ")],
)
def test_misconfigured_legacy_pair_denies_every_caller(
    legacy_caller_id: str, legacy_credential: str
) -> None:
    gate = _gate(legacy_caller_id=legacy_caller_id, legacy_credential=legacy_credential)
    with pytest.raises(PermissionDeniedError) as exc_info:
        gate.resolve_credential("77")
    assert "misconfigured" in str(exc_info.value)


def test_legacy_pair_ignored_unless_both_fields_present() -> None:
    gate = _gate(legacy_caller_id=None, legacy_credential="acp-legacy")
    with pytest.raises(PermissionDeniedError) as exc_info:
        gate.resolve_credential("77")
    assert "misconfigured" not in str(exc_info.value)


def test_single_caller_mode_uses_legacy_credential() -> None:
    gate = _gate("a:one", legacy_credential=" acp-single ")
    credential = gate.resolve_credential(None)
    assert credential.secret == "acp-single"
    assert credential.caller_id is None


def test_single_caller_mode_missing_credential() -> None:
    gate = _gate("a:one")
    with pytest.raises(MissingCredentialError) as exc_info:
        gate.resolve_credential(None)
    assert isinstance(exc_info.value, ConfigError)
    assert not isinstance(exc_info.value, PermissionDeniedError)


def test_credential_repr_hides_secret() -> None:
    credential = _gate("a:acp-top-secret").resolve_credential("a")
    assert "acp-top-secret" not in repr(credential)
    assert credential.masked() == "acp-top-se..."


def test_from_settings_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHAT_API_KEY_MAP", "-5186856333:acp-2039a69042438cd5cf2f")
    monkeypatch.setenv("CHAT_ID", "900")
    monkeypatch.setenv("LITE_AGENT_API_KEY", "acp-legacy")
    gate = AccessGate.from_settings(get_settings())
    assert gate.resolve_credential("-5186856333").secret == "acp-2039a69042438cd5cf2f"
    assert gate.resolve_credential("900").secret == "acp-legacy"
    with pytest.raises(PermissionDeniedError):
        gate.resolve_credential("-5225240692")
