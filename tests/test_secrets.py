from __future__ import annotations

import pytest

import ct_core.translator.secrets as secrets_module
from ct_core.translator.secrets import (
    GOOGLE_TRANSLATE_SECRET,
    delete_secret,
    get_secret,
    list_secret_statuses,
    mask_secret_value,
    set_secret,
)


class _FakeKeyring:
    def __init__(self) -> None:
        self._store: dict[tuple[str, str], str] = {}

    def set_password(self, service: str, name: str, value: str) -> None:
        self._store[(service, name)] = value

    def get_password(self, service: str, name: str) -> str | None:
        return self._store.get((service, name))

    def delete_password(self, service: str, name: str) -> None:
        self._store.pop((service, name), None)


@pytest.fixture
def fake_keyring(monkeypatch: pytest.MonkeyPatch) -> _FakeKeyring:
    fake = _FakeKeyring()
    monkeypatch.setattr(secrets_module, "keyring", fake)
    monkeypatch.delenv("GOOGLE_TRANSLATE_API_KEY", raising=False)
    return fake


def test_secret_round_trip_through_keyring(fake_keyring: _FakeKeyring) -> None:
    set_secret(GOOGLE_TRANSLATE_SECRET, "  AIzaSy-test-key-1234  ")

    assert get_secret(GOOGLE_TRANSLATE_SECRET) == "AIzaSy-test-key-1234"
    assert fake_keyring._store[("ct-engine", GOOGLE_TRANSLATE_SECRET)] == "AIzaSy-test-key-1234"

    delete_secret(GOOGLE_TRANSLATE_SECRET)
    assert get_secret(GOOGLE_TRANSLATE_SECRET) is None


def test_environment_variable_is_fallback(
    fake_keyring: _FakeKeyring,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("GOOGLE_TRANSLATE_API_KEY", "env-key-abcdefgh")
    assert get_secret(GOOGLE_TRANSLATE_SECRET) == "env-key-abcdefgh"

    set_secret(GOOGLE_TRANSLATE_SECRET, "keyring-key-12345")
    assert get_secret(GOOGLE_TRANSLATE_SECRET) == "keyring-key-12345"


def test_blank_secret_is_rejected(fake_keyring: _FakeKeyring) -> None:
    with pytest.raises(ValueError):
        set_secret(GOOGLE_TRANSLATE_SECRET, "   ")


def test_statuses_show_masked_preview(fake_keyring: _FakeKeyring) -> None:
    [status] = list_secret_statuses()
    assert status.is_configured is False
    assert status.preview is None

    set_secret(GOOGLE_TRANSLATE_SECRET, "abcd1234efgh5678")
    [status] = list_secret_statuses()
    assert status.is_configured is True
    assert status.preview == "abcd********5678"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("", ""),
        ("abc", "***"),
        ("abcdefg", "ab***fg"),
        ("abcdefghij", "abcd**ghij"),
    ],
)
def test_mask_secret_value(value: str, expected: str) -> None:
    assert mask_secret_value(value) == expected
