from __future__ import annotations

import os
from dataclasses import dataclass

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

KEYRING_SERVICE_NAME = "ct-engine"
GOOGLE_TRANSLATE_SECRET = "google_translate_api_key"
SECRET_LABELS = {
    GOOGLE_TRANSLATE_SECRET: "Google Translate API Key",
}
SECRET_ENV_VARS = {
    GOOGLE_TRANSLATE_SECRET: "GOOGLE_TRANSLATE_API_KEY",
}


@dataclass(slots=True, frozen=True)
class StoredSecretStatus:
    name: str
    label: str
    is_configured: bool
    preview: str | None


def _keyring_available() -> bool:
    if not hasattr(keyring, "get_keyring"):
        return True
    try:
        backend = keyring.get_keyring()
    except Exception:  # noqa: BLE001
        return False
    return backend.__class__.__module__ != "keyring.backends.fail"


def mask_secret_value(value: str) -> str:
    normalized = value.strip()
    if not normalized:
        return ""
    if len(normalized) <= 4:
        return "*" * len(normalized)
    if len(normalized) <= 8:
        visible = 2
        hidden = len(normalized) - (visible * 2)
        return f"{normalized[:visible]}{'*' * hidden}{normalized[-visible:]}"
    hidden = len(normalized) - 8
    return f"{normalized[:4]}{'*' * hidden}{normalized[-4:]}"


def set_secret(name: str, value: str) -> None:
    normalized = value.strip()
    if not normalized:
        raise ValueError("Secret value must not be empty.")
    if not _keyring_available():
        raise RuntimeError(
            "No keyring backend available. Install a usable python keyring backend "
            f"or export {SECRET_ENV_VARS.get(name, name.upper())} instead."
        )
    try:
        keyring.set_password(KEYRING_SERVICE_NAME, name, normalized)
    except KeyringError as exc:
        raise RuntimeError(f"Secret storage failed: {exc}") from exc


def get_secret(name: str) -> str | None:
    """Read a secret from the keyring, then from its environment variable."""

    value: str | None = None
    if _keyring_available():
        try:
            value = keyring.get_password(KEYRING_SERVICE_NAME, name)
        except KeyringError:
            value = None

    if not value and name in SECRET_ENV_VARS:
        value = os.environ.get(SECRET_ENV_VARS[name])

    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None


def delete_secret(name: str) -> None:
    if not _keyring_available():
        return
    try:
        keyring.delete_password(KEYRING_SERVICE_NAME, name)
    except PasswordDeleteError:
        return
    except KeyringError as exc:
        raise RuntimeError(f"Secret deletion failed: {exc}") from exc


def list_secret_statuses() -> list[StoredSecretStatus]:
    statuses: list[StoredSecretStatus] = []
    for name, label in SECRET_LABELS.items():
        value = get_secret(name)
        statuses.append(
            StoredSecretStatus(
                name=name,
                label=label,
                is_configured=bool(value),
                preview=mask_secret_value(value) if value else None,
            )
        )
    return statuses
