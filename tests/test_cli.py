from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

import ct_core.translator.secrets as secrets_module
from ct_cli.main import app

runner = CliRunner()


class _EmptyKeyring:
    def get_password(self, service: str, name: str) -> str | None:
        return None


def _create_site(sites_root: Path) -> None:
    result = runner.invoke(
        app,
        [
            "create-site",
            "CLI Site",
            "--languages",
            "fr,de",
            "--sync",
            "page=auto,note=off",
            "--root",
            str(sites_root),
        ],
    )
    assert result.exit_code == 0, result.output


def _add_pair(sites_root: Path) -> None:
    origin = runner.invoke(
        app,
        [
            "add-item",
            "cli-site",
            "--type",
            "page",
            "--language",
            "en",
            "--title",
            "Welcome",
            "--root",
            str(sites_root),
        ],
    )
    assert origin.exit_code == 0, origin.output
    assert "Item created: 1" in origin.output

    variant = runner.invoke(
        app,
        [
            "add-item",
            "cli-site",
            "--type",
            "page",
            "--language",
            "fr",
            "--title",
            "Welcome",
            "--origin",
            "1",
            "--root",
            str(sites_root),
        ],
    )
    assert variant.exit_code == 0, variant.output
    assert "Item created: 2" in variant.output


def test_create_site_writes_sync_settings(tmp_path: Path) -> None:
    sites_root = tmp_path / "sites"
    _create_site(sites_root)

    config = yaml.safe_load((sites_root / "cli-site" / "config.yml").read_text(encoding="utf-8"))
    assert config["type_sync"] == {"page": "auto", "note": "off"}
    assert [language["code"] for language in config["languages"]] == ["en", "fr", "de"]

    again = runner.invoke(app, ["create-site", "CLI Site", "--root", str(sites_root)])
    assert again.exit_code == 1


def test_create_site_rejects_malformed_sync(tmp_path: Path) -> None:
    result = runner.invoke(
        app,
        ["create-site", "Bad Sync", "--sync", "page", "--root", str(tmp_path / "sites")],
    )
    assert result.exit_code != 0


def test_translate_with_mock_provider(tmp_path: Path) -> None:
    sites_root = tmp_path / "sites"
    _create_site(sites_root)
    _add_pair(sites_root)

    result = runner.invoke(
        app,
        ["translate", "cli-site", "2", "--language", "fr", "--mock", "--root", str(sites_root)],
    )
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "[fr] Welcome"

    original = runner.invoke(
        app,
        [
            "translate",
            "cli-site",
            "2",
            "--language",
            "fr",
            "--mock",
            "--show-original",
            "--root",
            str(sites_root),
        ],
    )
    assert original.output.strip() == "Welcome"


def test_translate_without_key_fails(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(secrets_module, "keyring", _EmptyKeyring())
    monkeypatch.delenv("GOOGLE_TRANSLATE_API_KEY", raising=False)
    sites_root = tmp_path / "sites"
    _create_site(sites_root)
    _add_pair(sites_root)

    result = runner.invoke(
        app,
        ["translate", "cli-site", "2", "--language", "fr", "--root", str(sites_root)],
    )
    assert result.exit_code == 1
    assert "API key is not configured" in result.output


def test_corrections_override_translation(tmp_path: Path) -> None:
    sites_root = tmp_path / "sites"
    _create_site(sites_root)
    _add_pair(sites_root)

    added = runner.invoke(
        app,
        ["add-correction", "cli-site", "Welcome", "Bienvenue", "--root", str(sites_root)],
    )
    assert added.exit_code == 0, added.output

    listed = runner.invoke(app, ["list-corrections", "cli-site", "--root", str(sites_root)])
    assert listed.exit_code == 0, listed.output
    assert "Welcome\tBienvenue" in listed.output

    result = runner.invoke(
        app,
        ["translate", "cli-site", "2", "--language", "fr", "--mock", "--root", str(sites_root)],
    )
    assert result.output.strip() == "Bienvenue"


def test_save_in_canonical_language_creates_missing_duplicates(tmp_path: Path) -> None:
    sites_root = tmp_path / "sites"
    _create_site(sites_root)
    _add_pair(sites_root)

    result = runner.invoke(
        app,
        ["save", "cli-site", "1", "--language", "en", "--root", str(sites_root)],
    )
    assert result.exit_code == 0, result.output
    assert "Saved item 1" in result.output
    assert "Variants: 2:fr, 3:de" in result.output


def test_invalidate_reports_removed_entries(tmp_path: Path) -> None:
    sites_root = tmp_path / "sites"
    _create_site(sites_root)
    _add_pair(sites_root)
    runner.invoke(
        app,
        ["translate", "cli-site", "2", "--language", "fr", "--mock", "--root", str(sites_root)],
    )

    result = runner.invoke(app, ["invalidate", "cli-site", "2", "--root", str(sites_root)])
    assert result.exit_code == 0, result.output
    assert "Removed 1 cached translations." in result.output

    missing = runner.invoke(app, ["invalidate", "cli-site", "--root", str(sites_root)])
    assert missing.exit_code == 1


def test_custom_field_translation_respects_field_definition(tmp_path: Path) -> None:
    sites_root = tmp_path / "sites"
    _create_site(sites_root)
    _add_pair(sites_root)
    defined = runner.invoke(
        app,
        [
            "define-field",
            "cli-site",
            "--type",
            "page",
            "--name",
            "subtitle",
            "--auto-translate",
            "--root",
            str(sites_root),
        ],
    )
    assert defined.exit_code == 0, defined.output

    translated = runner.invoke(
        app,
        [
            "translate",
            "cli-site",
            "2",
            "--language",
            "fr",
            "--field",
            "subtitle",
            "--text",
            "Read more",
            "--mock",
            "--root",
            str(sites_root),
        ],
    )
    assert translated.exit_code == 0, translated.output
    assert translated.output.strip() == "[fr] Read more"

    unknown = runner.invoke(
        app,
        [
            "translate",
            "cli-site",
            "2",
            "--language",
            "fr",
            "--field",
            "teaser",
            "--text",
            "Soon",
            "--mock",
            "--root",
            str(sites_root),
        ],
    )
    assert unknown.exit_code == 1
    assert "Translatable fields: subtitle" in unknown.output


def test_delete_correction(tmp_path: Path) -> None:
    sites_root = tmp_path / "sites"
    _create_site(sites_root)
    runner.invoke(app, ["add-correction", "cli-site", "Hi", "Salut", "--root", str(sites_root)])

    deleted = runner.invoke(app, ["delete-correction", "cli-site", "1", "--root", str(sites_root)])
    assert deleted.exit_code == 0, deleted.output

    again = runner.invoke(app, ["delete-correction", "cli-site", "1", "--root", str(sites_root)])
    assert again.exit_code == 1


def test_set_sync_turns_translation_off(tmp_path: Path) -> None:
    sites_root = tmp_path / "sites"
    _create_site(sites_root)
    _add_pair(sites_root)

    changed = runner.invoke(app, ["set-sync", "cli-site", "page", "OFF", "--root", str(sites_root)])
    assert changed.exit_code == 0, changed.output
    config = yaml.safe_load((sites_root / "cli-site" / "config.yml").read_text(encoding="utf-8"))
    assert config["type_sync"]["page"] == "off"

    result = runner.invoke(
        app,
        ["translate", "cli-site", "2", "--language", "fr", "--mock", "--root", str(sites_root)],
    )
    assert result.output.strip() == "Welcome"

    bad = runner.invoke(app, ["set-sync", "cli-site", "page", "sometimes", "--root", str(sites_root)])
    assert bad.exit_code == 1


def test_save_without_language_only_saves(tmp_path: Path) -> None:
    sites_root = tmp_path / "sites"
    _create_site(sites_root)
    _add_pair(sites_root)

    result = runner.invoke(app, ["save", "cli-site", "1", "--root", str(sites_root)])
    assert result.exit_code == 0, result.output
    assert "Variants: 2:fr" in result.output
    assert "3:de" not in result.output
