from __future__ import annotations

import logging
from pathlib import Path

import typer

from ct_core.constants import CONTENT_FIELD_KEY, TITLE_FIELD_KEY
from ct_core.eligibility.fields import FieldDefinition, FieldKind, SyncMode
from ct_core.localization.registry_base import RegistryLookupError
from ct_core.site.create_site import create_site, load_site_info, update_site_config
from ct_core.site.registry import active_language
from ct_core.site.site import open_site
from ct_core.translator.provider_base import ConfigError
from ct_core.translator.provider_mock import MockTranslatorProvider
from ct_core.translator.secrets import GOOGLE_TRANSLATE_SECRET, list_secret_statuses, set_secret

app = typer.Typer(help="ct content translation CLI")

RootOption = typer.Option(
    None,
    "--root",
    help="Sites root path. Defaults to ./sites.",
    file_okay=False,
    resolve_path=False,
)


def _split_csv(value: str | None) -> list[str]:
    if not value:
        return []
    return [chunk.strip() for chunk in value.split(",") if chunk.strip()]


def _parse_sync(value: str | None) -> dict[str, str]:
    output: dict[str, str] = {}
    for chunk in _split_csv(value):
        content_type, sep, mode = chunk.partition("=")
        if not sep or not content_type.strip() or not mode.strip():
            raise typer.BadParameter(f"Expected TYPE=MODE, got {chunk!r}.", param_hint="--sync")
        output[content_type.strip()] = mode.strip().lower()
    return output


def _fail(exc: Exception) -> typer.Exit:
    typer.secho(str(exc), fg=typer.colors.RED, err=True)
    return typer.Exit(code=1)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log translation activity."),
) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command("create-site")
def create_site_command(
    name: str = typer.Argument(..., help="Human-readable site name."),
    slug: str | None = typer.Option(None, "--slug", help="Slug override."),
    canonical: str = typer.Option("en", "--canonical", help="Canonical source language."),
    languages: str | None = typer.Option(
        None,
        "--languages",
        help="Comma-separated language codes. The canonical language is always included.",
    ),
    base_url: str = typer.Option("https://example.com", "--base-url", help="Site base URL."),
    sync: str | None = typer.Option(
        None,
        "--sync",
        help="Comma-separated TYPE=MODE pairs, MODE being off, manual or auto.",
    ),
    provider: str = typer.Option("google", "--provider", help="Translator provider: google or mock."),
    root: Path | None = RootOption,
) -> None:
    """Create a site folder with config.yml and a SQLite database."""

    try:
        created = create_site(
            name,
            slug=slug,
            canonical_language=canonical,
            languages=_split_csv(languages),
            base_url=base_url,
            type_sync=_parse_sync(sync),
            translator_provider=provider,
            root=root,
        )
    except (FileExistsError, ValueError) as exc:
        raise _fail(exc) from exc

    typer.echo(f"Site created: {created.slug}")
    typer.echo(f"Path: {created.site_path}")
    typer.echo(f"Database: {created.db_path}")


@app.command("site-info")
def site_info_command(
    slug: str = typer.Argument(..., help="Site slug."),
    root: Path | None = RootOption,
) -> None:
    """Show site configuration and credential status."""

    try:
        info = load_site_info(slug, root=root)
    except (FileNotFoundError, ValueError) as exc:
        raise _fail(exc) from exc

    typer.echo(f"Site: {info.name} ({info.slug})")
    typer.echo(f"Path: {info.site_path}")
    typer.echo(f"Canonical language: {info.canonical_language}")
    typer.echo(f"Languages: {', '.join(info.language_codes)}")
    typer.echo(f"Translator: {info.config.translator.provider}")
    typer.echo(f"Schema version: {info.schema_version}")
    for status in list_secret_statuses():
        state = status.preview if status.is_configured else "not configured"
        typer.echo(f"{status.label}: {state}")


@app.command("add-item")
def add_item_command(
    slug: str = typer.Argument(..., help="Site slug."),
    content_type: str = typer.Option(..., "--type", help="Content type, e.g. page."),
    language: str = typer.Option(..., "--language", help="Language code of the item."),
    title: str = typer.Option("", "--title"),
    body: str = typer.Option("", "--body"),
    origin: int | None = typer.Option(None, "--origin", help="Id of the origin item."),
    exclude: bool = typer.Option(False, "--exclude", help="Exclude the body from translation."),
    root: Path | None = RootOption,
) -> None:
    """Add a content item, optionally as a variant of an origin."""

    try:
        with open_site(slug, root=root, duplicate_on_save=False) as site:
            item = site.registry.add_item(
                content_type=content_type,
                language_code=language,
                title=title,
                body=body,
                origin_id=origin,
                exclude_from_translation=exclude,
            )
    except (FileNotFoundError, RegistryLookupError, ValueError) as exc:
        raise _fail(exc) from exc

    typer.echo(f"Item created: {item.id}")


@app.command("set-sync")
def set_sync_command(
    slug: str = typer.Argument(..., help="Site slug."),
    content_type: str = typer.Argument(..., help="Content type, e.g. page."),
    mode: str = typer.Argument(..., help="off, manual or auto."),
    root: Path | None = RootOption,
) -> None:
    """Change whether a content type takes part in translation."""

    try:
        info = load_site_info(slug, root=root)
        sync_mode = SyncMode.from_name(mode)
    except (FileNotFoundError, ValueError) as exc:
        raise _fail(exc) from exc

    type_sync = {**info.config.type_sync, content_type: sync_mode.name.lower()}
    update_site_config(info, info.config.model_copy(update={"type_sync": type_sync}))
    typer.echo(f"Sync for {content_type}: {sync_mode.name.lower()}")


@app.command("define-field")
def define_field_command(
    slug: str = typer.Argument(..., help="Site slug."),
    content_type: str = typer.Option(..., "--type", help="Content type owning the field."),
    name: str = typer.Option(..., "--name", help="Field name."),
    kind: FieldKind = typer.Option(FieldKind.TEXT, "--kind", help="Field kind."),
    auto_translate: bool = typer.Option(
        False,
        "--auto-translate/--no-auto-translate",
        help="Whether the field may be translated automatically.",
    ),
    root: Path | None = RootOption,
) -> None:
    """Create or update a custom field definition."""

    try:
        with open_site(slug, root=root) as site:
            site.settings.define_field(
                content_type,
                FieldDefinition(name=name, kind=kind, auto_translate=auto_translate),
            )
    except (FileNotFoundError, ValueError) as exc:
        raise _fail(exc) from exc

    typer.echo(f"Field saved: {content_type}.{name}")


@app.command("set-key")
def set_key_command(
    api_key: str = typer.Option(
        ...,
        "--api-key",
        prompt="Google Translate API key",
        hide_input=True,
    ),
) -> None:
    """Store the Google Translate API key in the OS keyring."""

    try:
        set_secret(GOOGLE_TRANSLATE_SECRET, api_key)
    except (RuntimeError, ValueError) as exc:
        raise _fail(exc) from exc
    typer.echo("API key saved.")


@app.command("add-correction")
def add_correction_command(
    slug: str = typer.Argument(..., help="Site slug."),
    source_text: str = typer.Argument(..., help="Original text as it appears in content."),
    corrected_text: str = typer.Argument(..., help="Text to show instead of a machine translation."),
    root: Path | None = RootOption,
) -> None:
    """Add an editor correction that overrides machine translation."""

    try:
        with open_site(slug, root=root) as site:
            entry = site.corrections.add(source_text, corrected_text)
    except (FileNotFoundError, ValueError) as exc:
        raise _fail(exc) from exc
    typer.echo(f"Correction saved: {entry.id}")


@app.command("list-corrections")
def list_corrections_command(
    slug: str = typer.Argument(..., help="Site slug."),
    root: Path | None = RootOption,
) -> None:
    """List editor corrections in lookup order."""

    try:
        with open_site(slug, root=root) as site:
            entries = site.corrections.entries()
    except (FileNotFoundError, ValueError) as exc:
        raise _fail(exc) from exc

    if not entries:
        typer.echo("No corrections.")
    for entry in entries:
        typer.echo(f"{entry.id}\t{entry.source_text}\t{entry.corrected_text}")


@app.command("delete-correction")
def delete_correction_command(
    slug: str = typer.Argument(..., help="Site slug."),
    correction_id: int = typer.Argument(..., help="Correction id from list-corrections."),
    root: Path | None = RootOption,
) -> None:
    try:
        with open_site(slug, root=root) as site:
            deleted = site.corrections.delete(correction_id)
    except (FileNotFoundError, ValueError) as exc:
        raise _fail(exc) from exc

    if not deleted:
        raise _fail(LookupError(f"Unknown correction: {correction_id}"))
    typer.echo(f"Correction deleted: {correction_id}")


@app.command("translate")
def translate_command(
    slug: str = typer.Argument(..., help="Site slug."),
    item_id: int = typer.Argument(..., help="Content item id."),
    language: str = typer.Option(..., "--language", help="Active language of the request."),
    field_key: str = typer.Option(TITLE_FIELD_KEY, "--field", help="title, content or a field name."),
    text: str | None = typer.Option(None, "--text", help="Text to render instead of the stored value."),
    mock: bool = typer.Option(False, "--mock", help="Use the offline mock translator."),
    show_original: bool = typer.Option(False, "--show-original"),
    root: Path | None = RootOption,
) -> None:
    """Render one field of an item the way a request in LANGUAGE would see it."""

    provider = MockTranslatorProvider() if mock else None
    try:
        with open_site(slug, root=root, provider=provider) as site:
            item = site.registry.get_item(item_id)
            title, body = site.registry.item_text(item_id)
            with active_language(language):
                if field_key == TITLE_FIELD_KEY:
                    result = site.engine.resolve(
                        title if text is None else text,
                        item,
                        field_key,
                        show_original=show_original,
                    )
                elif field_key == CONTENT_FIELD_KEY:
                    result = site.engine.resolve(
                        body if text is None else text,
                        item,
                        field_key,
                        show_original=show_original,
                    )
                else:
                    field = site.settings.field_for_type(item.content_type, field_key)
                    if field is None:
                        eligible = site.engine.policy.translatable_fields(item)
                        raise ValueError(
                            f"Unknown field {field_key!r} for type {item.content_type!r}. "
                            f"Translatable fields: {', '.join(eligible) or 'none'}."
                        )
                    if text is None:
                        raise ValueError(f"--text is required for custom field {field_key!r}.")
                    result = site.engine.resolve_field(
                        text,
                        item,
                        field,
                        show_original=show_original,
                    )
    except (ConfigError, FileNotFoundError, RegistryLookupError, ValueError) as exc:
        raise _fail(exc) from exc

    typer.echo(result)


@app.command("save")
def save_command(
    slug: str = typer.Argument(..., help="Site slug."),
    item_id: int = typer.Argument(..., help="Content item id."),
    title: str | None = typer.Option(None, "--title"),
    body: str | None = typer.Option(None, "--body"),
    revision: bool = typer.Option(False, "--revision", help="Save a revision snapshot only."),
    language: str | None = typer.Option(None, "--language", help="Active language of the editor."),
    root: Path | None = RootOption,
) -> None:
    """Save an item, clearing its cached translations and creating duplicates."""

    try:
        with open_site(slug, root=root) as site:
            with active_language(language):
                site.registry.save_item(item_id, title=title, body=body, is_revision=revision)
            variants = site.registry.variants_of(item_id)
    except (FileNotFoundError, RegistryLookupError, ValueError) as exc:
        raise _fail(exc) from exc

    typer.echo(f"Saved item {item_id}")
    if variants:
        typer.echo(f"Variants: {', '.join(f'{v.id}:{v.language_code}' for v in variants)}")


@app.command("invalidate")
def invalidate_command(
    slug: str = typer.Argument(..., help="Site slug."),
    item_id: int | None = typer.Argument(None, help="Item id. Omit with --global."),
    global_scope: bool = typer.Option(False, "--global", help="Clear global-scope translations."),
    root: Path | None = RootOption,
) -> None:
    """Delete cached translations for an item or for global strings."""

    try:
        with open_site(slug, root=root) as site:
            if global_scope:
                removed = site.engine.cache.invalidate_global()
            elif item_id is None:
                raise ValueError("Pass an item id or --global.")
            else:
                removed = site.engine.cache.invalidate_all(site.registry.get_item(item_id))
    except (FileNotFoundError, RegistryLookupError, ValueError) as exc:
        raise _fail(exc) from exc

    typer.echo(f"Removed {removed} cached translations.")


if __name__ == "__main__":
    app()
