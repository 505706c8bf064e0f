from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ct_core.constants import CANONICAL_LANGUAGE
from ct_core.db.migrations import get_schema_version
from ct_core.db.schema import initialize_database
from ct_core.site.config import LanguageConfig, SiteConfig, TranslatorConfig, read_config, write_config
from ct_core.site.paths import SiteLayout


@dataclass(slots=True)
class CreatedSite:
    name: str
    slug: str
    root: Path
    site_path: Path
    db_path: Path
    config_path: Path


@dataclass(slots=True)
class SiteInfo:
    name: str
    slug: str
    canonical_language: str
    language_codes: list[str]
    schema_version: int
    site_path: Path
    db_path: Path
    config: SiteConfig


def _unique_ordered(values: list[str]) -> list[str]:
    seen: set[str] = set()
    output: list[str] = []
    for value in values:
        normalized = value.strip()
        if not normalized or normalized in seen:
            continue
        seen.add(normalized)
        output.append(normalized)
    return output


def _language_url(base_url: str, code: str, canonical_language: str) -> str:
    base = base_url.rstrip("/")
    if code == canonical_language:
        return f"{base}/"
    return f"{base}/{code}/"


def _write_site_readme(layout: SiteLayout) -> None:
    note = (
        "This site folder holds config.yml and site.db.\n"
        "Do not store the translator API key in either file.\n"
        "Use `ct set-key` or the GOOGLE_TRANSLATE_API_KEY environment variable.\n"
    )
    layout.readme_path.write_text(note, encoding="utf-8")


def create_site(
    name: str,
    *,
    slug: str | None = None,
    canonical_language: str = CANONICAL_LANGUAGE,
    languages: list[str] | None = None,
    base_url: str = "https://example.com",
    type_sync: dict[str, str] | None = None,
    translator_provider: str = "google",
    root: Path | None = None,
) -> CreatedSite:
    layout = SiteLayout.locate(slug if slug is not None else name, root)

    if layout.site_path.exists():
        raise FileExistsError(f"Site path already exists: {layout.site_path}")

    codes = _unique_ordered([canonical_language, *(languages or [])])
    config = SiteConfig(
        site_name=name,
        slug=layout.slug,
        canonical_language=canonical_language,
        languages=[
            LanguageConfig(code=code, url=_language_url(base_url, code, canonical_language))
            for code in codes
        ],
        type_sync=dict(type_sync or {}),
        translator=TranslatorConfig(provider=translator_provider),
    )

    layout.root.mkdir(parents=True, exist_ok=True)
    layout.site_path.mkdir(parents=False, exist_ok=False)

    write_config(layout.config_path, config)
    _write_site_readme(layout)
    initialize_database(layout.db_path).dispose()

    return CreatedSite(
        name=name,
        slug=layout.slug,
        root=layout.root,
        site_path=layout.site_path,
        db_path=layout.db_path,
        config_path=layout.config_path,
    )


def load_site_info(slug: str, *, root: Path | None = None) -> SiteInfo:
    layout = SiteLayout.locate(slug, root)

    if not layout.site_path.exists():
        raise FileNotFoundError(f"Site does not exist: {layout.site_path}")

    config = read_config(layout.config_path)
    engine = initialize_database(layout.db_path)
    try:
        with engine.connect() as connection:
            schema_version = get_schema_version(connection)
    finally:
        engine.dispose()

    return SiteInfo(
        name=config.site_name,
        slug=config.slug,
        canonical_language=config.canonical_language,
        language_codes=[language.code for language in config.languages],
        schema_version=schema_version,
        site_path=layout.site_path,
        db_path=layout.db_path,
        config=config,
    )


def update_site_config(info: SiteInfo, config: SiteConfig) -> None:
    write_config(SiteLayout(root=info.site_path.parent, slug=info.site_path.name).config_path, config)
