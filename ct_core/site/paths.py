from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from ct_core.constants import (
    DEFAULT_SITES_DIRNAME,
    SITE_CONFIG_FILENAME,
    SITE_DB_FILENAME,
    SITE_README_FILENAME,
)

_SLUG_SEPARATORS = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    slug = _SLUG_SEPARATORS.sub("-", name.strip().lower()).strip("-")
    if not slug:
        raise ValueError(f"Cannot build a site slug from {name!r}.")
    return slug


@dataclass(slots=True, frozen=True)
class SiteLayout:
    """File locations of one site folder. ``root`` defaults to ``./sites``."""

    root: Path
    slug: str

    @classmethod
    def locate(cls, slug: str, root: Path | None = None) -> SiteLayout:
        sites_root = Path.cwd() / DEFAULT_SITES_DIRNAME if root is None else Path(root).expanduser()
        return cls(root=sites_root, slug=slugify(slug))

    @property
    def site_path(self) -> Path:
        return self.root / self.slug

    @property
    def db_path(self) -> Path:
        return self.site_path / SITE_DB_FILENAME

    @property
    def config_path(self) -> Path:
        return self.site_path / SITE_CONFIG_FILENAME

    @property
    def readme_path(self) -> Path:
        return self.site_path / SITE_README_FILENAME
