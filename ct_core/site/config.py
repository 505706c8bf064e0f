from __future__ import annotations

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field

from ct_core.constants import (
    CANONICAL_LANGUAGE,
    DEFAULT_TRANSLATOR_TIMEOUT_SECONDS,
    GOOGLE_TRANSLATE_ENDPOINT,
)

SyncModeName = Literal["off", "manual", "auto"]


class LanguageConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    code: str
    url: str


class TranslatorConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    provider: Literal["google", "mock"] = "google"
    endpoint: str = GOOGLE_TRANSLATE_ENDPOINT
    timeout_seconds: float = Field(default=DEFAULT_TRANSLATOR_TIMEOUT_SECONDS, gt=0)


class SiteConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    site_name: str
    slug: str
    canonical_language: str = CANONICAL_LANGUAGE
    languages: list[LanguageConfig] = Field(default_factory=list)
    type_sync: dict[str, SyncModeName] = Field(default_factory=dict)
    ignore_specific: list[str] = Field(default_factory=list)
    translator: TranslatorConfig = Field(default_factory=TranslatorConfig)


def write_config(config_path: Path, config: SiteConfig) -> None:
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with config_path.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(config.model_dump(mode="python"), handle, sort_keys=False)


def read_config(config_path: Path) -> SiteConfig:
    with config_path.open("r", encoding="utf-8") as handle:
        content = yaml.safe_load(handle) or {}
    return SiteConfig.model_validate(content)
