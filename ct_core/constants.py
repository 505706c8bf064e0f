from __future__ import annotations

CANONICAL_LANGUAGE = "en"
CACHE_KEY_PREFIX = "translation_"
DEFAULT_SITES_DIRNAME = "sites"
SITE_DB_FILENAME = "site.db"
SITE_CONFIG_FILENAME = "config.yml"
SITE_README_FILENAME = "README.txt"

TITLE_FIELD_KEY = "title"
CONTENT_FIELD_KEY = "content"

GOOGLE_TRANSLATE_ENDPOINT = "https://www.googleapis.com/language/translate/v2"
DEFAULT_TRANSLATOR_TIMEOUT_SECONDS = 10.0
