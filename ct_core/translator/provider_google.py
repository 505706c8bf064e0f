from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

import httpx

from ct_core.constants import DEFAULT_TRANSLATOR_TIMEOUT_SECONDS, GOOGLE_TRANSLATE_ENDPOINT
from ct_core.translator.provider_base import ConfigError, ProviderError, TranslatorProvider
from ct_core.translator.secrets import GOOGLE_TRANSLATE_SECRET, get_secret

logger = logging.getLogger(__name__)


def _default_key_loader() -> str | None:
    return get_secret(GOOGLE_TRANSLATE_SECRET)


@dataclass(slots=True)
class GoogleTranslateProvider(TranslatorProvider):
    """Google Translate v2 over a single POST per call, no retries."""

    endpoint: str = GOOGLE_TRANSLATE_ENDPOINT
    timeout_seconds: float = DEFAULT_TRANSLATOR_TIMEOUT_SECONDS
    key_loader: Callable[[], str | None] = field(default=_default_key_loader)
    client: httpx.Client | None = None

    def _api_key(self) -> str:
        api_key = self.key_loader()
        if not api_key:
            raise ConfigError(
                "Google Translate API key is not configured. "
                "Run `ct set-key` or export GOOGLE_TRANSLATE_API_KEY."
            )
        return api_key

    def _post(self, data: dict[str, str]) -> httpx.Response:
        # The v2 endpoint reads a POST body as GET parameters with this override.
        headers = {"X-HTTP-Method-Override": "GET"}
        if self.client is not None:
            return self.client.post(
                self.endpoint,
                data=data,
                headers=headers,
                timeout=self.timeout_seconds,
            )
        return httpx.post(
            self.endpoint,
            data=data,
            headers=headers,
            timeout=self.timeout_seconds,
        )

    def translate(
        self,
        *,
        text: str,
        source_language: str,
        target_language: str,
    ) -> str:
        data = {
            "key": self._api_key(),
            "source": source_language,
            "target": target_language,
            "format": "html",
            "q": text,
        }

        try:
            response = self._post(data)
        except httpx.HTTPError as exc:
            raise ProviderError(f"Google Translate request failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise ProviderError(
                f"Google Translate returned non-JSON content (HTTP {response.status_code})."
            ) from exc

        if not isinstance(payload, dict):
            raise ProviderError("Google Translate response was not a JSON object.")

        error = payload.get("error")
        if error is not None:
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise ProviderError(f"Google Translate error: {message or 'unknown error'}")

        if response.status_code >= 400:
            raise ProviderError(
                f"Google Translate request failed with HTTP {response.status_code}."
            )

        try:
            translated = payload["data"]["translations"][0]["translatedText"]
        except (KeyError, IndexError, TypeError) as exc:
            raise ProviderError("Google Translate response parsing failed.") from exc

        if not isinstance(translated, str):
            raise ProviderError("Google Translate response did not include text.")
        return translated
