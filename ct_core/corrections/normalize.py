from __future__ import annotations

import re

_WHITESPACE_PATTERN = re.compile(r"\s+")


def normalize_source_text(text: str) -> str:
    collapsed = _WHITESPACE_PATTERN.sub(" ", text.strip())
    return collapsed.casefold()
