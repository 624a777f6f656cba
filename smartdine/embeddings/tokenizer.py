from __future__ import annotations

import re

_NON_ALNUM = re.compile(r"[^a-z0-9 ]")


def tokenize(text: str | None) -> list[str]:
    """Lowercase, blank out non-alphanumerics and split into non-empty tokens."""
    if not text:
        return []
    return _NON_ALNUM.sub(" ", text.lower()).split()
