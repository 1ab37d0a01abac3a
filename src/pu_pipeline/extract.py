# src/pu_pipeline/extract.py
from __future__ import annotations

import re
from typing import Optional

from pu_pipeline.errors import PermalinkNotFound

PERMALINK_LABEL = "Permalink"
_PERMALINK_RE = re.compile(r"^[ \t]*Permalink:[ \t]*(.*)$", re.IGNORECASE | re.MULTILINE)


def find_permalink(text: str) -> Optional[str]:
    """Return the first non-empty ``Permalink: <url>`` line in *text*, or ``None``."""
    for m in _PERMALINK_RE.finditer(text):
        url = m.group(1).strip()
        if url:
            return url
    return None


def extract_permalink(text: str) -> str:
    url = find_permalink(text)
    if url is None:
        raise PermalinkNotFound("provisioning output contained no 'Permalink:' line")
    return url
