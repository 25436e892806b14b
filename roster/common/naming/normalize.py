# roster/common/naming/normalize.py
from __future__ import annotations

import re
import unicodedata

_slug_re = re.compile(r"[^a-z0-9]+")


def normalize_name(text: str | None) -> str:
    """Lowercase and collapse whitespace. Used for case-insensitive name lookups."""
    return " ".join((text or "").lower().split())


def slugify(text: str | None, *, max_len: int = 64) -> str:
    """
    ASCII slug for course titles:
      "Intro to Databases"  -> "intro-to-databases"
      "  Éléments  d'Algèbre " -> "elements-d-algebre"
    Returns '' when nothing survives normalization.
    """
    if text is None:
        return ""

    value = unicodedata.normalize("NFKD", str(text).strip().lower())
    value = value.encode("ascii", "ignore").decode("ascii")
    value = _slug_re.sub("-", value).strip("-")

    if max_len > 0 and len(value) > max_len:
        value = value[:max_len].rstrip("-")
    return value
