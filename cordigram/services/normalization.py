"""
Company / profile name normalization.

The normalized form is the matching and uniqueness key for companies, so
"VTC-Academy", "vtc academy" and "VTC  Académy" all resolve to one record.
"""
from __future__ import annotations

import re
import unicodedata

_WHITESPACE_RE = re.compile(r"\s+")


def _is_punct_or_symbol(ch: str) -> bool:
    # Unicode general categories P* (punctuation) and S* (symbols)
    return unicodedata.category(ch)[0] in ("P", "S")


def normalize_name(text: str | None) -> str:
    """
    Canonicalize free text for matching.

    Steps: trim, NFD, drop combining marks, lowercase, replace punctuation and
    symbols with a space, collapse whitespace, trim.

    Idempotent: normalize_name(normalize_name(x)) == normalize_name(x).
    """
    trimmed = (text or "").strip()
    if not trimmed:
        return ""

    decomposed = unicodedata.normalize("NFD", trimmed)
    no_marks = "".join(ch for ch in decomposed if not unicodedata.combining(ch))

    folded = "".join(
        " " if _is_punct_or_symbol(ch) else ch
        for ch in no_marks.lower()
    )

    return _WHITESPACE_RE.sub(" ", folded).strip()
