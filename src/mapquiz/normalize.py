"""Text normalization shared by indexing and matching."""

from __future__ import annotations

import unicodedata

TATWEEL = "ـ"
MIN_TOKEN_LENGTH = 2


def normalize(text: str) -> tuple[str, ...]:
    """Return ordered, de-duplicated match tokens for free text.

    Diacritics and other combining marks are removed, Latin fragments are
    case-folded, punctuation and symbols become separators, and tokens shorter
    than two characters are dropped unless they are purely numeric.
    """
    if not isinstance(text, str):
        raise TypeError(f"normalize() expects str, got {type(text).__name__}")

    # Case folding can reintroduce combining marks (e.g. dotted capital I), so strip again after it.
    folded = unicodedata.normalize("NFC", _strip_marks(_strip_marks(text).casefold()))

    tokens: list[str] = []
    seen: set[str] = set()
    for token in folded.split():
        if len(token) < MIN_TOKEN_LENGTH and not token.isdecimal():
            continue
        if token in seen:
            continue
        seen.add(token)
        tokens.append(token)
    return tuple(tokens)


def _strip_marks(text: str) -> str:
    """Decompose text, drop combining marks and tatweel, blank out punctuation and symbols."""
    chars: list[str] = []
    for char in unicodedata.normalize("NFKD", text):
        if char == TATWEEL:
            continue
        category = unicodedata.category(char)
        if category[0] == "M":
            continue
        if category[0] in ("P", "S"):
            chars.append(" ")
            continue
        chars.append(char)
    return "".join(chars)


def normalize_all(values: object) -> frozenset[str]:
    """Union of tokens over a field value or an iterable of values.

    Non-text values contribute nothing so a malformed entry degrades to an
    empty token set.
    """
    if isinstance(values, str):
        return frozenset(normalize(values))
    if values is None:
        return frozenset()
    try:
        items = iter(values)  # type: ignore[call-overload]
    except TypeError:
        return frozenset()
    tokens: set[str] = set()
    for item in items:
        if isinstance(item, str):
            tokens.update(normalize(item))
    return frozenset(tokens)
