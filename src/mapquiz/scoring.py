"""Token-overlap similarity between a query and an indexed entry."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .indexing import IndexEntry

TITLE_WEIGHT = 2
BODY_WEIGHT = 1


@dataclass(frozen=True, order=True)
class Score:
    """Weighted overlap normalized by query length, plus the raw overlap count."""

    value: float
    overlap: int

    def __bool__(self) -> bool:
        return self.overlap > 0


ZERO = Score(0.0, 0)


def score(query_tokens: Sequence[str], entry: IndexEntry) -> Score:
    """Score one entry against normalized query tokens.

    Title tokens count twice, every other indexed token once. The weighted sum
    is divided by the query length so that scores stay comparable across
    queries of different sizes.
    """
    weighted = 0
    overlap = 0
    for token in query_tokens:
        if token in entry.title_tokens:
            weighted += TITLE_WEIGHT
        elif token in entry.tokens:
            weighted += BODY_WEIGHT
        else:
            continue
        overlap += 1
    if overlap == 0:
        return ZERO
    return Score(weighted / max(1, len(query_tokens)), overlap)
