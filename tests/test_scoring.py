from mapquiz.indexing import IndexEntry
from mapquiz.scoring import ZERO, Score, score


def _entry(title: set[str], body: set[str]) -> IndexEntry:
    return IndexEntry(entity_id="e", title_tokens=frozenset(title), tokens=frozenset(title | body))


def test_title_tokens_weigh_double() -> None:
    entry = _entry({"النيل"}, {"نهر"})
    assert score(("النيل", "نهر"), entry) == Score(1.5, 2)
    assert score(("نهر",), entry) == Score(1.0, 1)
    assert score(("النيل",), entry) == Score(2.0, 1)


def test_score_normalized_by_query_length() -> None:
    entry = _entry({"النيل"}, set())
    assert score(("النيل", "x1", "x2", "x3"), entry) == Score(0.5, 1)


def test_no_overlap_is_zero_and_falsy() -> None:
    entry = _entry({"النيل"}, {"نهر"})
    result = score(("السد",), entry)
    assert result == ZERO
    assert not result
    assert not score((), entry)


def test_positive_score_is_truthy() -> None:
    assert score(("نهر",), _entry(set(), {"نهر"}))
