from __future__ import annotations

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from mapquiz.indexing import clear_index_caches  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_index_caches() -> Iterator[None]:
    """Start every test with empty question/place index caches."""
    clear_index_caches()
    yield
    clear_index_caches()
