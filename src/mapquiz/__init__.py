"""mapquiz package."""

from __future__ import annotations

import re
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from .matching import NO_PLACE, NO_QUESTION, find_place_by_text, pick_best_question
from .normalize import normalize
from .sampling import random_sample

__all__ = [
    "NO_PLACE",
    "NO_QUESTION",
    "__version__",
    "find_place_by_text",
    "normalize",
    "pick_best_question",
    "random_sample",
]

_VERSION_RE = re.compile(r'^version\s*=\s*"([^"]+)"\s*$')


def _source_version() -> str | None:
    """Read [project].version from a pyproject.toml above the package, for source checkouts."""
    for base in Path(__file__).resolve().parents:
        pyproject = base / "pyproject.toml"
        if not pyproject.is_file():
            continue
        section = ""
        for line in pyproject.read_text(encoding="utf-8").splitlines():
            stripped = line.strip()
            if stripped.startswith("["):
                section = stripped
            elif section == "[project]" and (match := _VERSION_RE.match(stripped)):
                return match.group(1)
    return None


def _resolve_version() -> str:
    found = _source_version()
    if found is not None:
        return found
    try:
        return version("mapquiz")
    except PackageNotFoundError:
        return "0+unknown"


__version__ = _resolve_version()
