from pathlib import Path

import mapquiz


def _project_version() -> str:
    pyproject = Path(__file__).resolve().parents[1] / "pyproject.toml"
    in_project = False
    for line in pyproject.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if stripped.startswith("[") and stripped.endswith("]"):
            in_project = stripped == "[project]"
            continue
        if in_project and stripped.startswith('version = "'):
            return stripped.split('"', 2)[1]
    raise AssertionError("Could not find [project].version in pyproject.toml")


def test_package_version_matches_pyproject() -> None:
    assert mapquiz.__version__ == _project_version()


def test_package_exports_matcher_api() -> None:
    assert callable(mapquiz.pick_best_question)
    assert callable(mapquiz.find_place_by_text)
    assert callable(mapquiz.random_sample)
    assert mapquiz.NO_QUESTION is not mapquiz.NO_PLACE
