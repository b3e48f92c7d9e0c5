import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'apifixture'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from apifixture.core.utils.paths import PROJECT_ROOT_ENV
from helpers.cache_utils import reset_apifixture_caches


@pytest.fixture(autouse=True)
def _reset_global_caches() -> None:
    """Ensure all global caches are fresh for each test."""
    reset_apifixture_caches()
    yield
    reset_apifixture_caches()


@pytest.fixture
def isolated_project_env(tmp_path, monkeypatch):
    """
    Isolated project root for tests.

    The root holds an empty ``.apifixture/config`` directory and the default
    fixture base directory ``tests/fixtures``. Developer shell overrides
    (``APIFIXTURE_*``) are cleared so config loads are deterministic.
    """
    for key in list(os.environ):
        if key.startswith("APIFIXTURE_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv(PROJECT_ROOT_ENV, str(tmp_path))
    monkeypatch.chdir(tmp_path)

    (tmp_path / ".apifixture" / "config").mkdir(parents=True, exist_ok=True)
    (tmp_path / "tests" / "fixtures").mkdir(parents=True, exist_ok=True)
    return tmp_path
