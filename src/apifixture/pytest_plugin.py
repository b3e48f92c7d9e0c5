"""pytest integration.

Opt in from a conftest::

    pytest_plugins = ["apifixture.pytest_plugin"]

or on the command line with ``-p apifixture.pytest_plugin``. Declared
fixtures are applied before each test's own setup and reverted after its
teardown::

    @pytest.mark.api_data_fixture("products.py", "Catalog::fixtures/prices.py")
    def test_price_list(): ...
"""
from __future__ import annotations

from pathlib import Path
from typing import Generator, Optional

import pytest

from apifixture.core.config.domains import FixturesConfig
from apifixture.core.fixtures import FixtureLifecycleManager, FixtureSubject, build_manager

_MANAGER_KEY = pytest.StashKey[FixtureLifecycleManager]()


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("apifixture", "declarative data fixtures")
    group.addoption(
        "--api-fixture-base-dir",
        dest="api_fixture_base_dir",
        default=None,
        help="Directory holding fixture scripts (overrides fixtures.baseDir).",
    )
    group.addoption(
        "--no-api-fixtures",
        dest="no_api_fixtures",
        action="store_true",
        default=False,
        help="Do not apply or revert declared data fixtures.",
    )
    parser.addini(
        "apifixture_base_dir",
        help="Directory holding fixture scripts, relative to the rootdir.",
        default="",
    )


def pytest_configure(config: pytest.Config) -> None:
    annotation = FixturesConfig(repo_root=config.rootpath).annotation
    config.addinivalue_line(
        "markers",
        f"{annotation}(*identifiers): apply data fixture scripts or fixture methods around the test",
    )


def _base_dir(config: pytest.Config) -> Optional[Path]:
    option = config.getoption("api_fixture_base_dir")
    if option:
        p = Path(option)
        return p if p.is_absolute() else config.invocation_params.dir / p
    ini = config.getini("apifixture_base_dir")
    if ini:
        p = Path(str(ini))
        return p if p.is_absolute() else config.rootpath / p
    return None


def get_manager(config: pytest.Config) -> FixtureLifecycleManager:
    """The session-wide manager, built on first use."""
    manager = config.stash.get(_MANAGER_KEY, None)
    if manager is None:
        manager = build_manager(config.rootpath, base_dir=_base_dir(config))
        config.stash[_MANAGER_KEY] = manager
    return manager


@pytest.hookimpl(tryfirst=True)
def pytest_runtest_setup(item: pytest.Item) -> None:
    if item.config.getoption("no_api_fixtures"):
        return
    get_manager(item.config).on_test_start(FixtureSubject.from_pytest_item(item))


@pytest.hookimpl(wrapper=True)
def pytest_runtest_teardown(item: pytest.Item, nextitem: Optional[pytest.Item]) -> Generator[None, None, None]:
    # Runs after every other teardown, including ones that raised.
    try:
        return (yield)
    finally:
        manager = item.config.stash.get(_MANAGER_KEY, None)
        if manager is not None and not item.config.getoption("no_api_fixtures"):
            manager.on_test_end()


@pytest.fixture
def api_fixture_manager(request: pytest.FixtureRequest) -> FixtureLifecycleManager:
    """The manager driving the current test's data fixtures."""
    return get_manager(request.config)
