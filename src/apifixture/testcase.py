"""unittest integration.

Subclass `ApiDataFixtureTestCase` and declare fixtures with
``apifixture.core.fixtures.api_data_fixture``::

    @api_data_fixture("products.py")
    class CatalogTest(ApiDataFixtureTestCase):
        @api_data_fixture("create_customer")
        def test_checkout(self): ...

        @staticmethod
        def create_customer(): ...

        @staticmethod
        def create_customerRollback(): ...

Do not combine with the pytest plugin for the same tests: each would run
the lifecycle once.
"""
from __future__ import annotations

import unittest
from pathlib import Path
from typing import ClassVar, Optional

from apifixture.core.fixtures import FixtureLifecycleManager, build_manager


class ApiDataFixtureTestCase(unittest.TestCase):
    """TestCase applying declared fixtures in setUp and reverting them on cleanup."""

    fixture_manager: ClassVar[Optional[FixtureLifecycleManager]] = None
    fixture_repo_root: ClassVar[Optional[Path]] = None
    fixture_base_dir: ClassVar[Optional[Path]] = None

    @classmethod
    def get_fixture_manager(cls) -> FixtureLifecycleManager:
        if cls.fixture_manager is None:
            cls.fixture_manager = build_manager(cls.fixture_repo_root, base_dir=cls.fixture_base_dir)
        return cls.fixture_manager

    def setUp(self) -> None:
        super().setUp()
        manager = self.get_fixture_manager()
        # Registered first so a failing fixture still reverts the ones applied before it.
        self.addCleanup(manager.on_test_end)
        manager.on_test_start(self)


__all__ = ["ApiDataFixtureTestCase"]
