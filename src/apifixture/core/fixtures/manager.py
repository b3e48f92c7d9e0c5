"""Fixture lifecycle around a single test.

``on_test_start`` applies the fixtures declared for a test (method scope
first, class scope only when the method declares none) and ``on_test_end``
reverts them in reverse order. Reverting means running a rollback
counterpart when one exists:

- ``products.py`` -> ``products_rollback.py`` next to it
- ``create_products`` -> ``create_productsRollback`` on the same class

No database transactions are involved, so data created by fixtures stays
visible to out-of-process consumers (e.g. an API under test).
"""
from __future__ import annotations

import logging
import runpy
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from apifixture.core.exceptions import ConfigurationError, FixtureExecutionError

from .protocols import CacheInvalidator, MetadataProvider, ModulePathResolver, ProcessReinitializer
from .references import CallableReference, FixtureReference, PathReference, describe, zero_arg_callable
from .resolver import FixturePathResolver
from .subject import FixtureSubject, as_subject

logger = logging.getLogger(__name__)

PROHIBITED_SEPARATOR = "\\"


class FixtureLifecycleManager:
    """Applies declared fixtures before a test and reverts them afterwards.

    The manager is meant to live for a whole test run; the applied log is
    reset at the end of every test.
    """

    def __init__(
        self,
        fixture_base_dir: Union[str, Path],
        *,
        metadata_provider: MetadataProvider,
        module_resolver: ModulePathResolver,
        reinitializer: Optional[ProcessReinitializer] = None,
        cache_invalidator: Optional[CacheInvalidator] = None,
        rollback_suffix: str = "_rollback",
        callable_rollback_suffix: str = "Rollback",
        module_delimiter: str = "::",
        isolate_revert_failures: bool = False,
    ) -> None:
        self.path_resolver = FixturePathResolver(
            fixture_base_dir,
            module_resolver,
            module_delimiter=module_delimiter,
            rollback_suffix=rollback_suffix,
        )
        self.metadata_provider = metadata_provider
        self.reinitializer = reinitializer
        self.cache_invalidator = cache_invalidator
        self.callable_rollback_suffix = callable_rollback_suffix
        self.isolate_revert_failures = isolate_revert_failures

        self._applied: List[FixtureReference] = []
        self._subject: Optional[FixtureSubject] = None

    @property
    def fixture_base_dir(self) -> Path:
        return self.path_resolver.base_dir

    @property
    def applied_fixtures(self) -> Tuple[FixtureReference, ...]:
        return tuple(self._applied)

    @property
    def current_subject(self) -> Optional[FixtureSubject]:
        return self._subject

    # ---- test events -----------------------------------------------------

    def on_test_start(self, test: Any) -> None:
        """Handler for the test start event."""
        subject = as_subject(test)
        self._subject = subject
        if self.reinitializer is not None:
            self.reinitializer.reinitialize()

        # Method level fixtures win; class level ones apply only when there are none.
        fixtures = self.get_fixtures("method", subject) or self.get_fixtures("class", subject)
        self.apply_fixtures(fixtures)

    def on_test_end(self) -> None:
        """Handler for the test end event."""
        try:
            self.revert_all()
        finally:
            if self.cache_invalidator is not None:
                self.cache_invalidator.clean()
            self._subject = None

    # ---- discovery -------------------------------------------------------

    def get_fixtures(self, scope: str, subject: FixtureSubject) -> List[FixtureReference]:
        identifiers = self.metadata_provider.get_fixtures(subject, scope)
        return self.resolve_references(identifiers, subject)

    def resolve_references(
        self,
        identifiers: Iterable[str],
        subject: Optional[FixtureSubject] = None,
    ) -> List[FixtureReference]:
        """Turn declared identifiers into references.

        Raises:
            ConfigurationError: An identifier contains a backslash.
        """
        owner = subject.owner if subject is not None else None
        instance = subject.instance if subject is not None else None

        result: List[FixtureReference] = []
        for identifier in identifiers:
            if PROHIBITED_SEPARATOR in identifier:
                raise ConfigurationError(
                    'Directory separator "\\" is prohibited in fixture declaration.',
                    context={"fixture": identifier},
                )
            if owner is not None and zero_arg_callable(owner, identifier, instance) is not None:
                result.append(CallableReference(owner, identifier, instance))
            else:
                result.append(PathReference(identifier))
        return result

    # ---- apply -----------------------------------------------------------

    def apply_fixtures(self, fixtures: Sequence[FixtureReference]) -> None:
        for fixture in fixtures:
            if fixture in self._applied:
                logger.debug("Skipping already applied fixture %s", describe(fixture))
                continue
            self.apply_one(fixture)

    def resolve_fixture_path(self, identifier: str) -> Path:
        return self.path_resolver.resolve(identifier)

    def apply_one(self, fixture: FixtureReference) -> None:
        """Run one fixture and record it in the applied log.

        Raises:
            NotFoundError: The fixture script cannot be located.
            FixtureExecutionError: The fixture itself raised.
        """
        if isinstance(fixture, CallableReference):
            runner = fixture.resolve()
        else:
            path = self.resolve_fixture_path(fixture.identifier)

            def runner() -> None:
                runpy.run_path(str(path), init_globals=self._script_globals(), run_name="__fixture__")

        label = describe(fixture)
        logger.debug("Applying fixture %s", label)
        try:
            runner()
        except Exception as exc:
            raise FixtureExecutionError(
                f"Exception occurred when running the {label} fixture: \n{exc}",
                fixture=label,
            ) from exc
        self._applied.append(fixture)

    def _script_globals(self) -> Dict[str, Any]:
        instance = self._subject.instance if self._subject is not None else None
        return {"test": instance, "fixture_manager": self}

    # ---- revert ----------------------------------------------------------

    def revert_all(self) -> None:
        """Run rollback counterparts of applied fixtures, newest first.

        Rollbacks go through `apply_one` and therefore land in the applied
        log as well; the log is cleared once every entry was processed.
        """
        errors: List[Exception] = []
        try:
            for fixture in reversed(list(self._applied)):
                try:
                    self._revert_one(fixture)
                except Exception as exc:
                    if not self.isolate_revert_failures:
                        raise
                    logger.warning("Reverting fixture %s failed: %s", describe(fixture), exc)
                    errors.append(exc)
        finally:
            self._applied.clear()
        if errors:
            raise errors[0]

    def _revert_one(self, fixture: FixtureReference) -> None:
        if isinstance(fixture, CallableReference):
            rollback_method = fixture.method + self.callable_rollback_suffix
            if zero_arg_callable(fixture.owner, rollback_method, fixture.instance) is None:
                logger.debug("No rollback for fixture %s", describe(fixture))
                return
            self.apply_one(fixture.with_method(rollback_method))
            return

        path = self.resolve_fixture_path(fixture.identifier)
        rollback_path = self.path_resolver.rollback_path_for(path)
        if not rollback_path.is_file():
            logger.debug("No rollback for fixture %s", describe(fixture))
            return
        self.apply_one(PathReference(str(rollback_path)))


__all__ = ["FixtureLifecycleManager", "PROHIBITED_SEPARATOR"]
