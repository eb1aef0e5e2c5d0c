"""Naming fixture for tests that expect a populated naming context.

Properties are loaded from ``TestUtils.properties`` in the user's home
directory. Each property named ``<base>.jndiName`` whose value starts with
``jdbc/`` defines a data source from

- ``<base>.driverClassName``
- ``<base>.url``
- ``<base>.username``
- ``<base>.password``

bound in the mock naming registry under ``java:comp/env/<value>``.

Data sources must be bound before the code under test looks them up, so
call ``get_fixture()`` from session or class setup. The mock registry
conflicts with directory (LDAP) tests; deactivate it around those with
``NamingFixture.deactivated()`` or the ``naming_disabled`` pytest fixture.

Any other properties in the file are available from
``get_configuration()``.
"""

import threading
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from types import MappingProxyType

from naming_fixtures.config import FixtureConfig
from naming_fixtures.datasource import DataSourceDescriptor, find_data_sources
from naming_fixtures.exceptions import NamingError
from naming_fixtures.naming import NamingRegistry
from naming_fixtures.observability import Timer, get_logger
from naming_fixtures.properties import Properties, load_properties

logger = get_logger(__name__)


class NamingFixture:
    """Loaded test properties plus the registry populated from them."""

    def __init__(self, config: FixtureConfig | None = None) -> None:
        """Load properties and bind data sources.

        Args:
            config: Fixture settings. Defaults to ``FixtureConfig.load()``,
                which reads the file named by ``NAMING_FIXTURES_CONFIG``.

        Raises:
            FileAccessError: If the properties file is missing or unreadable
            ConfigError: If the settings file named by ``NAMING_FIXTURES_CONFIG`` is invalid
            ParseError: If the properties file is malformed
            DataSourceConfigError: If a data source is incomplete (strict mode)
        """
        self.config = config or FixtureConfig.load()
        path = self.config.resolve_properties_path()

        with Timer() as t:
            self._properties = load_properties(path)
            # Resolve data sources before touching the shared registry
            data_sources = dict(find_data_sources(
                self._properties,
                jndi_suffix=self.config.jndi_suffix,
                datasource_prefix=self.config.datasource_prefix,
                binding_root=self.config.binding_root,
                strict=self.config.strict,
            ))
            self._registry = NamingRegistry.empty_activated()
            for name, descriptor in data_sources.items():
                self._registry.bind(name, descriptor)
                logger.debug(
                    "Bound data source",
                    context={"name": name, "url": descriptor.url},
                )

        self._data_sources = MappingProxyType(data_sources)
        logger.info(
            "Naming fixture ready",
            context={
                "path": str(path),
                "properties": len(self._properties),
                "data_sources": len(data_sources),
            },
            duration_ms=t.duration_ms,
        )

    @property
    def registry(self) -> NamingRegistry:
        """The shared mock naming registry."""
        return self._registry

    @property
    def configuration(self) -> Properties:
        """The loaded test properties."""
        return self._properties

    @property
    def data_sources(self) -> Mapping[str, DataSourceDescriptor]:
        """Data sources bound at construction, by binding path."""
        return self._data_sources

    def get_registry(self) -> NamingRegistry:
        """Return the shared registry; other fixtures may rebind it."""
        return self._registry

    def get_configuration(self) -> Properties:
        """Return the loaded properties for ad-hoc test settings."""
        return self._properties

    def activate(self) -> None:
        """Make the registry answer naming lookups.

        Raises:
            NamingError: If a registry is already active
        """
        self._registry.activate()

    def deactivate(self) -> None:
        """Stop the registry answering naming lookups.

        Required before directory (LDAP) tests. Bindings are kept.
        """
        self._registry.deactivate()

    @contextmanager
    def deactivated(self) -> Iterator["NamingFixture"]:
        """Deactivate the registry for the duration of the block.

        The registry is reactivated on exit only if it was active on entry.
        If the block raised, a failure to reactivate is logged and the
        block's exception propagates.

        Raises:
            NamingError: If the block exits normally but another registry
                was activated inside it
        """
        was_active = self._registry.is_active
        self.deactivate()
        try:
            yield self
        except BaseException:
            if was_active:
                try:
                    self.activate()
                except NamingError as e:
                    logger.error("Could not reactivate naming registry", error=e)
            raise
        if was_active:
            self.activate()


class FixtureHolder:
    """Builds a ``NamingFixture`` once and hands out the same instance.

    Concurrent first calls are serialized; only one fixture is built and
    the properties file is read once. A failed build is not cached.
    """

    def __init__(
        self,
        factory: Callable[[], NamingFixture] = NamingFixture,
    ) -> None:
        self._factory = factory
        self._instance: NamingFixture | None = None
        self._lock = threading.Lock()

    @property
    def is_initialized(self) -> bool:
        return self._instance is not None

    def get(self) -> NamingFixture:
        """Return the fixture, building it on first use."""
        # Check without the lock first
        instance = self._instance
        if instance is not None:
            return instance

        with self._lock:
            # Double-check after acquiring lock
            if self._instance is None:
                self._instance = self._factory()
            return self._instance


_default_holder = FixtureHolder()


def get_fixture() -> NamingFixture:
    """Return the process-wide naming fixture, building it on first use.

    Raises:
        FileAccessError: If the properties file is missing or unreadable
        ParseError: If the properties file is malformed
        DataSourceConfigError: If a data source is incomplete
    """
    return _default_holder.get()
