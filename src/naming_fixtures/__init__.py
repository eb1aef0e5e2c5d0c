"""Naming Fixtures - mock naming registry and data sources for tests."""

from naming_fixtures.config import FixtureConfig
from naming_fixtures.datasource import DataSourceDescriptor, find_data_sources
from naming_fixtures.exceptions import (
    ConfigError,
    DataSourceConfigError,
    FileAccessError,
    NameNotFoundError,
    NamingError,
    NamingFixturesError,
    NoActiveRegistryError,
    ParseError,
)
from naming_fixtures.fixture import FixtureHolder, NamingFixture, get_fixture
from naming_fixtures.naming import NamingRegistry, get_active_registry, lookup
from naming_fixtures.observability import configure_logging, get_logger
from naming_fixtures.properties import Properties, load_properties, parse_properties

__version__ = "0.1.0"
__all__ = [
    # Core
    "FixtureConfig",
    "FixtureHolder",
    "NamingFixture",
    "get_fixture",
    # Naming
    "NamingRegistry",
    "get_active_registry",
    "lookup",
    # Data sources
    "DataSourceDescriptor",
    "find_data_sources",
    # Properties
    "Properties",
    "load_properties",
    "parse_properties",
    # Errors
    "ConfigError",
    "DataSourceConfigError",
    "FileAccessError",
    "NameNotFoundError",
    "NamingError",
    "NamingFixturesError",
    "NoActiveRegistryError",
    "ParseError",
    # Observability
    "configure_logging",
    "get_logger",
]
