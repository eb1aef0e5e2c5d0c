"""Pytest fixtures for the naming fixture.

Enable in a ``conftest.py``::

    pytest_plugins = ["naming_fixtures.pytest_plugin"]
"""

from collections.abc import Iterator

import pytest

from naming_fixtures.fixture import NamingFixture, get_fixture
from naming_fixtures.naming import NamingRegistry
from naming_fixtures.properties import Properties


@pytest.fixture(scope="session")
def naming_fixture() -> NamingFixture:
    """The process-wide naming fixture."""
    return get_fixture()


@pytest.fixture
def naming_registry(naming_fixture: NamingFixture) -> NamingRegistry:
    """The mock naming registry with bound data sources."""
    return naming_fixture.registry


@pytest.fixture
def naming_properties(naming_fixture: NamingFixture) -> Properties:
    """Properties loaded from TestUtils.properties."""
    return naming_fixture.configuration


@pytest.fixture
def naming_disabled(naming_fixture: NamingFixture) -> Iterator[NamingFixture]:
    """Deactivate the mock registry for one test, e.g. a directory (LDAP) test."""
    with naming_fixture.deactivated():
        yield naming_fixture
