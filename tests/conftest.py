"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from naming_fixtures.config import CONFIG_ENV_VAR, FixtureConfig
from naming_fixtures.naming import get_active_registry

pytest_plugins = ["pytester"]

SAMPLE_PROPERTIES = """\
# Test database settings
orders.jndiName=jdbc/ordersDS
orders.driverClassName=org.h2.Driver
orders.url=jdbc:h2:mem:orders
orders.username=sa
orders.password=secret

! Directory entries are not data sources
people.jndiName=ldap/people
people.url=ldap://localhost:389

ldap.base.dn = dc=example,dc=com
"""


@pytest.fixture(autouse=True)
def no_settings_file(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ignore any NAMING_FIXTURES_CONFIG from the developer environment."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


@pytest.fixture(autouse=True)
def reset_active_registry():
    """Leave no registry active between tests."""
    yield
    registry = get_active_registry()
    if registry is not None:
        registry.deactivate()


@pytest.fixture
def properties_file(tmp_path: Path) -> Path:
    """Write sample properties into a temporary home directory."""
    path = tmp_path / "TestUtils.properties"
    path.write_text(SAMPLE_PROPERTIES, encoding="utf-8")
    return path


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME at a temporary directory."""
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path


@pytest.fixture
def sample_config_dict() -> dict:
    """Sample fixture settings for testing."""
    return {
        "properties_filename": "Custom.properties",
        "home_env_var": "TEST_HOME",
        "datasource_prefix": "jdbc/",
        "strict": False,
    }


@pytest.fixture
def fixture_config(properties_file: Path) -> FixtureConfig:
    """Settings that point directly at the sample properties file."""
    return FixtureConfig(properties_path=str(properties_file))
