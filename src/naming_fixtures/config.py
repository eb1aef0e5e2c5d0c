"""Fixture settings.

Settings come from ``FixtureConfig()`` defaults unless the
``NAMING_FIXTURES_CONFIG`` environment variable names a YAML or JSON file.
String values in that file may reference environment variables as
``${VAR}`` or ``${VAR:-fallback}``, e.g. ``properties_path: ${CI_ROOT}/db.properties``.
"""

import json
import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from naming_fixtures.exceptions import ConfigError

CONFIG_ENV_VAR = "NAMING_FIXTURES_CONFIG"
DEFAULT_PROPERTIES_FILENAME = "TestUtils.properties"

# ${NAME} or ${NAME:-fallback}
ENV_REFERENCE = re.compile(r"\$\{(?P<name>[A-Z_][A-Z0-9_]*)(?::-(?P<fallback>[^}]*))?\}")


def expand_env_vars(text: str) -> str:
    """Replace ``${VAR}`` and ``${VAR:-fallback}`` references in ``text``.

    Raises:
        ConfigError: If a variable without a fallback is unset
    """
    def expand(match: re.Match[str]) -> str:
        name, fallback = match.group("name", "fallback")
        if name in os.environ:
            return os.environ[name]
        if fallback is not None:
            return fallback
        raise ConfigError(f"Environment variable {name} is not set")

    return ENV_REFERENCE.sub(expand, text)


class FixtureConfig(BaseModel):
    """Settings for building the naming fixture."""

    properties_filename: str = DEFAULT_PROPERTIES_FILENAME
    home_env_var: str = "HOME"
    properties_path: str | None = None  # Overrides home_env_var/properties_filename
    jndi_suffix: str = Field(default=".jndiName", min_length=1)
    datasource_prefix: str = "jdbc/"
    binding_root: str = "java:comp/env/"
    strict: bool = True  # Absent driverClassName/url/username/password is an error

    def resolve_properties_path(self) -> Path:
        """Return the properties file location.

        Uses ``properties_path`` when set, otherwise the home directory named
        by ``home_env_var`` (falling back to ``Path.home()`` when the variable
        is unset) joined with ``properties_filename``.
        """
        if self.properties_path:
            return Path(self.properties_path).expanduser()
        home = os.environ.get(self.home_env_var)
        base = Path(home) if home else Path.home()
        return base / self.properties_filename

    @classmethod
    def load(cls) -> "FixtureConfig":
        """Load settings from ``$NAMING_FIXTURES_CONFIG``, or use the defaults."""
        path = os.environ.get(CONFIG_ENV_VAR)
        if not path:
            return cls()
        return cls.from_file(path)

    @classmethod
    def from_file(cls, path: str | Path) -> "FixtureConfig":
        """Load settings from a YAML (``.yaml``/``.yml``) or JSON file.

        An empty file gives the defaults.
        """
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Cannot read fixture settings {path}: {e}") from e

        try:
            if path.suffix in (".yaml", ".yml"):
                data = yaml.safe_load(text)
            else:
                data = json.loads(text) if text.strip() else None
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigError(f"Invalid fixture settings in {path}: {e}") from e

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(f"Invalid fixture settings in {path}: expected a mapping")
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FixtureConfig":
        """Load settings from a mapping, expanding env references in strings."""
        expanded = {
            key: expand_env_vars(value) if isinstance(value, str) else value
            for key, value in data.items()
        }
        try:
            return cls.model_validate(expanded)
        except ValidationError as e:
            raise ConfigError(f"Invalid fixture settings: {e}") from e
