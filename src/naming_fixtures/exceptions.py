"""Naming fixtures exceptions."""

from pathlib import Path


class NamingFixturesError(Exception):
    """Base exception for naming-fixtures."""

    pass


class FileAccessError(NamingFixturesError):
    """Properties file is missing or unreadable."""

    def __init__(self, path: str | Path, message: str | None = None) -> None:
        self.path = Path(path)
        super().__init__(message or f"Cannot read properties file: {self.path}")


class ParseError(NamingFixturesError):
    """Properties content is malformed."""

    def __init__(self, message: str, source: str = "<string>", line: int | None = None) -> None:
        self.source = source
        self.line = line
        location = f"{source}:{line}" if line is not None else source
        super().__init__(f"{location}: {message}")


class ConfigError(NamingFixturesError):
    """Configuration error."""

    pass


class DataSourceConfigError(ConfigError):
    """A data source definition is missing required properties."""

    def __init__(self, base: str, missing: list[str]) -> None:
        self.base = base
        self.missing = missing
        super().__init__(
            f"Data source '{base}' is missing properties: {', '.join(missing)}"
        )


class NamingError(NamingFixturesError):
    """Naming registry error."""

    pass


class NameNotFoundError(NamingError):
    """Name is not bound in the registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Name not bound: {name}")


class NoActiveRegistryError(NamingError):
    """No naming registry is currently active."""

    pass
