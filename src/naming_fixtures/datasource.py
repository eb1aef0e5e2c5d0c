"""Data source descriptors built from properties."""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field

from naming_fixtures.exceptions import DataSourceConfigError
from naming_fixtures.observability import get_logger

logger = get_logger(__name__)

# Property suffix -> descriptor field
DATASOURCE_PROPERTIES = {
    "driverClassName": "driver_class_name",
    "url": "url",
    "username": "username",
    "password": "password",
}


@dataclass(frozen=True)
class DataSourceDescriptor:
    """Connection settings for a test database."""

    driver_class_name: str | None = None
    url: str | None = None
    username: str | None = None
    password: str | None = field(default=None, repr=False)

    @classmethod
    def from_properties(
        cls,
        properties: Mapping[str, str],
        base: str,
        strict: bool = True,
    ) -> "DataSourceDescriptor":
        """Build a descriptor from ``<base>.driverClassName/.url/.username/.password``.

        Args:
            properties: Loaded properties
            base: Property name prefix shared by the four keys
            strict: Raise if any of the four keys is absent. Otherwise the
                absent fields are left as None.

        Raises:
            DataSourceConfigError: In strict mode, if a key is absent
        """
        values: dict[str, str | None] = {}
        missing: list[str] = []
        for suffix, attr in DATASOURCE_PROPERTIES.items():
            key = f"{base}.{suffix}"
            if key not in properties:
                missing.append(key)
            values[attr] = properties.get(key)

        if missing:
            if strict:
                raise DataSourceConfigError(base, missing)
            logger.warning(
                "Data source is missing properties",
                context={"base": base, "missing": missing},
            )

        return cls(**values)


def find_data_sources(
    properties: Mapping[str, str],
    jndi_suffix: str = ".jndiName",
    datasource_prefix: str = "jdbc/",
    binding_root: str = "java:comp/env/",
    strict: bool = True,
) -> Iterator[tuple[str, DataSourceDescriptor]]:
    """Yield (binding path, descriptor) pairs in property order.

    A property whose name ends with ``jndi_suffix`` and whose value starts
    with ``datasource_prefix`` defines a data source. The name without the
    suffix is the base for the remaining keys; the binding path is
    ``binding_root`` followed by the value. Other ``jndi_suffix`` entries are
    skipped.
    """
    for name, value in properties.items():
        if not name.endswith(jndi_suffix):
            continue
        if not value.startswith(datasource_prefix):
            continue
        base = name[: -len(jndi_suffix)]
        yield binding_root + value, DataSourceDescriptor.from_properties(
            properties, base, strict=strict
        )
