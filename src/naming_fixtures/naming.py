"""In-memory mock naming registry.

A ``NamingRegistry`` holds name-to-object bindings. At most one registry is
active at a time; the active registry answers the module-level ``lookup``
function, standing in for an initial naming context.
"""

import threading
from typing import Any

from naming_fixtures.exceptions import NameNotFoundError, NamingError, NoActiveRegistryError
from naming_fixtures.observability import get_logger

logger = get_logger(__name__)

_active_lock = threading.Lock()
_active: "NamingRegistry | None" = None


class NamingRegistry:
    """Mock naming registry for tests.

    Bindings can be added or inspected at any time. Lookups only succeed
    while the registry is active, so deactivating it hides the bindings
    from naming lookups without discarding them.

    Example:
        registry = NamingRegistry()
        registry.bind("java:comp/env/jdbc/orders", data_source)
        registry.activate()
        lookup("java:comp/env/jdbc/orders")
    """

    def __init__(self) -> None:
        self._bindings: dict[str, Any] = {}

    @classmethod
    def empty_activated(cls) -> "NamingRegistry":
        """Return an empty, active registry.

        If a registry is already active it is cleared and returned, so every
        holder of that registry sees the bindings made afterwards. Otherwise
        a new registry is created and activated.
        """
        global _active
        with _active_lock:
            registry = _active
            if registry is not None:
                logger.debug(
                    "Reusing active naming registry",
                    context={"previous_bindings": len(registry._bindings)},
                )
                registry._bindings.clear()
            else:
                registry = cls()
                _active = registry
        return registry

    @property
    def is_active(self) -> bool:
        """Check if this registry answers naming lookups."""
        return _active is self

    def activate(self) -> None:
        """Make this registry the active one.

        Raises:
            NamingError: If this or another registry is already active
        """
        global _active
        with _active_lock:
            if _active is self:
                raise NamingError("Naming registry is already active")
            if _active is not None:
                raise NamingError(
                    "Another naming registry is already active; deactivate it first"
                )
            _active = self
        logger.debug("Naming registry activated", context={"bindings": len(self._bindings)})

    def deactivate(self) -> None:
        """Stop answering naming lookups. Bindings are kept."""
        global _active
        with _active_lock:
            if _active is self:
                _active = None
        logger.debug("Naming registry deactivated", context={"bindings": len(self._bindings)})

    def bind(self, name: str, obj: Any) -> None:
        """Bind an object to a name, replacing any existing binding."""
        if name in self._bindings:
            logger.debug("Replacing existing binding", context={"name": name})
        self._bindings[name] = obj

    rebind = bind

    def unbind(self, name: str) -> None:
        """Remove a binding.

        Raises:
            NameNotFoundError: If the name is not bound
        """
        try:
            del self._bindings[name]
        except KeyError:
            raise NameNotFoundError(name) from None

    def lookup(self, name: str) -> Any:
        """Look up a bound object.

        Raises:
            NamingError: If the registry is not active
            NameNotFoundError: If the name is not bound
        """
        if not self.is_active:
            raise NamingError(f"Naming registry is not active; cannot look up {name}")
        try:
            return self._bindings[name]
        except KeyError:
            raise NameNotFoundError(name) from None

    def names(self) -> list[str]:
        """Return all bound names."""
        return list(self._bindings)

    def clear(self) -> None:
        """Remove all bindings."""
        self._bindings.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)

    def __repr__(self) -> str:
        state = "active" if self.is_active else "inactive"
        return f"<NamingRegistry {state} bindings={len(self._bindings)}>"

    def list(self, prefix: str = "") -> dict[str, Any]:
        """Return bindings whose names start with ``prefix``."""
        return {k: v for k, v in self._bindings.items() if k.startswith(prefix)}


def get_active_registry() -> NamingRegistry | None:
    """Return the currently active registry, if any."""
    return _active


def lookup(name: str) -> Any:
    """Look up a name through the active registry.

    Raises:
        NoActiveRegistryError: If no registry is active
        NameNotFoundError: If the name is not bound
    """
    registry = _active
    if registry is None:
        raise NoActiveRegistryError(f"No naming registry is active; cannot look up {name}")
    return registry.lookup(name)
