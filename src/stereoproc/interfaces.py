"""Protocol interfaces for the collaborators of graph assembly."""

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class UnitLoader(Protocol):
    """Protocol for the plugin loader that instantiates processing units.

    Loading is synchronous and may block while the unit initializes. The
    loader owns the lifetime of every unit it loads.
    """

    def load(
        self, instance_name: str, unit_type: str, remappings: Mapping[str, str]
    ) -> bool:
        """Instantiate a unit.

        Args:
            instance_name: Unique instance name of the unit.
            unit_type: Implementation identifier, e.g. ``image_proc/rectify``.
            remappings: Port name to topic name mapping.

        Returns:
            True if the unit was loaded. Implementations may also raise;
            the reason for a failure is loader-defined.
        """
        ...


@runtime_checkable
class ParameterStore(Protocol):
    """Protocol for the hierarchical configuration store.

    Keys are slash-separated; ``set(ns, key, value)`` stores ``value`` at
    ``<ns>/<key>``. Implementations raise ConfigStoreUnavailableError when
    the backing store cannot be reached.
    """

    def get(self, key: str) -> Any | None:
        """Return the value at a fully-qualified key, or None if unset."""
        ...

    def set(self, namespace: str, key: str, value: Any) -> None:
        """Store ``value`` under ``key`` in ``namespace``."""
        ...


@runtime_checkable
class NameResolver(Protocol):
    """Protocol for the naming collaborator queried by the preflight checks."""

    @property
    def name(self) -> str:
        """Fully resolved name of the orchestrator, e.g. ``/stereo/proc``."""
        ...

    @property
    def namespace(self) -> str:
        """Namespace the orchestrator runs in (``/`` for the root)."""
        ...

    def remap(self, name: str) -> str:
        """Return what the caller remapped ``name`` to, or ``name`` itself."""
        ...
