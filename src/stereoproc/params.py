"""Shared configuration collection and propagation into unit namespaces."""

import copy
import logging
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from .errors import ConfigStoreUnavailableError
from .interfaces import ParameterStore

logger = logging.getLogger(__name__)

QUEUE_SIZE = "queue_size"
APPROXIMATE_SYNC = "approximate_sync"

# Shared keys and the exact type a value must have to be collected.
SHARED_PARAM_TYPES: dict[str, type] = {
    QUEUE_SIZE: int,
    APPROXIMATE_SYNC: bool,
}


def join_key(namespace: str, key: str) -> str:
    """Join a namespace and a key with a single slash."""
    return f"{namespace.rstrip('/')}/{key}"


class SharedConfig(Mapping[str, Any]):
    """Read-only orchestrator-level settings shared with the units.

    Collected once before any unit is built. Units opt into a subset of it
    through :meth:`subset`.
    """

    def __init__(self, values: Mapping[str, Any] | None = None):
        self._values = MappingProxyType(dict(values or {}))

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"SharedConfig({dict(self._values)!r})"

    def subset(self, keys: Iterable[str]) -> "SharedConfig":
        """Return the settings whose keys are in ``keys``."""
        wanted = set(keys)
        return SharedConfig({k: v for k, v in self._values.items() if k in wanted})


def collect_shared_config(
    store: ParameterStore, private_namespace: str
) -> SharedConfig:
    """Read the shared settings from the orchestrator's private namespace.

    Values with the wrong type are skipped with a warning, the same as an
    unset key. ``queue_size`` must be an int (bools are rejected) and
    ``approximate_sync`` a bool.

    Args:
        store: Configuration store.
        private_namespace: Private namespace of the orchestrator, normally
            its resolved name.

    Returns:
        The collected settings, empty if none are set.

    Raises:
        ConfigStoreUnavailableError: If the store cannot be read.
    """
    values = {}
    for key, expected in SHARED_PARAM_TYPES.items():
        full_key = join_key(private_namespace, key)
        try:
            value = store.get(full_key)
        except OSError as e:
            raise ConfigStoreUnavailableError(
                f"Cannot read {full_key!r} from the parameter store: {e}"
            ) from e
        if value is None:
            continue
        if type(value) is not expected:
            logger.warning(
                "Ignoring %s=%r: expected %s, got %s",
                full_key,
                value,
                expected.__name__,
                type(value).__name__,
            )
            continue
        values[key] = value

    shared = SharedConfig(values)
    logger.info("Shared configuration: %s", dict(shared) or "(none)")
    return shared


def set_param(store: ParameterStore, namespace: str, key: str, value: Any) -> None:
    """Write one value to the store.

    Raises:
        ConfigStoreUnavailableError: If the store cannot be written.
    """
    try:
        store.set(namespace, key, value)
    except OSError as e:
        raise ConfigStoreUnavailableError(
            f"Cannot write {join_key(namespace, key)!r} to the parameter store: {e}"
        ) from e
    logger.debug("Set %s = %r", join_key(namespace, key), value)


def propagate(shared: SharedConfig, instance_name: str, store: ParameterStore) -> int:
    """Publish shared settings into a unit's private namespace.

    Must run before the unit is loaded so the unit sees its configuration
    as soon as it starts.

    Args:
        shared: Settings the unit receives.
        instance_name: Instance name of the unit; also its private namespace.
        store: Configuration store.

    Returns:
        Number of values written (zero for an empty config).

    Raises:
        ConfigStoreUnavailableError: If the store cannot be written.
    """
    if not shared:
        return 0

    for key, value in shared.items():
        set_param(store, instance_name, key, copy.deepcopy(value))

    logger.info("Propagated %d shared parameter(s) to %s", len(shared), instance_name)
    return len(shared)


class InMemoryParameterStore:
    """Dict-backed parameter store.

    Used for dry runs and tests. Setting ``available`` to False makes every
    access raise ConfigStoreUnavailableError, which simulates a store that
    cannot be reached.
    """

    def __init__(self, values: Mapping[str, Any] | None = None):
        self._values: dict[str, Any] = dict(values or {})
        self.available = True

    def _check_available(self) -> None:
        if not self.available:
            raise ConfigStoreUnavailableError("Parameter store is unavailable")

    def get(self, key: str) -> Any | None:
        self._check_available()
        return self._values.get(key)

    def set(self, namespace: str, key: str, value: Any) -> None:
        self._check_available()
        self._values[join_key(namespace, key)] = value

    def seed(self, namespace: str, values: Mapping[str, Any]) -> None:
        """Set several keys in one namespace."""
        for key, value in values.items():
            self.set(namespace, key, value)

    def namespace(self, namespace: str) -> dict[str, Any]:
        """Return the keys stored directly under ``namespace``, unprefixed."""
        prefix = join_key(namespace, "")
        return {
            key[len(prefix) :]: value
            for key, value in self._values.items()
            if key.startswith(prefix) and "/" not in key[len(prefix) :]
        }

    def to_dict(self) -> dict[str, Any]:
        return dict(self._values)

    def to_yaml(self, path: str | Path) -> None:
        """Write all stored parameters to a YAML file, sorted by key."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.safe_dump(self.to_dict(), f, default_flow_style=False, sort_keys=True)
