"""Sequential loading of processing units through the plugin loader."""

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from .interfaces import UnitLoader
from .units import UnitDescriptor

logger = logging.getLogger(__name__)


@dataclass
class LoadReport:
    """Outcome of loading a sequence of units.

    Attributes:
        loaded: Instance names loaded successfully, in load order.
        failed: Descriptor of the unit that failed, or None.
        error: Exception raised by the loader for the failed unit, if any.
    """

    loaded: list[str] = field(default_factory=list)
    failed: UnitDescriptor | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.failed is None


def load_graph(units: Sequence[UnitDescriptor], loader: UnitLoader) -> LoadReport:
    """Load units strictly in the given order, stopping at the first failure.

    Later units may subscribe to topics registered by earlier ones, so the
    order is never changed and nothing is loaded after a failure. There is
    no retry.

    Args:
        units: Unit descriptors in load order.
        loader: Plugin loader.

    Returns:
        LoadReport describing what was loaded and what failed.
    """
    report = LoadReport()
    for unit in units:
        logger.info("Loading %s (%s)", unit.instance_name, unit.unit_type)
        try:
            ok = loader.load(unit.instance_name, unit.unit_type, dict(unit.remappings))
        except Exception as e:
            logger.error(
                "Unit %s (%s) raised while loading: %s",
                unit.instance_name,
                unit.unit_type,
                e,
            )
            report.failed = unit
            report.error = e
            return report

        if not ok:
            logger.error(
                "Failed to load unit %s (%s)", unit.instance_name, unit.unit_type
            )
            report.failed = unit
            return report
        report.loaded.append(unit.instance_name)

    logger.info("Loaded %d unit(s)", len(report.loaded))
    return report


@dataclass
class LoadCall:
    """One recorded call to a UnitLoader."""

    instance_name: str
    unit_type: str
    remappings: dict[str, str]


class DryRunUnitLoader:
    """UnitLoader that records and logs each call without instantiating anything."""

    def __init__(self):
        self.calls: list[LoadCall] = []

    def load(
        self, instance_name: str, unit_type: str, remappings: Mapping[str, str]
    ) -> bool:
        self.calls.append(LoadCall(instance_name, unit_type, dict(remappings)))
        logger.info("[dry-run] would load %s as %s", instance_name, unit_type)
        for port, topic in sorted(remappings.items()):
            logger.debug("[dry-run]   %s -> %s", port, topic)
        return True


UnitFactory = Callable[[str, Mapping[str, str]], Any]


class RegistryUnitLoader:
    """UnitLoader that instantiates units in-process from a type registry.

    Each factory is called as ``factory(instance_name, remappings)`` and the
    returned unit is kept in :attr:`units`. Unknown unit types fail to load.

    Example:
        loader = RegistryUnitLoader({"image_proc/debayer": Debayer})
    """

    def __init__(self, factories: Mapping[str, UnitFactory] | None = None):
        self._factories: dict[str, UnitFactory] = dict(factories or {})
        self.units: dict[str, Any] = {}

    def register(self, unit_type: str, factory: UnitFactory) -> None:
        """Register a factory for a unit type, replacing any previous one."""
        if unit_type in self._factories:
            logger.warning("Replacing factory for unit type %s", unit_type)
        self._factories[unit_type] = factory

    def load(
        self, instance_name: str, unit_type: str, remappings: Mapping[str, str]
    ) -> bool:
        factory = self._factories.get(unit_type)
        if factory is None:
            logger.error(
                "No factory registered for unit type %s (known: %s)",
                unit_type,
                sorted(self._factories),
            )
            return False
        if instance_name in self.units:
            logger.error("Unit %s is already loaded", instance_name)
            return False
        self.units[instance_name] = factory(instance_name, dict(remappings))
        return True
