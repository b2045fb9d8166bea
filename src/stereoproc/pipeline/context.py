"""Processing graph dataclass for the assembled unit sequence."""

from collections.abc import Iterator
from dataclasses import dataclass

from ..params import SharedConfig
from ..units import UnitDescriptor, UnitRole


@dataclass(frozen=True)
class ProcessingGraph:
    """Ordered, fully specified units of the stereo graph.

    Created once by build_processing_graph() and never mutated. Not needed
    after loading; the plugin loader owns the units from then on.
    """

    base_name: str
    shared_config: SharedConfig
    units: tuple[UnitDescriptor, ...]

    def __iter__(self) -> Iterator[UnitDescriptor]:
        return iter(self.units)

    def __len__(self) -> int:
        return len(self.units)

    @property
    def instance_names(self) -> list[str]:
        return [unit.instance_name for unit in self.units]

    def unit(self, role: UnitRole) -> UnitDescriptor:
        """Return the descriptor of the unit playing ``role``.

        Raises:
            KeyError: If no unit in the graph has that role.
        """
        for unit in self.units:
            if unit.role == role:
                return unit
        raise KeyError(role.key)
