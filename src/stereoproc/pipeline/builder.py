"""Processing graph builder for one-time assembly."""

import logging
from collections.abc import Sequence

from ..naming import allocate_all
from ..params import SharedConfig
from ..remapping import build_remappings
from ..units import FIXED_TOPOLOGY, UnitDescriptor, UnitRole
from .context import ProcessingGraph

logger = logging.getLogger(__name__)


def build_processing_graph(
    base_name: str,
    shared: SharedConfig,
    roles: Sequence[UnitRole] = FIXED_TOPOLOGY,
) -> ProcessingGraph:
    """Describe every unit of the stereo graph without loading anything.

    Allocates instance names, builds remapping tables and selects the
    shared settings each unit reads. Any remapping error surfaces here,
    before a single unit reaches the plugin loader.

    Args:
        base_name: Resolved name of the orchestrator.
        shared: Shared configuration collected from the orchestrator's
            private namespace.
        roles: Roles to build, in load order.

    Returns:
        ProcessingGraph with one descriptor per role, in the given order.
    """
    names = allocate_all(base_name, roles)

    units = []
    for role in roles:
        units.append(
            UnitDescriptor(
                role=role,
                unit_type=role.unit_type,
                instance_name=names[role],
                remappings=build_remappings(role),
                private_params=shared.subset(role.shared_param_keys),
            )
        )

    logger.info("Built processing graph with %d unit(s) for %s", len(units), base_name)
    return ProcessingGraph(
        base_name=base_name,
        shared_config=shared,
        units=tuple(units),
    )
