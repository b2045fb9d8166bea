"""Graph assembly runner: orchestrates the startup sequence and public API."""

import logging

from ..config import OrchestratorConfig
from ..errors import UnitLoadError
from ..interfaces import NameResolver, ParameterStore, UnitLoader
from ..loader import DryRunUnitLoader, load_graph
from ..params import (
    InMemoryParameterStore,
    collect_shared_config,
    propagate,
    set_param,
)
from ..preflight import StaticNameResolver, run_preflight
from .builder import build_processing_graph
from .context import ProcessingGraph

logger = logging.getLogger(__name__)


def propagate_graph(graph: ProcessingGraph, store: ParameterStore) -> int:
    """Publish each eligible unit's shared settings into its namespace.

    Units that read no shared settings (debayer) are skipped entirely.

    Returns:
        Total number of values written.
    """
    writes = 0
    for unit in graph:
        if not unit.role.shared_param_keys:
            continue
        writes += propagate(unit.private_params, unit.instance_name, store)
    return writes


def assemble(
    resolver: NameResolver,
    store: ParameterStore,
    loader: UnitLoader,
    strict: bool = False,
) -> ProcessingGraph:
    """Assemble and load the full stereo processing graph.

    Runs preflight checks, collects the shared configuration, builds all
    unit descriptors, propagates configuration into every eligible unit's
    namespace and finally loads the units in order. Configuration is fully
    propagated before the first unit loads.

    Args:
        resolver: Naming collaborator.
        store: Configuration store.
        loader: Plugin loader.
        strict: Treat preflight warnings as fatal.

    Returns:
        The loaded ProcessingGraph.

    Raises:
        PreflightError: In strict mode, if a preflight check failed.
        ConfigStoreUnavailableError: If the store cannot be read or written.
        MissingRemappingError: If a unit's remapping table is incomplete.
        UnitLoadError: If any unit fails to load.
    """
    run_preflight(resolver, strict=strict)

    base_name = resolver.name
    shared = collect_shared_config(store, base_name)
    graph = build_processing_graph(base_name, shared)

    writes = propagate_graph(graph, store)
    logger.info("Propagated %d parameter value(s) in total", writes)

    report = load_graph(graph.units, loader)
    if not report.ok:
        raise UnitLoadError(
            report.failed.instance_name,
            report.failed.unit_type,
            loaded=len(report.loaded),
        ) from report.error

    logger.info("Stereo graph for %s is up (%d units)", base_name, len(graph))
    return graph


class Orchestrator:
    """Stereo processing graph orchestrator.

    Primary programmatic entry point. Without a loader the graph is
    assembled as a dry run; without a store an in-memory one is used.

    Example:
        orchestrator = Orchestrator(config)
        graph = orchestrator.run()
    """

    def __init__(
        self,
        config: OrchestratorConfig,
        loader: UnitLoader | None = None,
        store: ParameterStore | None = None,
    ):
        self.config = config
        self.loader = loader if loader is not None else DryRunUnitLoader()
        self.store = store if store is not None else InMemoryParameterStore()
        self.graph: ProcessingGraph | None = None

    @property
    def resolver(self) -> StaticNameResolver:
        return StaticNameResolver(
            self.config.name, self.config.namespace, self.config.remappings
        )

    def _seed_store(self) -> None:
        for key, value in self.config.private_parameters().items():
            set_param(self.store, self.config.resolved_name, key, value)

    def plan(self) -> ProcessingGraph:
        """Build the processing graph without running preflight or loading."""
        self._seed_store()
        shared = collect_shared_config(self.store, self.config.resolved_name)
        return build_processing_graph(self.config.resolved_name, shared)

    def run(self) -> ProcessingGraph:
        """Assemble and load the graph.

        Equivalent to calling assemble() with collaborators built from the
        configuration.
        """
        self._seed_store()
        self.graph = assemble(
            self.resolver,
            self.store,
            self.loader,
            strict=self.config.strict_preflight,
        )
        return self.graph
