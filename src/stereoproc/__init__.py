"""Assembly of a modular stereo-vision processing graph."""

from .config import OrchestratorConfig
from .errors import (
    ConfigStoreUnavailableError,
    GraphAssemblyError,
    MissingRemappingError,
    NamespaceCollisionError,
    PreflightError,
    UnitLoadError,
)
from .interfaces import NameResolver, ParameterStore, UnitLoader
from .loader import DryRunUnitLoader, LoadReport, RegistryUnitLoader, load_graph
from .naming import INSTANCE_NAME_SUFFIXES, allocate_all, allocate_instance_name
from .params import (
    InMemoryParameterStore,
    SharedConfig,
    collect_shared_config,
    propagate,
)
from .pipeline import (
    Orchestrator,
    ProcessingGraph,
    assemble,
    build_processing_graph,
)
from .ports import CameraSide, LogicalPort, qualify
from .preflight import StaticNameResolver, run_preflight
from .remapping import PortBinding, build_remappings
from .units import FIXED_TOPOLOGY, UnitDescriptor, UnitKind, UnitRole

__version__ = "0.1.0"

__all__ = [
    "OrchestratorConfig",
    "GraphAssemblyError",
    "ConfigStoreUnavailableError",
    "MissingRemappingError",
    "NamespaceCollisionError",
    "PreflightError",
    "UnitLoadError",
    "NameResolver",
    "ParameterStore",
    "UnitLoader",
    "CameraSide",
    "LogicalPort",
    "qualify",
    "UnitKind",
    "UnitRole",
    "UnitDescriptor",
    "FIXED_TOPOLOGY",
    "INSTANCE_NAME_SUFFIXES",
    "allocate_instance_name",
    "allocate_all",
    "PortBinding",
    "build_remappings",
    "SharedConfig",
    "InMemoryParameterStore",
    "collect_shared_config",
    "propagate",
    "StaticNameResolver",
    "run_preflight",
    "LoadReport",
    "DryRunUnitLoader",
    "RegistryUnitLoader",
    "load_graph",
    "ProcessingGraph",
    "build_processing_graph",
    "assemble",
    "Orchestrator",
]
