"""Pipeline assembly package for the stereo processing graph.

Provides the graph container, builder and runner that take the orchestrator
from configuration to a fully loaded set of units.
"""

from .builder import build_processing_graph
from .context import ProcessingGraph
from .runner import Orchestrator, assemble, propagate_graph

__all__ = [
    "Orchestrator",
    "ProcessingGraph",
    "assemble",
    "build_processing_graph",
    "propagate_graph",
]
