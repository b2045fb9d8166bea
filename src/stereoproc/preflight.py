"""Advisory checks on how the orchestrator was started."""

import logging
from collections.abc import Mapping

from .errors import PreflightError
from .interfaces import NameResolver

logger = logging.getLogger(__name__)

# Input name users commonly remap, which has no effect on the stereo graph.
RESERVED_ALIAS = "camera"
ROOT_NAMESPACE = "/"


class StaticNameResolver:
    """NameResolver backed by fixed values, e.g. from an OrchestratorConfig.

    Args:
        name: Unqualified orchestrator name.
        namespace: Namespace the orchestrator runs in.
        remappings: Caller-side name remappings.
    """

    def __init__(
        self,
        name: str,
        namespace: str = ROOT_NAMESPACE,
        remappings: Mapping[str, str] | None = None,
    ):
        self._name = name
        self._namespace = namespace or ROOT_NAMESPACE
        self._remappings = dict(remappings or {})

    @property
    def name(self) -> str:
        return f"{self._namespace.rstrip('/')}/{self._name}"

    @property
    def namespace(self) -> str:
        return self._namespace

    def remap(self, name: str) -> str:
        return self._remappings.get(name, name)


def run_preflight(resolver: NameResolver, strict: bool = False) -> list[str]:
    """Check for common startup mistakes.

    Remapping the reserved ``camera`` alias does nothing, since the units
    subscribe to ``left/...`` and ``right/...`` relative to the namespace.
    Running in the root namespace makes topic names collide with any second
    stereo pair. Both are reported as warnings and assembly goes on.

    Args:
        resolver: Naming collaborator.
        strict: Raise PreflightError instead of proceeding when any
            warning was emitted.

    Returns:
        The warning messages, empty when nothing looks wrong.

    Raises:
        PreflightError: In strict mode, if any check failed.
    """
    warnings = []

    remapped = resolver.remap(RESERVED_ALIAS)
    if remapped != RESERVED_ALIAS:
        suggested = remapped if remapped.startswith("/") else f"/{remapped}"
        warnings.append(
            f"Remapping '{RESERVED_ALIAS}' has no effect! Start the stereo "
            "orchestrator in the stereo namespace instead.\n"
            "Example command-line usage:\n"
            f"\t$ stereoproc assemble --namespace {suggested} config.yaml"
        )

    if resolver.namespace == ROOT_NAMESPACE:
        warnings.append(
            "Started in the global namespace! This is probably wrong. Start "
            "the stereo orchestrator in the stereo namespace.\n"
            "Example command-line usage:\n"
            "\t$ stereoproc assemble --namespace /my_stereo config.yaml"
        )

    for message in warnings:
        logger.warning(message)

    if strict and warnings:
        raise PreflightError(
            f"{len(warnings)} preflight check(s) failed in strict mode"
        )
    return warnings
