"""Exceptions raised while assembling the stereo processing graph."""


class GraphAssemblyError(Exception):
    """Base class for fatal graph assembly failures."""


class ConfigStoreUnavailableError(GraphAssemblyError):
    """The configuration store could not be read or written."""


class MissingRemappingError(GraphAssemblyError):
    """A mandatory port is unmapped, or a port is mapped to an empty topic."""

    def __init__(
        self, role: str, port: str, reason: str = "is mandatory but not remapped"
    ):
        self.role = role
        self.port = port
        super().__init__(f"Unit {role!r}: port {port!r} {reason}")


class NamespaceCollisionError(GraphAssemblyError):
    """Two units would be allocated the same instance name."""


class UnitLoadError(GraphAssemblyError):
    """The plugin loader failed to instantiate a unit."""

    def __init__(self, instance_name: str, unit_type: str, loaded: int):
        self.instance_name = instance_name
        self.unit_type = unit_type
        self.loaded = loaded
        super().__init__(
            f"Failed to load unit {instance_name!r} ({unit_type}) "
            f"after {loaded} unit(s) loaded"
        )


class PreflightError(GraphAssemblyError):
    """Preflight checks produced warnings while running in strict mode."""
