"""Processing-unit roles, the fixed stereo topology and unit descriptors."""

from dataclasses import dataclass, field
from enum import Enum

from .params import APPROXIMATE_SYNC, QUEUE_SIZE, SharedConfig
from .ports import CameraSide


class UnitKind(str, Enum):
    """Kinds of processing unit in the stereo graph."""

    DEBAYER = "debayer"
    RECTIFY_MONO = "rectify_mono"
    RECTIFY_COLOR = "rectify_color"
    DISPARITY = "disparity"
    POINT_CLOUD2 = "point_cloud2"
    POINT_CLOUD = "point_cloud"

    @property
    def monocular(self) -> bool:
        """True for kinds instantiated once per camera side."""
        return self in MONOCULAR_KINDS


MONOCULAR_KINDS = frozenset(
    {UnitKind.DEBAYER, UnitKind.RECTIFY_MONO, UnitKind.RECTIFY_COLOR}
)

# Implementation types handed to the plugin loader.
UNIT_TYPES = {
    UnitKind.DEBAYER: "image_proc/debayer",
    UnitKind.RECTIFY_MONO: "image_proc/rectify",
    UnitKind.RECTIFY_COLOR: "image_proc/rectify",
    UnitKind.DISPARITY: "stereo_image_proc/disparity",
    UnitKind.POINT_CLOUD2: "stereo_image_proc/point_cloud2",
    UnitKind.POINT_CLOUD: "stereo_image_proc/point_cloud",
}

# Shared configuration keys each kind reads from its private namespace.
# Only the stereo stage cares about the synchronization policy.
SHARED_PARAM_KEYS: dict[UnitKind, tuple[str, ...]] = {
    UnitKind.DEBAYER: (),
    UnitKind.RECTIFY_MONO: (QUEUE_SIZE,),
    UnitKind.RECTIFY_COLOR: (QUEUE_SIZE,),
    UnitKind.DISPARITY: (QUEUE_SIZE, APPROXIMATE_SYNC),
    UnitKind.POINT_CLOUD2: (QUEUE_SIZE, APPROXIMATE_SYNC),
    UnitKind.POINT_CLOUD: (QUEUE_SIZE, APPROXIMATE_SYNC),
}


@dataclass(frozen=True)
class UnitRole:
    """A unit kind bound to a camera side (None for the shared stereo units)."""

    kind: UnitKind
    side: CameraSide | None = None

    def __post_init__(self):
        if self.kind.monocular and self.side is None:
            raise ValueError(f"{self.kind.value} units need a camera side")
        if not self.kind.monocular and self.side is not None:
            raise ValueError(f"{self.kind.value} units are shared by both sides")

    @property
    def key(self) -> str:
        """Role string, e.g. ``rectify_mono_right`` or ``disparity``."""
        if self.side is None:
            return self.kind.value
        return f"{self.kind.value}_{self.side.value}"

    @property
    def unit_type(self) -> str:
        return UNIT_TYPES[self.kind]

    @property
    def shared_param_keys(self) -> tuple[str, ...]:
        return SHARED_PARAM_KEYS[self.kind]

    def __str__(self) -> str:
        return self.key


DEBAYER_LEFT = UnitRole(UnitKind.DEBAYER, CameraSide.LEFT)
RECTIFY_MONO_LEFT = UnitRole(UnitKind.RECTIFY_MONO, CameraSide.LEFT)
RECTIFY_COLOR_LEFT = UnitRole(UnitKind.RECTIFY_COLOR, CameraSide.LEFT)
DEBAYER_RIGHT = UnitRole(UnitKind.DEBAYER, CameraSide.RIGHT)
RECTIFY_MONO_RIGHT = UnitRole(UnitKind.RECTIFY_MONO, CameraSide.RIGHT)
RECTIFY_COLOR_RIGHT = UnitRole(UnitKind.RECTIFY_COLOR, CameraSide.RIGHT)
DISPARITY = UnitRole(UnitKind.DISPARITY)
POINT_CLOUD2 = UnitRole(UnitKind.POINT_CLOUD2)
POINT_CLOUD = UnitRole(UnitKind.POINT_CLOUD)

# Load order: each side's monocular chain, then the stereo stage.
FIXED_TOPOLOGY: tuple[UnitRole, ...] = (
    DEBAYER_LEFT,
    RECTIFY_MONO_LEFT,
    RECTIFY_COLOR_LEFT,
    DEBAYER_RIGHT,
    RECTIFY_MONO_RIGHT,
    RECTIFY_COLOR_RIGHT,
    DISPARITY,
    POINT_CLOUD2,
    POINT_CLOUD,
)


@dataclass(frozen=True)
class UnitDescriptor:
    """Everything the plugin loader needs to instantiate one unit.

    Attributes:
        role: Role of the unit in the stereo graph.
        unit_type: Implementation identifier resolved by the plugin loader.
        instance_name: Unique instance name, derived by the namespace allocator.
        remappings: Port name to topic name mapping.
        private_params: Shared configuration published under ``instance_name``
            before the unit is loaded.
    """

    role: UnitRole
    unit_type: str
    instance_name: str
    remappings: dict[str, str] = field(default_factory=dict)
    private_params: SharedConfig = field(default_factory=SharedConfig)
