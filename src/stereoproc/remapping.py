"""Port remapping tables for each unit of the stereo graph."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from .errors import MissingRemappingError
from .ports import CameraSide, LogicalPort, qualify
from .units import UnitKind, UnitRole

logger = logging.getLogger(__name__)

_LEFT = CameraSide.LEFT
_RIGHT = CameraSide.RIGHT


@dataclass(frozen=True)
class PortBinding:
    """Wiring of one unit port to a topic.

    For monocular units ``side`` stays None and the role's camera side is
    applied to the topic. Stereo units pin the side on each binding since
    they consume both cameras; a None side there means the topic is shared.

    Attributes:
        port: Port name used inside the unit.
        topic: Topic the port is wired to. A plain string allows custom wiring.
        side: Camera side of a stereo-unit binding.
    """

    port: LogicalPort
    topic: LogicalPort | str
    side: CameraSide | None = None


def _same(port: LogicalPort, side: CameraSide | None = None) -> PortBinding:
    return PortBinding(port, port, side)


KIND_BINDINGS: dict[UnitKind, tuple[PortBinding, ...]] = {
    UnitKind.DEBAYER: (
        _same(LogicalPort.IMAGE_RAW),
        _same(LogicalPort.IMAGE_MONO),
        _same(LogicalPort.IMAGE_COLOR),
    ),
    UnitKind.RECTIFY_MONO: (
        _same(LogicalPort.IMAGE_MONO),
        _same(LogicalPort.CAMERA_INFO),
        _same(LogicalPort.IMAGE_RECT),
    ),
    # Same rectify implementation, fed the color stream.
    UnitKind.RECTIFY_COLOR: (
        PortBinding(LogicalPort.IMAGE_MONO, LogicalPort.IMAGE_COLOR),
        _same(LogicalPort.CAMERA_INFO),
        PortBinding(LogicalPort.IMAGE_RECT, LogicalPort.IMAGE_RECT_COLOR),
    ),
    # Loaded at the orchestrator's own name, so relative names already resolve.
    UnitKind.DISPARITY: (
        _same(LogicalPort.IMAGE_RECT, _LEFT),
        _same(LogicalPort.CAMERA_INFO, _LEFT),
        _same(LogicalPort.IMAGE_RECT, _RIGHT),
        _same(LogicalPort.CAMERA_INFO, _RIGHT),
        _same(LogicalPort.DISPARITY),
    ),
    UnitKind.POINT_CLOUD2: (
        _same(LogicalPort.IMAGE_RECT_COLOR, _LEFT),
        _same(LogicalPort.CAMERA_INFO, _LEFT),
        _same(LogicalPort.CAMERA_INFO, _RIGHT),
        _same(LogicalPort.DISPARITY),
        _same(LogicalPort.POINTS2),
    ),
    UnitKind.POINT_CLOUD: (
        _same(LogicalPort.IMAGE_RECT_COLOR, _LEFT),
        _same(LogicalPort.CAMERA_INFO, _LEFT),
        _same(LogicalPort.CAMERA_INFO, _RIGHT),
        _same(LogicalPort.DISPARITY),
        _same(LogicalPort.POINTS),
    ),
}

_RECTIFY_PORTS = ("image_mono", "camera_info", "image_rect")
_POINT_CLOUD_INPUTS = (
    "left/image_rect_color",
    "left/camera_info",
    "right/camera_info",
    "disparity",
)

# Ports each unit implementation cannot run without.
MANDATORY_PORTS: dict[UnitKind, tuple[str, ...]] = {
    UnitKind.DEBAYER: ("image_raw", "image_mono", "image_color"),
    UnitKind.RECTIFY_MONO: _RECTIFY_PORTS,
    UnitKind.RECTIFY_COLOR: _RECTIFY_PORTS,
    UnitKind.DISPARITY: (
        "left/image_rect",
        "left/camera_info",
        "right/image_rect",
        "right/camera_info",
        "disparity",
    ),
    UnitKind.POINT_CLOUD2: _POINT_CLOUD_INPUTS + ("points2",),
    UnitKind.POINT_CLOUD: _POINT_CLOUD_INPUTS + ("points",),
}


def _topic_name(side: CameraSide | None, topic: LogicalPort | str) -> str:
    if isinstance(topic, LogicalPort):
        return qualify(side, topic)
    if not topic or side is None:
        return topic
    return f"{side.value}/{topic}"


def build_remappings(
    role: UnitRole, bindings: Sequence[PortBinding] | None = None
) -> dict[str, str]:
    """Build the port-to-topic mapping of one unit.

    Monocular units get bare port names as keys and topics prefixed with
    their own camera side. Stereo units use side-qualified port names on
    both sides of the mapping.

    Args:
        role: Role of the unit.
        bindings: Port bindings to use instead of the fixed ones in
            KIND_BINDINGS.

    Returns:
        Mapping from port name to topic name.

    Raises:
        MissingRemappingError: If a mandatory port of the unit kind is absent
            or any port is bound to an empty topic.
        ValueError: If a port is bound more than once.
    """
    if bindings is None:
        bindings = KIND_BINDINGS[role.kind]

    remappings: dict[str, str] = {}
    for binding in bindings:
        if role.kind.monocular:
            key = binding.port.value
            value = _topic_name(role.side, binding.topic)
        else:
            key = qualify(binding.side, binding.port)
            value = _topic_name(binding.side, binding.topic)
        if key in remappings:
            raise ValueError(
                f"Unit {role.key!r}: port {key!r} is bound more than once"
            )
        if not value:
            raise MissingRemappingError(
                role.key, key, "is remapped to an empty topic"
            )
        remappings[key] = value

    for port in MANDATORY_PORTS[role.kind]:
        if port not in remappings:
            raise MissingRemappingError(role.key, port)

    logger.debug("Remappings for %s: %s", role, remappings)
    return remappings
