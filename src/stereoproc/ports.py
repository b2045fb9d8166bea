"""Camera sides, logical port names and topic qualification."""

from enum import Enum


class CameraSide(str, Enum):
    """One of the two symmetric monocular sub-graphs."""

    LEFT = "left"
    RIGHT = "right"


class LogicalPort(str, Enum):
    """Port names exchanged between processing units.

    Values are the concrete leaf names used on the wire.
    """

    IMAGE_RAW = "image_raw"
    IMAGE_MONO = "image_mono"
    IMAGE_COLOR = "image_color"
    CAMERA_INFO = "camera_info"
    IMAGE_RECT = "image_rect"
    IMAGE_RECT_COLOR = "image_rect_color"
    DISPARITY = "disparity"
    POINTS = "points"
    POINTS2 = "points2"


def qualify(side: CameraSide | None, port: LogicalPort) -> str:
    """Return the topic name of ``port`` under ``side``.

    Args:
        side: Camera side namespace, or None for ports shared by both sides.
        port: Logical port.

    Returns:
        ``"<side>/<port>"``, or the bare port name when side is None.
    """
    if side is None:
        return port.value
    return f"{side.value}/{port.value}"
