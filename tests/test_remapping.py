"""Tests for remapping table construction."""

import pytest

from stereoproc.errors import MissingRemappingError
from stereoproc.ports import CameraSide, LogicalPort, qualify
from stereoproc.remapping import (
    KIND_BINDINGS,
    MANDATORY_PORTS,
    PortBinding,
    build_remappings,
)
from stereoproc.units import (
    DEBAYER_LEFT,
    DEBAYER_RIGHT,
    DISPARITY,
    FIXED_TOPOLOGY,
    POINT_CLOUD,
    POINT_CLOUD2,
    RECTIFY_COLOR_LEFT,
    RECTIFY_COLOR_RIGHT,
    RECTIFY_MONO_LEFT,
    UnitKind,
)


def test_qualify():
    assert qualify(CameraSide.LEFT, LogicalPort.IMAGE_RAW) == "left/image_raw"
    assert qualify(None, LogicalPort.DISPARITY) == "disparity"


def test_debayer_left():
    """Debayer ports are prefixed with the camera side."""
    assert build_remappings(DEBAYER_LEFT) == {
        "image_raw": "left/image_raw",
        "image_mono": "left/image_mono",
        "image_color": "left/image_color",
    }


def test_rectify_mono_left():
    assert build_remappings(RECTIFY_MONO_LEFT) == {
        "image_mono": "left/image_mono",
        "camera_info": "left/camera_info",
        "image_rect": "left/image_rect",
    }


def test_rectify_color_feeds_color_stream():
    """The color rectifier reuses rectify's ports but is wired to color topics."""
    assert build_remappings(RECTIFY_COLOR_RIGHT) == {
        "image_mono": "right/image_color",
        "camera_info": "right/camera_info",
        "image_rect": "right/image_rect_color",
    }


def test_disparity_is_identity_over_both_sides():
    remappings = build_remappings(DISPARITY)
    assert remappings == {
        "left/image_rect": "left/image_rect",
        "left/camera_info": "left/camera_info",
        "right/image_rect": "right/image_rect",
        "right/camera_info": "right/camera_info",
        "disparity": "disparity",
    }


@pytest.mark.parametrize(
    "role, output", [(POINT_CLOUD2, "points2"), (POINT_CLOUD, "points")]
)
def test_point_cloud_ports(role, output):
    """Point clouds read left color, both camera infos and the disparity."""
    remappings = build_remappings(role)
    assert set(remappings.values()) == {
        "left/image_rect_color",
        "left/camera_info",
        "right/camera_info",
        "disparity",
        output,
    }


@pytest.mark.parametrize(
    "role",
    [r for r in FIXED_TOPOLOGY if r.side is not None],
    ids=lambda r: r.key,
)
def test_monocular_units_stay_on_their_side(role):
    """A monocular unit only references topics of its own side."""
    own = f"{role.side.value}/"
    other = "right/" if role.side is CameraSide.LEFT else "left/"
    for topic in build_remappings(role).values():
        assert topic.startswith(own)
        assert other not in topic


def test_sides_are_structurally_identical():
    """Left and right tables differ only in the side prefix."""
    for left, right in [
        (DEBAYER_LEFT, DEBAYER_RIGHT),
        (RECTIFY_COLOR_LEFT, RECTIFY_COLOR_RIGHT),
    ]:
        left_map = build_remappings(left)
        right_map = build_remappings(right)
        assert left_map.keys() == right_map.keys()
        for port in left_map:
            assert left_map[port].replace("left/", "right/") == right_map[port]


def test_fixed_bindings_cover_mandatory_ports():
    """Every kind's fixed bindings provide exactly its mandatory ports."""
    for role in FIXED_TOPOLOGY:
        assert set(build_remappings(role)) == set(MANDATORY_PORTS[role.kind])


def test_missing_mandatory_port_fails_closed():
    """An absent mandatory port raises instead of falling back to a default."""
    bindings = KIND_BINDINGS[UnitKind.RECTIFY_MONO][:2]
    with pytest.raises(MissingRemappingError, match="image_rect") as exc_info:
        build_remappings(RECTIFY_MONO_LEFT, bindings)
    assert exc_info.value.port == "image_rect"
    assert exc_info.value.role == "rectify_mono_left"


def test_empty_topic_fails_closed():
    """A mandatory port bound to an empty topic is rejected."""
    bindings = (
        PortBinding(LogicalPort.IMAGE_MONO, LogicalPort.IMAGE_MONO),
        PortBinding(LogicalPort.CAMERA_INFO, ""),
        PortBinding(LogicalPort.IMAGE_RECT, LogicalPort.IMAGE_RECT),
    )
    with pytest.raises(MissingRemappingError, match="empty topic"):
        build_remappings(RECTIFY_MONO_LEFT, bindings)


def test_empty_topic_on_optional_port_rejected():
    """An extra port bound to an empty topic never reaches the table."""
    bindings = KIND_BINDINGS[UnitKind.DEBAYER] + (
        PortBinding(LogicalPort.CAMERA_INFO, ""),
    )
    with pytest.raises(MissingRemappingError, match="empty topic") as exc_info:
        build_remappings(DEBAYER_LEFT, bindings)
    assert exc_info.value.port == "camera_info"


def test_custom_string_topic_gets_side_prefix():
    bindings = (
        PortBinding(LogicalPort.IMAGE_MONO, "image_gray"),
        PortBinding(LogicalPort.CAMERA_INFO, LogicalPort.CAMERA_INFO),
        PortBinding(LogicalPort.IMAGE_RECT, LogicalPort.IMAGE_RECT),
    )
    remappings = build_remappings(RECTIFY_MONO_LEFT, bindings)
    assert remappings["image_mono"] == "left/image_gray"


def test_duplicate_binding_rejected():
    bindings = KIND_BINDINGS[UnitKind.DEBAYER] + (
        PortBinding(LogicalPort.IMAGE_RAW, LogicalPort.IMAGE_RAW),
    )
    with pytest.raises(ValueError, match="more than once"):
        build_remappings(DEBAYER_LEFT, bindings)
