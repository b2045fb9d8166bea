"""Tests for instance name allocation."""

from unittest.mock import patch

import pytest

from stereoproc.errors import NamespaceCollisionError
from stereoproc.naming import (
    INSTANCE_NAME_SUFFIXES,
    allocate_all,
    allocate_instance_name,
)
from stereoproc.units import (
    DEBAYER_LEFT,
    DISPARITY,
    FIXED_TOPOLOGY,
    POINT_CLOUD,
    POINT_CLOUD2,
    RECTIFY_COLOR_RIGHT,
    RECTIFY_MONO_RIGHT,
)

BASE = "/stereo/stereo_image_proc"


def test_suffix_table_covers_fixed_topology():
    """Every role in the fixed topology has a suffix entry."""
    assert set(INSTANCE_NAME_SUFFIXES) == set(FIXED_TOPOLOGY)


@pytest.mark.parametrize(
    "role, expected",
    [
        (DEBAYER_LEFT, BASE + "_debayer_left"),
        (RECTIFY_MONO_RIGHT, BASE + "_rectify_mono_right"),
        (RECTIFY_COLOR_RIGHT, BASE + "_rectify_color_right"),
        (POINT_CLOUD2, BASE + "_point_cloud2"),
    ],
)
def test_suffixed_names(role, expected):
    """Regular roles are suffixed with an underscore and the role string."""
    assert allocate_instance_name(BASE, role) == expected


def test_disparity_uses_base_name():
    """The disparity unit keeps the orchestrator's own name."""
    assert allocate_instance_name(BASE, DISPARITY) == BASE


def test_legacy_point_cloud_name():
    """The legacy point cloud keeps its historical suffix."""
    assert allocate_instance_name(BASE, POINT_CLOUD) == BASE + "_point_cloud"


def test_allocation_is_deterministic():
    """Same inputs give the same name."""
    for role in FIXED_TOPOLOGY:
        assert allocate_instance_name(BASE, role) == allocate_instance_name(
            BASE, role
        )


def test_allocation_is_injective():
    """The nine fixed roles never share an instance name."""
    names = allocate_all(BASE, FIXED_TOPOLOGY)
    assert len(names) == 9
    assert len(set(names.values())) == 9


def test_empty_base_name_rejected():
    with pytest.raises(ValueError, match="non-empty"):
        allocate_instance_name("", DEBAYER_LEFT)


def test_duplicate_role_collides():
    """Allocating the same role twice is a collision."""
    with pytest.raises(NamespaceCollisionError):
        allocate_all(BASE, [DEBAYER_LEFT, DEBAYER_LEFT])


def test_colliding_suffixes_detected():
    """A suffix table that maps two roles to one name is rejected."""
    with patch.dict(INSTANCE_NAME_SUFFIXES, {POINT_CLOUD: ""}):
        with pytest.raises(NamespaceCollisionError, match="disparity"):
            allocate_all(BASE, FIXED_TOPOLOGY)
