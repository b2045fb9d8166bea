"""Deterministic instance names for the units of the stereo graph."""

import logging
from collections.abc import Iterable

from .errors import NamespaceCollisionError
from .units import (
    DEBAYER_LEFT,
    DEBAYER_RIGHT,
    DISPARITY,
    POINT_CLOUD,
    POINT_CLOUD2,
    RECTIFY_COLOR_LEFT,
    RECTIFY_COLOR_RIGHT,
    RECTIFY_MONO_LEFT,
    RECTIFY_MONO_RIGHT,
    UnitRole,
)

logger = logging.getLogger(__name__)

# Suffix appended to the orchestrator's resolved name for each role.
# DISPARITY and POINT_CLOUD are external API: other tools read parameters
# under these exact names, so they must not be normalized.
DISPARITY_SUFFIX = ""
LEGACY_POINT_CLOUD_SUFFIX = "_point_cloud"

INSTANCE_NAME_SUFFIXES: dict[UnitRole, str] = {
    DEBAYER_LEFT: "_debayer_left",
    RECTIFY_MONO_LEFT: "_rectify_mono_left",
    RECTIFY_COLOR_LEFT: "_rectify_color_left",
    DEBAYER_RIGHT: "_debayer_right",
    RECTIFY_MONO_RIGHT: "_rectify_mono_right",
    RECTIFY_COLOR_RIGHT: "_rectify_color_right",
    DISPARITY: DISPARITY_SUFFIX,
    POINT_CLOUD2: "_point_cloud2",
    POINT_CLOUD: LEGACY_POINT_CLOUD_SUFFIX,
}


def allocate_instance_name(base_name: str, role: UnitRole) -> str:
    """Derive the instance name of a unit.

    Args:
        base_name: Resolved name of the orchestrator, e.g. ``/stereo/proc``.
        role: Role of the unit.

    Returns:
        ``base_name`` followed by the role's suffix.

    Raises:
        ValueError: If base_name is empty.
        KeyError: If the role has no entry in INSTANCE_NAME_SUFFIXES.
    """
    if not base_name:
        raise ValueError("base_name must be non-empty")
    return base_name + INSTANCE_NAME_SUFFIXES[role]


def allocate_all(base_name: str, roles: Iterable[UnitRole]) -> dict[UnitRole, str]:
    """Allocate instance names for a batch of roles.

    Raises:
        NamespaceCollisionError: If two roles map to the same instance name.
    """
    names: dict[UnitRole, str] = {}
    owners: dict[str, UnitRole] = {}
    for role in roles:
        name = allocate_instance_name(base_name, role)
        if name in owners:
            raise NamespaceCollisionError(
                f"Roles {owners[name]} and {role} both map to instance name {name!r}"
            )
        owners[name] = role
        names[role] = name
        logger.debug("Allocated %s -> %s", role, name)
    return names
