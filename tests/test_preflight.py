"""Tests for the preflight checks."""

import logging

import pytest

from stereoproc.config import OrchestratorConfig
from stereoproc.errors import PreflightError
from stereoproc.preflight import StaticNameResolver, run_preflight


def test_resolver_names():
    resolver = StaticNameResolver("proc", "/stereo", {"camera": "/cam"})
    assert resolver.name == "/stereo/proc"
    assert resolver.namespace == "/stereo"
    assert resolver.remap("camera") == "/cam"
    assert resolver.remap("image") == "image"


def test_root_resolver_name():
    assert StaticNameResolver("proc").name == "/proc"


def test_clean_start_has_no_warnings(resolver, caplog):
    with caplog.at_level(logging.WARNING):
        assert run_preflight(resolver) == []
    assert caplog.records == []


def test_camera_remap_warns(caplog):
    """Remapping the reserved alias warns but does not raise."""
    resolver = StaticNameResolver("proc", "/stereo", {"camera": "/my_stereo"})
    with caplog.at_level(logging.WARNING):
        warnings = run_preflight(resolver)
    assert len(warnings) == 1
    assert "Remapping 'camera' has no effect" in warnings[0]
    assert "--namespace /my_stereo" in warnings[0]
    assert "Remapping 'camera' has no effect" in caplog.text


def test_relative_camera_remap_suggests_absolute_namespace():
    """The suggested namespace is always one the config accepts."""
    resolver = StaticNameResolver("proc", "/stereo", {"camera": "my_stereo"})
    warnings = run_preflight(resolver)
    assert "--namespace /my_stereo " in warnings[0]
    assert OrchestratorConfig(namespace="/my_stereo").namespace == "/my_stereo"


def test_root_namespace_warns(caplog):
    resolver = StaticNameResolver("proc", "/")
    with caplog.at_level(logging.WARNING):
        warnings = run_preflight(resolver)
    assert len(warnings) == 1
    assert "global namespace" in warnings[0]


def test_both_warnings():
    resolver = StaticNameResolver("proc", "/", {"camera": "/cam"})
    assert len(run_preflight(resolver)) == 2


def test_strict_mode_raises(caplog):
    resolver = StaticNameResolver("proc", "/")
    with caplog.at_level(logging.WARNING):
        with pytest.raises(PreflightError, match="strict"):
            run_preflight(resolver, strict=True)
    # Warnings are still logged before aborting
    assert "global namespace" in caplog.text


def test_strict_mode_passes_clean_start(resolver):
    assert run_preflight(resolver, strict=True) == []
