"""Pytest configuration for termtrace tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu)
    yield


@pytest.fixture(autouse=True)
def clear_all_scene_data():
    """Clear scene data and the frame buffer around each test."""
    # Import here so the Taichi fields are created after ti.init()
    from termtrace.core.integrator import clear_render_target
    from termtrace.scene.intersection import clear_scene

    def _clear_all():
        clear_scene()
        clear_render_target()

    _clear_all()
    yield
    _clear_all()


@pytest.fixture
def forward_camera():
    """Camera at the origin looking down +z, set up for rendering."""
    from termtrace.camera.angular import AngularCamera, setup_camera

    camera = AngularCamera(position=(0.0, 0.0, 0.0), direction=(0.0, 0.0, 1.0))
    setup_camera(camera)
    return camera
