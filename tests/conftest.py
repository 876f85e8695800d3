"""
Pytest fixtures and configuration for raytracer tests.

The `scene` fixture is the reference end-to-end scene: a green opaque
sphere resting on a 32-unit checkerboard, lit from above and behind.
"""

import numpy as np
import pytest
from raytracer.core import Scene
from raytracer.geometry import Color, Point
from raytracer.intersections import Floor, Sphere


GREEN = Color(0, 150, 0)
SKY = Color(135, 206, 235)
FIRST = Color(50, 40, 30)
SECOND = Color(10, 20, 30)


@pytest.fixture
def origin():
    return Point(0.0, 0.0, 0.0)


@pytest.fixture
def floor():
    """Standard checkerboard floor."""
    return Floor(32.0, FIRST, SECOND)


@pytest.fixture
def green_sphere():
    """Opaque sphere touching the floor at (-90, 10, 0)."""
    return Sphere(center=Point(-90.0, 10.0, 10.0), radius=10.0, color=GREEN)


@pytest.fixture
def scene(floor, green_sphere):
    return Scene(
        floor=floor,
        light_source=Point(-200.0, 10.0, 200.0),
        sky_color=SKY,
        spheres=[green_sphere],
        eye=Point(30.0, 30.0, 30.0),
    )


@pytest.fixture
def mirror_scene(floor):
    """Single mirror sphere level with the eye, light straight above the screen."""
    return Scene(
        floor=floor,
        light_source=Point(0.0, 0.0, 100.0),
        sky_color=SKY,
        spheres=[Sphere(Point(-50.0, 0.0, 20.0), 10.0, GREEN, is_mirror=True)],
        eye=Point(30.0, 0.0, 20.0),
    )


def assert_points_close(actual, expected, atol=1e-9, err_msg=""):
    """Assert that two Points match coordinate-wise."""
    np.testing.assert_allclose(
        actual.as_array(), expected.as_array(), atol=atol,
        err_msg=f"Point mismatch: {err_msg}"
    )
