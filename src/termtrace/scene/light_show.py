"""Light show scene: opaque spheres lit by two orbiting lamps.

This is the default animated scene. A row of grey spheres sits in front of
the camera, a huge dim light sphere far below stands in for a glowing floor,
and two small bright lights circle the spheres on different orbits:

    lamp A: (20 sin t, 5 + 10 cos t, 5)
    lamp B: (0, 20 cos 0.77t, 10 + 20 sin 0.77t)

Light indices are fixed: lamp A is 0, the floor is 1, lamp B is 2.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from termtrace.scene.light_show import create_light_show_scene, update_light_show
    >>>
    >>> scene, camera = create_light_show_scene()
    >>> update_light_show(scene, 1.5)
"""

import math
from dataclasses import dataclass

from termtrace.camera.angular import AngularCamera
from termtrace.scene.manager import SceneManager

# Light indices in the light show scene
LAMP_A_INDEX = 0
FLOOR_INDEX = 1
LAMP_B_INDEX = 2

# Angular speed of lamp B relative to lamp A
LAMP_B_SPEED = 0.77


@dataclass
class LightShowParams:
    """Parameters for the light show scene.

    Attributes:
        sphere_count: Number of opaque spheres in the row.
        sphere_radius: Radius of each opaque sphere.
        sphere_reflectance: Reflectance of each opaque sphere.
        sphere_spacing: Distance between neighbouring sphere centers along x.
        sphere_depth: z coordinate of the sphere row.
        lamp_radius: Radius of both orbiting lamps.
        lamp_brightness: Brightness of both orbiting lamps.
        floor_radius: Radius of the floor light.
        floor_depth: y coordinate of the floor light's center.
        floor_brightness: Brightness of the floor light.
    """

    sphere_count: int = 1
    sphere_radius: float = 4.0
    sphere_reflectance: float = 0.0
    sphere_spacing: float = 10.0
    sphere_depth: float = 10.0
    lamp_radius: float = 5.0
    lamp_brightness: float = 255.0
    floor_radius: float = 1000.0
    floor_depth: float = -1200.0
    floor_brightness: float = 100.0


def lamp_positions(
    time: float,
) -> tuple[tuple[float, float, float], tuple[float, float, float]]:
    """Compute the centers of lamp A and lamp B at a simulated time."""
    lamp_a = (20.0 * math.sin(time), 5.0 + 10.0 * math.cos(time), 5.0)
    lamp_b = (
        0.0,
        20.0 * math.cos(time * LAMP_B_SPEED),
        10.0 + 20.0 * math.sin(time * LAMP_B_SPEED),
    )
    return lamp_a, lamp_b


def create_light_show_scene(
    params: LightShowParams | None = None,
) -> tuple[SceneManager, AngularCamera]:
    """Create the light show scene at time 0.

    Args:
        params: Optional LightShowParams. If None, uses the defaults.

    Returns:
        A tuple of (SceneManager, AngularCamera).
    """
    if params is None:
        params = LightShowParams()

    scene = SceneManager()

    for i in range(params.sphere_count):
        x = (i - params.sphere_count // 2) * params.sphere_spacing
        scene.add_sphere(
            center=(x, 0.0, params.sphere_depth),
            radius=params.sphere_radius,
            reflectance=params.sphere_reflectance,
        )

    lamp_a, lamp_b = lamp_positions(0.0)
    scene.add_light(lamp_a, params.lamp_radius, params.lamp_brightness)
    scene.add_light(
        (0.0, params.floor_depth, 0.0),
        params.floor_radius,
        params.floor_brightness,
    )
    scene.add_light(lamp_b, params.lamp_radius, params.lamp_brightness)

    return scene, AngularCamera()


def update_light_show(scene: SceneManager, time: float) -> None:
    """Move both lamps to their positions at the given simulated time."""
    lamp_a, lamp_b = lamp_positions(time)
    scene.move_light(LAMP_A_INDEX, lamp_a)
    scene.move_light(LAMP_B_INDEX, lamp_b)
