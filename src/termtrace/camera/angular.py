"""Angular camera model for terminal ray generation.

Terminal cells are far taller than they are wide, and the scenes are viewed
through very wide fields of view (169 degrees horizontally by default), so
the camera does not project onto a flat image plane. Instead every pixel is
mapped to a yaw/pitch pair: the camera direction gives the base angles and
each pixel offsets them by its normalized distance from the image center
times the field of view.

    yaw   = atan2(dir.z, dir.x)             + ((x - width // 2) / width)  * hfov
    pitch = atan2(dir.y, hypot(dir.x, dir.z)) + ((y - height // 2) / height) * vfov
    ray   = (cos yaw cos pitch, sin pitch, sin yaw cos pitch)

Rays leave the camera position unjittered, so every sample of a pixel starts
with the same primary ray.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from termtrace.camera.angular import AngularCamera, setup_camera
    >>> camera = AngularCamera(position=(0.0, 1.0, -3.0), direction=(0.0, 0.0, 1.0))
    >>> setup_camera(camera)
"""

import math
from dataclasses import dataclass

import numpy as np
import taichi as ti
import taichi.math as tm

from termtrace.core.ray import Ray, make_ray, vec3

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass
class AngularCamera:
    """Configuration for an angular (yaw/pitch) camera.

    Attributes:
        position: Camera position in world space (x, y, z).
        direction: View direction. Normalized by setup_camera; must not be
            zero-length.
        horizontal_fov: Horizontal field of view in degrees.
        vertical_fov: Vertical field of view in degrees.
    """

    position: tuple[float, float, float] = (0.0, 1.0, -3.0)
    direction: tuple[float, float, float] = (0.0, 0.0, 1.0)
    horizontal_fov: float = 169.0
    vertical_fov: float = 90.0

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Check the FOVs and direction.

        Raises:
            ValueError: If a FOV is not positive or the direction is zero-length.
        """
        if self.horizontal_fov <= 0.0 or self.vertical_fov <= 0.0:
            raise ValueError(
                f"Field of view must be positive, got horizontal={self.horizontal_fov}, "
                f"vertical={self.vertical_fov}"
            )
        if np.linalg.norm(np.asarray(self.direction, dtype=np.float64)) == 0.0:
            raise ValueError("Camera direction must not be zero-length")


# =============================================================================
# Taichi Fields for Camera State
# =============================================================================

_camera_origin = ti.Vector.field(3, dtype=ti.f32, shape=())
_camera_yaw = ti.field(dtype=ti.f32, shape=())
_camera_pitch = ti.field(dtype=ti.f32, shape=())
_horizontal_fov = ti.field(dtype=ti.f32, shape=())  # Radians
_vertical_fov = ti.field(dtype=ti.f32, shape=())  # Radians


def setup_camera(camera: AngularCamera) -> None:
    """Initialize camera state from configuration.

    Normalizes the view direction, converts it to base yaw and pitch angles
    and stores everything in Taichi fields. Must be called before rendering.

    Args:
        camera: Camera configuration with position, direction and FOVs.

    Raises:
        ValueError: If the direction is zero-length or a FOV is not positive.
            AngularCamera is mutable, so this is checked again here.
    """
    camera.validate()
    direction = np.asarray(camera.direction, dtype=np.float64)
    direction = direction / np.linalg.norm(direction)

    _camera_origin[None] = list(camera.position)
    _camera_yaw[None] = math.atan2(direction[2], direction[0])
    _camera_pitch[None] = math.atan2(direction[1], math.hypot(direction[2], direction[0]))
    _horizontal_fov[None] = math.radians(camera.horizontal_fov)
    _vertical_fov[None] = math.radians(camera.vertical_fov)


# =============================================================================
# Ray Generation
# =============================================================================


@ti.func
def get_primary_ray(x: ti.i32, y: ti.i32, width: ti.i32, height: ti.i32) -> Ray:
    """Generate the camera ray for pixel (x, y).

    Args:
        x: Pixel column (0 = first column).
        y: Pixel row (0 = first row printed).
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        A Ray from the camera position with unit direction.
    """
    x_offset = ti.cast(x - width // 2, ti.f32) / ti.cast(width, ti.f32)
    y_offset = ti.cast(y - height // 2, ti.f32) / ti.cast(height, ti.f32)
    yaw = _camera_yaw[None] + x_offset * _horizontal_fov[None]
    pitch = _camera_pitch[None] + y_offset * _vertical_fov[None]

    direction = vec3(
        tm.cos(yaw) * tm.cos(pitch),
        tm.sin(pitch),
        tm.sin(yaw) * tm.cos(pitch),
    )
    return make_ray(_camera_origin[None], direction)


@ti.kernel
def _primary_ray_direction(x: ti.i32, y: ti.i32, width: ti.i32, height: ti.i32) -> vec3:
    return get_primary_ray(x, y, width, height).direction


def primary_ray_direction(
    x: int, y: int, width: int, height: int
) -> tuple[float, float, float]:
    """Get the primary ray direction for a pixel from Python.

    Useful for aiming test scenes and checking camera setup.
    """
    d = _primary_ray_direction(x, y, width, height)
    return (float(d[0]), float(d[1]), float(d[2]))


def get_camera_info() -> dict[str, object]:
    """Get current camera state for debugging.

    Returns:
        Dictionary with origin, yaw, pitch and both FOVs (radians).
    """
    origin = _camera_origin[None]
    return {
        "origin": (float(origin[0]), float(origin[1]), float(origin[2])),
        "yaw": float(_camera_yaw[None]),
        "pitch": float(_camera_pitch[None]),
        "horizontal_fov": float(_horizontal_fov[None]),
        "vertical_fov": float(_vertical_fov[None]),
    }
