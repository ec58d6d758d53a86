"""Camera module for primary ray generation.

Components:
    angular: Yaw/pitch camera mapping pixels to angles within two fields of view
"""

from .angular import (
    AngularCamera,
    get_camera_info,
    get_primary_ray,
    primary_ray_direction,
    setup_camera,
)

__all__ = [
    "AngularCamera",
    "setup_camera",
    "get_primary_ray",
    "primary_ray_direction",
    "get_camera_info",
]
