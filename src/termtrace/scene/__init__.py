"""Scene module.

Components:
    intersection: Taichi field storage and closest-hit queries
    manager: Python-side scene manager (build, move lights, serialize)
    light_show: The default animated scene
"""

from .intersection import (
    MAX_LIGHTS,
    MAX_SPHERES,
    SceneHitRecord,
    add_light,
    add_sphere,
    clear_scene,
    get_light_count,
    get_sphere_count,
    intersect_scene,
    set_light_center,
)
from .light_show import (
    FLOOR_INDEX,
    LAMP_A_INDEX,
    LAMP_B_INDEX,
    LightShowParams,
    create_light_show_scene,
    lamp_positions,
    update_light_show,
)
from .manager import LightInfo, SceneConfig, SceneManager, SphereInfo

__all__ = [
    # Intersection module
    "SceneHitRecord",
    "add_sphere",
    "add_light",
    "set_light_center",
    "clear_scene",
    "get_sphere_count",
    "get_light_count",
    "intersect_scene",
    "MAX_SPHERES",
    "MAX_LIGHTS",
    # Manager module
    "SceneManager",
    "SphereInfo",
    "LightInfo",
    "SceneConfig",
    # Light show scene
    "LightShowParams",
    "create_light_show_scene",
    "update_light_show",
    "lamp_positions",
    "LAMP_A_INDEX",
    "LAMP_B_INDEX",
    "FLOOR_INDEX",
]
