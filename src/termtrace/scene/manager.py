"""Scene manager for building and animating scenes.

This module provides a high-level API over the Taichi scene fields in
scene.intersection. The SceneManager keeps a Python-side record of every
sphere and light, so scenes can be inspected, serialized and rebuilt, and it
is the one place where the animation driver moves lights between frames.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from termtrace.scene.manager import SceneManager
    >>> scene = SceneManager()
    >>> scene.add_sphere((0.0, 0.0, 10.0), 4.0)
    0
    >>> lamp = scene.add_light((20.0, 5.0, 5.0), 5.0, brightness=255.0)
    >>> scene.move_light(lamp, (0.0, 15.0, 5.0))
"""

from dataclasses import asdict, dataclass, field
from typing import Any

from termtrace.scene.intersection import (
    MAX_LIGHTS,
    MAX_SPHERES,
    add_light,
    add_sphere,
    clear_scene,
    get_light_count,
    get_sphere_count,
    set_light_center,
)


@dataclass
class SphereInfo:
    """Information about an opaque sphere in the scene.

    Attributes:
        sphere_index: The index in the sphere storage arrays.
        center: The center of the sphere.
        radius: The radius of the sphere.
        reflectance: Scatter tightness of the sphere.
    """

    sphere_index: int
    center: tuple[float, float, float]
    radius: float
    reflectance: float


@dataclass
class LightInfo:
    """Information about a light source in the scene.

    Attributes:
        light_index: The index in the light storage arrays.
        center: The current center of the light.
        radius: The radius of the light sphere.
        brightness: The emitted brightness.
    """

    light_index: int
    center: tuple[float, float, float]
    radius: float
    brightness: float


@dataclass
class SceneConfig:
    """Configuration for scene serialization.

    Attributes:
        spheres: List of sphere configurations.
        lights: List of light configurations.
    """

    spheres: list[dict[str, Any]] = field(default_factory=list)
    lights: list[dict[str, Any]] = field(default_factory=list)


class SceneManager:
    """Scene of opaque spheres and spherical lights.

    Creating a SceneManager clears the Taichi scene fields, so only one
    scene is live at a time.

    Attributes:
        spheres: List of SphereInfo for all opaque spheres.
        lights: List of LightInfo for all lights.
    """

    def __init__(self) -> None:
        """Initialize an empty scene."""
        self.spheres: list[SphereInfo] = []
        self.lights: list[LightInfo] = []
        self._clear_all()

    def _clear_all(self) -> None:
        clear_scene()
        self.spheres.clear()
        self.lights.clear()

    def clear(self) -> None:
        """Remove every sphere and light."""
        self._clear_all()

    # =========================================================================
    # Object Management
    # =========================================================================

    def add_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        reflectance: float = 0.0,
    ) -> int:
        """Add an opaque sphere.

        Args:
            center: The center point of the sphere.
            radius: The radius of the sphere (must be positive).
            reflectance: Scatter tightness (must be non-negative). Default 0,
                the widest scatter.

        Returns:
            The sphere index.

        Raises:
            ValueError: If radius or reflectance is invalid.
            RuntimeError: If the maximum number of spheres is exceeded.
        """
        center = _as_point(center)
        sphere_index = add_sphere(center, radius, reflectance)
        self.spheres.append(
            SphereInfo(
                sphere_index=sphere_index,
                center=center,
                radius=float(radius),
                reflectance=float(reflectance),
            )
        )
        return sphere_index

    def add_light(
        self,
        center: tuple[float, float, float],
        radius: float,
        brightness: float,
    ) -> int:
        """Add a spherical light source.

        Args:
            center: The center point of the light.
            radius: The radius of the light (must be positive).
            brightness: Emitted brightness (must be non-negative).

        Returns:
            The light index.

        Raises:
            ValueError: If radius or brightness is invalid.
            RuntimeError: If the maximum number of lights is exceeded.
        """
        center = _as_point(center)
        light_index = add_light(center, radius, brightness)
        self.lights.append(
            LightInfo(
                light_index=light_index,
                center=center,
                radius=float(radius),
                brightness=float(brightness),
            )
        )
        return light_index

    def move_light(self, light_index: int, center: tuple[float, float, float]) -> None:
        """Move a light to a new center.

        Raises:
            IndexError: If no light exists at light_index.
        """
        center = _as_point(center)
        set_light_center(light_index, center)
        self.lights[light_index].center = center

    def get_sphere_count(self) -> int:
        """Get the number of opaque spheres."""
        return get_sphere_count()

    def get_light_count(self) -> int:
        """Get the number of lights."""
        return get_light_count()

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_config(self) -> SceneConfig:
        """Export the scene to a SceneConfig."""
        return SceneConfig(
            spheres=[
                {"center": s.center, "radius": s.radius, "reflectance": s.reflectance}
                for s in self.spheres
            ],
            lights=[
                {"center": light.center, "radius": light.radius, "brightness": light.brightness}
                for light in self.lights
            ],
        )

    def from_config(self, config: SceneConfig) -> None:
        """Replace the scene with the contents of a SceneConfig.

        Every entry is checked before the current scene is cleared, so an
        invalid config leaves the scene untouched.

        Raises:
            ValueError: If any object is invalid.
            RuntimeError: If the config holds more objects than supported.
        """
        _validate_config(config)
        self.clear()
        for sphere in config.spheres:
            self.add_sphere(
                tuple(sphere["center"]),
                sphere["radius"],
                sphere.get("reflectance", 0.0),
            )
        for light in config.lights:
            self.add_light(tuple(light["center"]), light["radius"], light["brightness"])

    def to_dict(self) -> dict[str, Any]:
        """Export the scene as a plain dictionary."""
        return asdict(self.to_config())

    def from_dict(self, data: dict[str, Any]) -> None:
        """Replace the scene with the contents of a dictionary."""
        self.from_config(
            SceneConfig(spheres=data.get("spheres", []), lights=data.get("lights", []))
        )

    @staticmethod
    def get_max_spheres() -> int:
        """Get the maximum number of opaque spheres supported."""
        return MAX_SPHERES

    @staticmethod
    def get_max_lights() -> int:
        """Get the maximum number of lights supported."""
        return MAX_LIGHTS

    def __repr__(self) -> str:
        return f"SceneManager(spheres={len(self.spheres)}, lights={len(self.lights)})"


def _as_point(value: tuple[float, float, float]) -> tuple[float, float, float]:
    if len(value) != 3:
        raise ValueError(f"Expected 3 coordinates, got {len(value)}")
    return (float(value[0]), float(value[1]), float(value[2]))


def _validate_config(config: SceneConfig) -> None:
    if len(config.spheres) > MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")
    if len(config.lights) > MAX_LIGHTS:
        raise RuntimeError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded")

    for i, sphere in enumerate(config.spheres):
        _require_keys(sphere, ("center", "radius"), f"sphere {i}")
        _as_point(sphere["center"])
        if sphere["radius"] <= 0.0:
            raise ValueError(f"Sphere {i}: radius must be positive, got {sphere['radius']}")
        if sphere.get("reflectance", 0.0) < 0.0:
            raise ValueError(
                f"Sphere {i}: reflectance must be non-negative, got {sphere['reflectance']}"
            )

    for i, light in enumerate(config.lights):
        _require_keys(light, ("center", "radius", "brightness"), f"light {i}")
        _as_point(light["center"])
        if light["radius"] <= 0.0:
            raise ValueError(f"Light {i}: radius must be positive, got {light['radius']}")
        if light["brightness"] < 0.0:
            raise ValueError(
                f"Light {i}: brightness must be non-negative, got {light['brightness']}"
            )


def _require_keys(entry: dict[str, Any], keys: tuple[str, ...], label: str) -> None:
    missing = [key for key in keys if key not in entry]
    if missing:
        raise ValueError(f"{label.capitalize()} is missing {', '.join(missing)}")
