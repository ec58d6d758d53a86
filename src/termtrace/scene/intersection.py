"""Scene storage and closest-hit queries.

The scene holds two ordered collections in Taichi fields: opaque spheres
and light sources (spheres with a brightness). Kernels read them during a
frame; Python code adds objects and moves lights between frames.

Closest-hit selection tests every opaque sphere first, then every light.
The first hit found becomes the provisional best and later hits replace it
only when strictly closer, so on an exact tie the earlier object wins and
an opaque sphere wins over a light.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from termtrace.scene.intersection import add_sphere, add_light, clear_scene
    >>> clear_scene()
    >>> add_sphere((0.0, 0.0, 10.0), 4.0, reflectance=0.0)
    >>> add_light((20.0, 5.0, 5.0), 5.0, brightness=255.0)
    >>> # Use intersect_scene within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from termtrace.geometry.sphere import HitRecord, Sphere, hit_sphere

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class SceneHitRecord:
    """Record of a ray-scene intersection.

    Attributes:
        hit: Whether the ray intersected any object (1 if hit, 0 if miss).
        t: Distance along the ray to the hit. Only valid if hit == 1.
        point: The 3D hit point. Only valid if hit == 1.
        normal: The outward surface normal (unit length). Only valid if hit == 1.
        is_light: 1 if the closest object is a light source, 0 if opaque.
        object_index: Index of the hit object within its collection
            (spheres or lights). -1 on a miss.
        reflectance: Reflectance of the hit opaque sphere (0 for lights).
        brightness: Brightness of the hit light (0 for opaque spheres).
    """

    hit: ti.i32
    t: ti.f32
    point: vec3
    normal: vec3
    is_light: ti.i32
    object_index: ti.i32
    reflectance: ti.f32
    brightness: ti.f32


# Maximum number of objects supported in the scene
MAX_SPHERES = 256
MAX_LIGHTS = 256

# Opaque sphere storage: Structure of Arrays layout
sphere_centers = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
sphere_radii = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
sphere_reflectances = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
num_spheres = ti.field(dtype=ti.i32, shape=())

# Light source storage
light_centers = ti.Vector.field(3, dtype=ti.f32, shape=MAX_LIGHTS)
light_radii = ti.field(dtype=ti.f32, shape=MAX_LIGHTS)
light_brightnesses = ti.field(dtype=ti.f32, shape=MAX_LIGHTS)
num_lights = ti.field(dtype=ti.i32, shape=())


def _validate_radius(radius: float) -> None:
    if radius <= 0.0:
        raise ValueError(f"Sphere radius must be positive, got {radius}")


def clear_scene() -> None:
    """Clear all spheres and lights from the scene.

    Resets the object counts to zero. The field data is overwritten when new
    objects are added.
    """
    num_spheres[None] = 0
    num_lights[None] = 0


def add_sphere(
    center: tuple[float, float, float],
    radius: float,
    reflectance: float = 0.0,
) -> int:
    """Add an opaque sphere to the scene.

    Args:
        center: The center point of the sphere.
        radius: The radius of the sphere (must be positive).
        reflectance: Scatter tightness, must be non-negative.

    Returns:
        The index of the added sphere.

    Raises:
        ValueError: If radius is not positive or reflectance is negative.
        RuntimeError: If the maximum number of spheres is exceeded.
    """
    _validate_radius(radius)
    if reflectance < 0.0:
        raise ValueError(f"Reflectance must be non-negative, got {reflectance}")

    idx = num_spheres[None]
    if idx >= MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")
    sphere_centers[idx] = [center[0], center[1], center[2]]
    sphere_radii[idx] = radius
    sphere_reflectances[idx] = reflectance
    num_spheres[None] = idx + 1
    return idx


def add_light(
    center: tuple[float, float, float],
    radius: float,
    brightness: float,
) -> int:
    """Add a spherical light source to the scene.

    Args:
        center: The center point of the light.
        radius: The radius of the light sphere (must be positive).
        brightness: Emitted brightness, must be non-negative.

    Returns:
        The index of the added light.

    Raises:
        ValueError: If radius is not positive or brightness is negative.
        RuntimeError: If the maximum number of lights is exceeded.
    """
    _validate_radius(radius)
    if brightness < 0.0:
        raise ValueError(f"Brightness must be non-negative, got {brightness}")

    idx = num_lights[None]
    if idx >= MAX_LIGHTS:
        raise RuntimeError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded")
    light_centers[idx] = [center[0], center[1], center[2]]
    light_radii[idx] = radius
    light_brightnesses[idx] = brightness
    num_lights[None] = idx + 1
    return idx


def set_light_center(index: int, center: tuple[float, float, float]) -> None:
    """Move an existing light to a new center.

    Raises:
        IndexError: If no light exists at index.
    """
    if not 0 <= index < num_lights[None]:
        raise IndexError(f"Light index {index} out of range (have {num_lights[None]})")
    light_centers[index] = [center[0], center[1], center[2]]


def get_sphere_count() -> int:
    """Get the number of opaque spheres in the scene."""
    return int(num_spheres[None])


def get_light_count() -> int:
    """Get the number of lights in the scene."""
    return int(num_lights[None])


@ti.func
def _make_miss_record() -> SceneHitRecord:
    return SceneHitRecord(
        hit=0,
        t=0.0,
        point=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
        is_light=0,
        object_index=-1,
        reflectance=0.0,
        brightness=0.0,
    )


@ti.func
def _to_scene_hit_record(
    rec: HitRecord,
    is_light: ti.i32,
    object_index: ti.i32,
    reflectance: ti.f32,
    brightness: ti.f32,
) -> SceneHitRecord:
    return SceneHitRecord(
        hit=rec.hit,
        t=rec.t,
        point=rec.point,
        normal=rec.normal,
        is_light=is_light,
        object_index=object_index,
        reflectance=reflectance,
        brightness=brightness,
    )


@ti.func
def intersect_scene(ray_origin: vec3, ray_direction: vec3) -> SceneHitRecord:
    """Test a ray against every sphere and light, keeping the closest hit.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction of the ray (unit length).

    Returns:
        A SceneHitRecord for the closest object, or a miss record.
    """
    result = _make_miss_record()

    for i in range(num_spheres[None]):
        sphere = Sphere(
            center=sphere_centers[i],
            radius=sphere_radii[i],
            reflectance=sphere_reflectances[i],
        )
        rec = hit_sphere(ray_origin, ray_direction, sphere)
        if rec.hit == 1 and (result.hit == 0 or rec.t < result.t):
            result = _to_scene_hit_record(rec, 0, i, sphere_reflectances[i], 0.0)

    for i in range(num_lights[None]):
        sphere = Sphere(center=light_centers[i], radius=light_radii[i], reflectance=0.0)
        rec = hit_sphere(ray_origin, ray_direction, sphere)
        if rec.hit == 1 and (result.hit == 0 or rec.t < result.t):
            result = _to_scene_hit_record(rec, 1, i, 0.0, light_brightnesses[i])

    return result
