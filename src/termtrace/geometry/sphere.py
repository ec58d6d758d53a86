"""Sphere primitive with geometric ray-sphere intersection.

This module provides the Sphere dataclass used for both opaque spheres and
light sources, together with the intersection routine the path tracer runs
against every object on every bounce.

The intersection is solved geometrically rather than with the quadratic
formula: project the sphere center onto the ray, measure how far that
closest point lies from the center, and step back by half the chord. Only
the near root is computed, so a ray that starts inside a sphere reports the
entry point behind it, which is rejected as a miss because t < 0.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from termtrace.geometry.sphere import Sphere, hit_sphere
    >>> sphere = Sphere(center=ti.math.vec3(0, 0, 0), radius=4.0, reflectance=0.0)
    >>> # Use hit_sphere within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from termtrace.core.ray import divide, dot, length

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Near roots within this distance behind the origin count as hits at t = 0.
# A bounced ray starts on the surface it left, and f32 round-off puts its
# near root on either side of zero.
T_EPSILON = 1e-4


@ti.dataclass
class Sphere:
    """A sphere defined by center point, radius and reflectance.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (positive float).
        reflectance: Inverse scale of the diffuse scatter added on bounce.
            0 gives the widest scatter; lights ignore it.
    """

    center: vec3
    radius: ti.f32
    reflectance: ti.f32


@ti.dataclass
class HitRecord:
    """Record of a ray-sphere intersection.

    Attributes:
        hit: Whether the ray intersected the sphere (1 if hit, 0 if miss).
        t: Distance along the ray to the near intersection (>= 0).
            Only valid if hit == 1.
        point: The 3D point where the ray enters the sphere.
            Only valid if hit == 1.
        normal: The outward surface normal at the hit point (unit length).
            Only valid if hit == 1.
    """

    hit: ti.i32
    t: ti.f32
    point: vec3
    normal: vec3


@ti.func
def make_miss_record() -> HitRecord:
    """Create a HitRecord indicating no intersection."""
    return HitRecord(
        hit=0,
        t=0.0,
        point=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
    )


@ti.func
def hit_sphere(ray_origin: vec3, ray_direction: vec3, sphere: Sphere) -> HitRecord:
    """Intersect a ray with a sphere, returning the near hit.

    Steps:
        to_center = center - origin
        t_center = dot(to_center, direction)
        closest = origin + t_center * direction
        d = |closest - center|
        miss if d > radius
        t = t_center - sqrt(radius^2 - d^2)

    A tangent ray (d == radius) counts as a hit. A near root at t == 0 is a
    valid hit, and so is one within T_EPSILON behind the origin, which is
    clamped to t = 0 at the origin. Anything further behind is a miss, so a
    ray starting inside a sphere does not see it.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction of the ray (must be unit length).
        sphere: The sphere to test against.

    Returns:
        A HitRecord. Check the hit field to determine if intersection occurred.
    """
    result = make_miss_record()

    to_center = sphere.center - ray_origin
    t_center = dot(to_center, ray_direction)
    closest_point = ray_origin + t_center * ray_direction
    distance_from_center = length(closest_point - sphere.center)

    if distance_from_center <= sphere.radius:
        half_chord = ti.sqrt(
            sphere.radius * sphere.radius - distance_from_center * distance_from_center
        )
        t = t_center - half_chord
        if t >= -T_EPSILON:
            hit_point = ray_origin + t * ray_direction
            if t < 0.0:
                t = 0.0
                hit_point = ray_origin
            result = HitRecord(
                hit=1,
                t=t,
                point=hit_point,
                normal=divide(sphere.radius, hit_point - sphere.center),
            )

    return result


@ti.func
def make_sphere(center: vec3, radius: ti.f32, reflectance: ti.f32) -> Sphere:
    """Create a sphere from center, radius and reflectance."""
    return Sphere(center=center, radius=radius, reflectance=reflectance)
