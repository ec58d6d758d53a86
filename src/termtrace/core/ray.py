"""Ray data structure and vector algebra for the terminal path tracer.

This module provides the Ray dataclass and the small set of vector helpers
the tracer needs. Every helper is a pure function that returns a new value,
so the same vector can safely be passed as several arguments.

Zero-length vectors are normalized to the zero vector instead of producing
NaN. The path tracer relies on this when a random perturbation happens to
cancel out.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> origin = ti.math.vec3(0.0, 1.0, -3.0)
    >>> direction = ti.math.vec3(0.0, 0.0, 1.0)
    >>> ray = Ray(origin=origin, direction=direction)
    >>> point = ray_at(ray, 6.0)  # Point 6 units along the ray
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction of the ray (vec3). Must be unit length;
            intersection distances are measured in multiples of it.
    """

    origin: vec3
    direction: vec3


@ti.func
def ray_at(ray: Ray, t: ti.f32) -> vec3:
    """Compute the point along the ray at parameter t."""
    return ray.origin + t * ray.direction


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    """Create a ray from origin and direction."""
    return Ray(origin=origin, direction=direction)


# =============================================================================
# Vector Algebra
# =============================================================================


@ti.func
def add(a: vec3, b: vec3) -> vec3:
    """Component-wise sum a + b."""
    return a + b


@ti.func
def subtract(a: vec3, b: vec3) -> vec3:
    """Component-wise difference a - b."""
    return a - b


@ti.func
def scale(k: ti.f32, v: vec3) -> vec3:
    """Multiply every component of v by k."""
    return k * v


@ti.func
def divide(k: ti.f32, v: vec3) -> vec3:
    """Divide every component of v by k."""
    return v / k


@ti.func
def dot(a: vec3, b: vec3) -> ti.f32:
    """Compute the dot product of two vectors."""
    return a.x * b.x + a.y * b.y + a.z * b.z


@ti.func
def length_squared(v: vec3) -> ti.f32:
    """Compute the squared length of a vector."""
    return dot(v, v)


@ti.func
def length(v: vec3) -> ti.f32:
    """Compute the Euclidean length of a vector."""
    return ti.sqrt(dot(v, v))


@ti.func
def normalize(v: vec3) -> vec3:
    """Normalize a vector to unit length.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v. If v is zero-length,
        returns the zero vector.
    """
    magnitude = length(v)
    result = vec3(0.0, 0.0, 0.0)
    if magnitude > 0.0:
        result = divide(magnitude, v)
    return result


@ti.func
def reflect(incident: vec3, normal: vec3) -> vec3:
    """Mirror-reflect an incident direction about a unit normal.

    Computes incident + 2 * dot(-incident, normal) * normal, which is the
    usual I - 2(I . N)N.

    Args:
        incident: The incoming direction (pointing toward the surface).
        normal: The surface normal (unit length).

    Returns:
        The reflected direction.
    """
    return incident - 2.0 * dot(incident, normal) * normal


@ti.func
def near_zero(v: vec3) -> ti.i32:
    """Check if a vector is near zero in all components.

    Returns:
        1 if all components are near zero, 0 otherwise.
    """
    s = 1e-8
    return ti.abs(v.x) < s and ti.abs(v.y) < s and ti.abs(v.z) < s
