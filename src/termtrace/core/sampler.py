"""Seedable random streams for the path tracer.

Random numbers are derived from a counter-based integer hash instead of a
stateful generator. Each draw is keyed by (seed, pixel, sample, dimension),
so every pixel and every sample owns an independent stream. Results are the
same no matter how Taichi schedules pixels across threads, and the same seed
always reproduces the same frame.

The hash is Thomas Wang's 32-bit integer hash applied in a chain, one link
per key component.

Example:
    >>> @ti.kernel
    ... def draw() -> ti.f32:
    ...     return uniform_symmetric(7, 0, 0, 0)
"""

import taichi as ti
import taichi.math as tm

from termtrace.core.ray import normalize

vec3 = tm.vec3

# Random dimensions consumed per bounce (one per perturbation axis)
DIMENSIONS_PER_BOUNCE = 3

# 2^-24: maps the top 24 bits of a hash onto [0, 1)
_UNIT_SCALE = 1.0 / 16777216.0


@ti.func
def wang_hash(value: ti.u32) -> ti.u32:
    """Scramble a 32-bit unsigned integer.

    All arithmetic wraps modulo 2^32.
    """
    h = value
    h = (h ^ ti.cast(61, ti.u32)) ^ (h >> ti.cast(16, ti.u32))
    h = h * ti.cast(9, ti.u32)
    h = h ^ (h >> ti.cast(4, ti.u32))
    h = h * ti.cast(668265261, ti.u32)
    h = h ^ (h >> ti.cast(15, ti.u32))
    return h


@ti.func
def stream_hash(seed: ti.i32, pixel: ti.i32, sample: ti.i32, dimension: ti.i32) -> ti.u32:
    """Hash a full stream key down to one 32-bit value."""
    h = wang_hash(ti.cast(seed, ti.u32))
    h = wang_hash(h + ti.cast(pixel, ti.u32))
    h = wang_hash(h + ti.cast(sample, ti.u32))
    h = wang_hash(h + ti.cast(dimension, ti.u32))
    return h


@ti.func
def uniform(seed: ti.i32, pixel: ti.i32, sample: ti.i32, dimension: ti.i32) -> ti.f32:
    """Uniform random number in [0, 1) for the given stream key."""
    h = stream_hash(seed, pixel, sample, dimension)
    return ti.cast(h >> ti.cast(8, ti.u32), ti.f32) * _UNIT_SCALE


@ti.func
def uniform_symmetric(seed: ti.i32, pixel: ti.i32, sample: ti.i32, dimension: ti.i32) -> ti.f32:
    """Uniform random number in [-1, 1) for the given stream key."""
    return 2.0 * uniform(seed, pixel, sample, dimension) - 1.0


@ti.func
def random_in_cube(seed: ti.i32, pixel: ti.i32, sample: ti.i32, bounce: ti.i32) -> vec3:
    """Random point uniformly distributed in the cube [-1, 1)^3.

    Each bounce consumes DIMENSIONS_PER_BOUNCE dimensions of the stream.
    """
    base = bounce * DIMENSIONS_PER_BOUNCE
    return vec3(
        uniform_symmetric(seed, pixel, sample, base),
        uniform_symmetric(seed, pixel, sample, base + 1),
        uniform_symmetric(seed, pixel, sample, base + 2),
    )


@ti.func
def sample_perturbation(
    seed: ti.i32,
    pixel: ti.i32,
    sample: ti.i32,
    bounce: ti.i32,
    reflectance: ti.f32,
) -> vec3:
    """Diffuse roughness offset added to a mirror-reflected direction.

    A point drawn uniformly in the cube is normalized and scaled by
    1 / (1 + reflectance), so higher reflectance gives a tighter scatter
    cone. A zero-length draw normalizes to the zero vector, which leaves
    the mirror direction untouched.

    Args:
        seed: Render seed.
        pixel: Linear pixel index (y * width + x).
        sample: Trial index within the pixel.
        bounce: Bounce index within the trial.
        reflectance: Reflectance of the surface that was hit (>= 0).

    Returns:
        The perturbation vector, with length 1 / (1 + reflectance) or zero.
    """
    return normalize(random_in_cube(seed, pixel, sample, bounce)) * (1.0 / (1.0 + reflectance))
