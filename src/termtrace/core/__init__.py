"""Core rendering module.

Components:
    ray: Ray data structure and vector algebra
    sampler: Seedable counter-based random streams
    settings: Render and animation settings
    integrator: Path tracer kernels and frame buffer
    animator: Time loop driving the renderer

Note: integrator and animator are NOT imported here so that importing the
vector helpers does not allocate the frame buffer fields. Import them
directly from termtrace.core.integrator or termtrace.core.animator.
"""

from .ray import (
    Ray,
    add,
    divide,
    dot,
    length,
    length_squared,
    make_ray,
    near_zero,
    normalize,
    ray_at,
    reflect,
    scale,
    subtract,
    vec3,
)
from .settings import MAX_IMAGE_HEIGHT, MAX_IMAGE_WIDTH, AnimationSettings, RenderSettings

__all__ = [
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "add",
    "subtract",
    "scale",
    "divide",
    "dot",
    "length",
    "length_squared",
    "normalize",
    "reflect",
    "near_zero",
    "RenderSettings",
    "AnimationSettings",
    "MAX_IMAGE_WIDTH",
    "MAX_IMAGE_HEIGHT",
]
