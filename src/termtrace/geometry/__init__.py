"""Geometry module for the sphere primitive.

Components:
    sphere: Sphere dataclass, hit record and ray-sphere intersection

Intersection routines are Taichi functions (@ti.func) called from the path
tracer kernels.
"""

from .sphere import HitRecord, Sphere, hit_sphere, make_miss_record, make_sphere

__all__ = [
    "Sphere",
    "HitRecord",
    "hit_sphere",
    "make_sphere",
    "make_miss_record",
]
