"""Unit tests for sphere intersection.

Tests cover:
- Ray hitting a sphere head-on and at a distance
- Ray missing a sphere
- Ray starting inside a sphere (near root behind the origin)
- Ray starting on the surface (t == 0)
- Tangent rays
- Hit point and normal geometry
"""

import math

import pytest
import taichi as ti


def _intersect(origin, direction, center, radius):
    """Run hit_sphere in a kernel and return (hit, t, point, normal)."""
    from termtrace.geometry.sphere import Sphere, hit_sphere, vec3

    hit = ti.field(dtype=ti.i32, shape=())
    t_val = ti.field(dtype=ti.f32, shape=())
    point = ti.field(dtype=ti.math.vec3, shape=())
    normal = ti.field(dtype=ti.math.vec3, shape=())

    @ti.kernel
    def test_kernel(o: vec3, d: vec3, c: vec3, r: ti.f32):
        sphere = Sphere(center=c, radius=r, reflectance=0.0)
        record = hit_sphere(o, d, sphere)
        hit[None] = record.hit
        t_val[None] = record.t
        point[None] = record.point
        normal[None] = record.normal

    test_kernel(
        vec3(*origin),
        vec3(*direction),
        vec3(*center),
        radius,
    )
    return hit[None], t_val[None], tuple(point[None]), tuple(normal[None])


class TestSphereBasics:
    """Tests for Sphere dataclass and basic operations."""

    def test_make_sphere(self):
        """Test make_sphere convenience function."""
        from termtrace.geometry.sphere import make_sphere, vec3

        center_result = ti.field(dtype=ti.math.vec3, shape=())
        radius_result = ti.field(dtype=ti.f32, shape=())
        reflectance_result = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            sphere = make_sphere(vec3(1.0, 2.0, 3.0), 0.5, 2.0)
            center_result[None] = sphere.center
            radius_result[None] = sphere.radius
            reflectance_result[None] = sphere.reflectance

        test_kernel()
        assert tuple(center_result[None]) == pytest.approx((1.0, 2.0, 3.0))
        assert radius_result[None] == pytest.approx(0.5)
        assert reflectance_result[None] == pytest.approx(2.0)


class TestSphereIntersection:
    """Tests for ray-sphere intersection."""

    def test_ray_toward_sphere_at_origin(self):
        """Ray from (0,0,-10) along +z vs sphere at origin r=4: hit at 6."""
        hit, t, point, normal = _intersect((0, 0, -10), (0, 0, 1), (0, 0, 0), 4.0)

        assert hit == 1
        assert t == pytest.approx(6.0, abs=1e-5)
        assert point == pytest.approx((0.0, 0.0, -4.0), abs=1e-5)
        assert normal == pytest.approx((0.0, 0.0, -1.0), abs=1e-5)

    def test_ray_past_distant_sphere(self):
        hit, _, _, _ = _intersect((0, 0, -10), (0, 0, 1), (100, 0, 0), 4.0)
        assert hit == 0

    def test_head_on_hit(self):
        """Origin, direction +z, sphere at (0,0,10) r=4: hit at t=6."""
        hit, t, point, normal = _intersect((0, 0, 0), (0, 0, 1), (0, 0, 10), 4.0)

        assert hit == 1
        assert t == pytest.approx(6.0, abs=1e-5)
        assert point == pytest.approx((0.0, 0.0, 6.0), abs=1e-5)
        assert normal == pytest.approx((0.0, 0.0, -1.0), abs=1e-5)

    def test_miss(self):
        """Ray pointing away from the sphere misses."""
        hit, _, _, _ = _intersect((0, 0, 0), (0, 1, 0), (0, 0, 10), 4.0)
        assert hit == 0

    def test_miss_parallel_offset(self):
        hit, _, _, _ = _intersect((5, 0, 0), (0, 0, 1), (0, 0, 10), 4.0)
        assert hit == 0

    def test_sphere_behind_ray_is_rejected(self):
        """A sphere entirely behind the origin is not hit."""
        hit, _, _, _ = _intersect((0, 0, 0), (0, 0, -1), (0, 0, 10), 4.0)
        assert hit == 0

    def test_origin_inside_sphere_is_rejected(self):
        """The near root lies behind an origin inside the sphere, so no hit."""
        hit, _, _, _ = _intersect((0, 0, 10), (0, 0, 1), (0, 0, 10), 4.0)
        assert hit == 0

    def test_origin_on_surface_hits_at_zero(self):
        """An origin on the near surface gives a valid hit with t == 0."""
        hit, t, point, _ = _intersect((0, 0, 6), (0, 0, 1), (0, 0, 10), 4.0)

        assert hit == 1
        assert t == pytest.approx(0.0, abs=1e-5)
        assert point == pytest.approx((0.0, 0.0, 6.0), abs=1e-5)

    def test_tangent_ray_hits(self):
        """A ray grazing the sphere (d == radius) counts as a hit."""
        hit, t, point, normal = _intersect((4, 0, 0), (0, 0, 1), (0, 0, 10), 4.0)

        assert hit == 1
        assert t == pytest.approx(10.0, abs=1e-4)
        assert point == pytest.approx((4.0, 0.0, 10.0), abs=1e-4)
        assert normal == pytest.approx((1.0, 0.0, 0.0), abs=1e-4)

    @pytest.mark.parametrize(
        "origin,direction,center,radius",
        [
            ((0, 0, 0), (0, 0, 1), (0.5, -0.3, 10), 4.0),
            ((0, 1, -3), (0.6, 0.0, 0.8), (5, 0, 5), 3.0),
            ((2, 2, 2), (-0.57735, -0.57735, -0.57735), (-3, -3, -3), 1.5),
            ((0, 0, 0), (0, -1, 0), (0, -1200, 0), 1000.0),
        ],
    )
    def test_hit_point_on_surface(self, origin, direction, center, radius):
        """Hit points lie on the surface, with unit outward normals."""
        hit, t, point, normal = _intersect(origin, direction, center, radius)

        assert hit == 1
        assert t >= 0.0
        dist = math.dist(point, center)
        assert dist == pytest.approx(radius, rel=1e-4)
        assert math.hypot(*normal) == pytest.approx(1.0, abs=1e-4)
        expected = [(p - c) / radius for p, c in zip(point, center)]
        assert normal == pytest.approx(tuple(expected), abs=1e-4)

    def test_hit_point_matches_ray(self):
        """The reported point is origin + t * direction."""
        origin = (0.0, 1.0, -3.0)
        direction = (0.6, 0.0, 0.8)
        hit, t, point, _ = _intersect(origin, direction, (5, 1, 5), 3.0)

        assert hit == 1
        expected = tuple(o + t * d for o, d in zip(origin, direction))
        assert point == pytest.approx(expected, abs=1e-4)

    def test_slightly_negative_root_clamped_to_origin(self):
        """A near root just behind the origin is a hit at t = 0 at the origin."""
        hit, t, point, _ = _intersect((0, 0, 6.00005), (0, 0, 1), (0, 0, 10), 4.0)

        assert hit == 1
        assert t == 0.0
        assert point == pytest.approx((0.0, 0.0, 6.00005), abs=1e-6)

    def test_inward_rays_from_surface_always_hit(self):
        """Rays leaving a computed hit point into the sphere hit it again at t = 0."""
        from termtrace.core.ray import normalize
        from termtrace.geometry.sphere import Sphere, hit_sphere, vec3

        n = 1000
        hits = ti.field(dtype=ti.i32, shape=n)
        t_vals = ti.field(dtype=ti.f32, shape=n)

        @ti.kernel
        def test_kernel():
            sphere = Sphere(center=vec3(0.0, 0.0, 10.0), radius=4.0, reflectance=0.0)
            for i in range(n):
                # Primary rays fanned across the sphere's visible disc
                u = (ti.cast(i % 40, ti.f32) - 19.5) * 0.009
                v = (ti.cast(i // 40, ti.f32) - 12.0) * 0.014
                primary = hit_sphere(vec3(0.0, 0.0, 0.0), normalize(vec3(u, v, 1.0)), sphere)
                inward = normalize(sphere.center - primary.point + vec3(0.3, -0.2, 0.1))
                record = hit_sphere(primary.point, inward, sphere)
                hits[i] = primary.hit * record.hit
                t_vals[i] = record.t

        test_kernel()
        assert hits.to_numpy().sum() == n
        assert abs(t_vals.to_numpy()).max() < 1e-3
