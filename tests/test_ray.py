"""Unit tests for the ray module.

Tests cover:
- Ray dataclass and ray_at function
- Vector helpers (add, subtract, scale, divide, dot, length)
- normalize, including the zero-vector policy
- reflect and near_zero
"""

import pytest
import taichi as ti


class TestRayBasics:
    """Tests for Ray dataclass and basic operations."""

    def test_ray_at_origin(self):
        """Test ray_at returns origin when t=0."""
        from termtrace.core.ray import Ray, ray_at, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            ray = Ray(origin=vec3(1.0, 2.0, 3.0), direction=vec3(0.0, 0.0, 1.0))
            result[None] = ray_at(ray, 0.0)

        test_kernel()
        r = result[None]
        assert r[0] == pytest.approx(1.0)
        assert r[1] == pytest.approx(2.0)
        assert r[2] == pytest.approx(3.0)

    def test_ray_at_positive_t(self):
        """Test ray_at computes the point at distance t."""
        from termtrace.core.ray import make_ray, ray_at, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            ray = make_ray(vec3(0.0, 1.0, -3.0), vec3(1.0, 0.0, 0.0))
            result[None] = ray_at(ray, 5.0)

        test_kernel()
        r = result[None]
        assert r[0] == pytest.approx(5.0)
        assert r[1] == pytest.approx(1.0)
        assert r[2] == pytest.approx(-3.0)


class TestVectorArithmetic:
    """Tests for the component-wise vector helpers."""

    def test_add_subtract_scale_divide(self):
        from termtrace.core.ray import add, divide, scale, subtract, vec3

        results = ti.field(dtype=ti.math.vec3, shape=4)

        @ti.kernel
        def test_kernel():
            a = vec3(1.0, 2.0, 3.0)
            b = vec3(4.0, -5.0, 6.0)
            results[0] = add(a, b)
            results[1] = subtract(a, b)
            results[2] = scale(2.0, a)
            results[3] = divide(2.0, b)

        test_kernel()
        assert tuple(results[0]) == pytest.approx((5.0, -3.0, 9.0))
        assert tuple(results[1]) == pytest.approx((-3.0, 7.0, -3.0))
        assert tuple(results[2]) == pytest.approx((2.0, 4.0, 6.0))
        assert tuple(results[3]) == pytest.approx((2.0, -2.5, 3.0))

    def test_dot_and_length(self):
        from termtrace.core.ray import dot, length, length_squared, vec3

        results = ti.field(dtype=ti.f32, shape=3)

        @ti.kernel
        def test_kernel():
            v = vec3(2.0, 3.0, 6.0)
            results[0] = dot(v, vec3(1.0, -1.0, 1.0))
            results[1] = length_squared(v)
            results[2] = length(v)

        test_kernel()
        assert results[0] == pytest.approx(5.0)
        assert results[1] == pytest.approx(49.0)
        assert results[2] == pytest.approx(7.0)


class TestNormalize:
    """Tests for normalize."""

    @pytest.mark.parametrize(
        "vector",
        [(3.0, 0.0, 0.0), (1.0, 2.0, 2.0), (-0.001, 0.002, 0.0005), (100.0, -250.0, 40.0)],
    )
    def test_normalize_unit_length(self, vector):
        """Normalized non-zero vectors have length 1 within tolerance."""
        from termtrace.core.ray import length, normalize, vec3

        result = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel(x: ti.f32, y: ti.f32, z: ti.f32):
            result[None] = length(normalize(vec3(x, y, z)))

        test_kernel(*vector)
        assert result[None] == pytest.approx(1.0, abs=1e-5)

    def test_normalize_keeps_direction(self):
        from termtrace.core.ray import normalize, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = normalize(vec3(0.0, 3.0, 4.0))

        test_kernel()
        assert tuple(result[None]) == pytest.approx((0.0, 0.6, 0.8), abs=1e-6)

    def test_normalize_zero_vector_returns_zero(self):
        """The zero vector normalizes to the zero vector instead of NaN."""
        from termtrace.core.ray import normalize, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = normalize(vec3(0.0, 0.0, 0.0))

        test_kernel()
        assert tuple(result[None]) == (0.0, 0.0, 0.0)


class TestReflect:
    """Tests for reflect and near_zero."""

    def test_reflect_head_on(self):
        """A ray hitting a surface head-on comes straight back."""
        from termtrace.core.ray import reflect, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = reflect(vec3(0.0, 0.0, 1.0), vec3(0.0, 0.0, -1.0))

        test_kernel()
        assert tuple(result[None]) == pytest.approx((0.0, 0.0, -1.0))

    def test_reflect_at_45_degrees(self):
        from termtrace.core.ray import normalize, reflect, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            incident = normalize(vec3(1.0, -1.0, 0.0))
            result[None] = reflect(incident, vec3(0.0, 1.0, 0.0))

        test_kernel()
        r = result[None]
        assert r[0] == pytest.approx(2**-0.5, abs=1e-6)
        assert r[1] == pytest.approx(2**-0.5, abs=1e-6)
        assert r[2] == pytest.approx(0.0, abs=1e-6)

    def test_near_zero(self):
        from termtrace.core.ray import near_zero, vec3

        results = ti.field(dtype=ti.i32, shape=2)

        @ti.kernel
        def test_kernel():
            results[0] = near_zero(vec3(1e-10, -1e-10, 0.0))
            results[1] = near_zero(vec3(1e-10, 0.01, 0.0))

        test_kernel()
        assert results[0] == 1
        assert results[1] == 0
