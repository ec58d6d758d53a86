"""Stochastic path tracer and frame buffer.

This module implements the rendering kernel. For every pixel it fires up to
`samples` trials from the camera; each trial follows a light path for up to
`bounces` segments through the scene:

    Light      the closest hit is a light: the trial is worth its brightness
    Miss       nothing is hit: the trial is worth 0
    Bounce     an opaque sphere is hit: mirror-reflect, add a diffuse
               perturbation scaled by 1 / (1 + reflectance), continue
    Exhausted  the bounce budget runs out: the trial is worth 0

Sampling stops early as soon as a trial finishes after a single segment.
Sky pixels that miss everything and pixels looking straight into a light
therefore cost one trial instead of the full budget, and their value is that
one trial. Every other pixel averages all of its trials. Because primary
rays are not jittered, whether a pixel exits early is decided by its first
trial.

Pixels are traced in parallel; randomness comes from per-(pixel, sample)
hash streams, so a given seed always produces the same frame.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from termtrace.core.integrator import render_frame, get_frame_numpy
    >>> from termtrace.core.settings import RenderSettings
    >>> from termtrace.scene.light_show import create_light_show_scene
    >>> from termtrace.camera.angular import setup_camera
    >>>
    >>> scene, camera = create_light_show_scene()
    >>> setup_camera(camera)
    >>> settings = RenderSettings(width=80, height=24, samples=100)
    >>> render_frame(settings)
    >>> frame = get_frame_numpy()  # shape (24, 80)
"""

import logging

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from termtrace.camera.angular import get_primary_ray
from termtrace.core.ray import near_zero, normalize, reflect
from termtrace.core.sampler import sample_perturbation
from termtrace.core.settings import MAX_IMAGE_HEIGHT, MAX_IMAGE_WIDTH, RenderSettings
from termtrace.scene.intersection import intersect_scene

logger = logging.getLogger(__name__)

# Type alias for 3D vectors
vec3 = tm.vec3

# =============================================================================
# Render Target (Frame Buffer)
# =============================================================================

# Image dimensions (actual active size)
_image_width = ti.field(dtype=ti.i32, shape=())
_image_height = ti.field(dtype=ti.i32, shape=())

# Brightness per pixel, indexed [x, y] (preallocated to max size)
_frame = ti.field(dtype=ti.f32, shape=(MAX_IMAGE_WIDTH, MAX_IMAGE_HEIGHT))

# Trials actually taken per pixel in the last frame
_samples_taken = ti.field(dtype=ti.i32, shape=(MAX_IMAGE_WIDTH, MAX_IMAGE_HEIGHT))

# Flag to track if render target is initialized
_render_target_initialized = ti.field(dtype=ti.i32, shape=())


def setup_render_target(width: int, height: int) -> None:
    """Initialize the frame buffer for the given dimensions.

    The buffers are preallocated to MAX_IMAGE_WIDTH x MAX_IMAGE_HEIGHT to
    avoid Taichi kernel recompilation; this sets the active region and
    clears it.

    Args:
        width: Frame width in pixels.
        height: Frame height in pixels.

    Raises:
        ValueError: If a dimension is not positive or exceeds the maximum.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )

    _image_width[None] = width
    _image_height[None] = height
    _render_target_initialized[None] = 1
    clear_render_target()
    logger.debug("Render target set up at %dx%d", width, height)


def clear_render_target() -> None:
    """Clear the frame buffer to zero."""
    _frame.fill(0.0)
    _samples_taken.fill(0)


def get_image_dimensions() -> tuple[int, int]:
    """Get the current render target dimensions as (width, height)."""
    return int(_image_width[None]), int(_image_height[None])


def _check_render_target_initialized() -> None:
    """Check if render target is initialized and raise if not."""
    if _render_target_initialized[None] == 0:
        raise RuntimeError("Render target not set up. Call setup_render_target() first.")


def _check_settings_match(settings: RenderSettings) -> None:
    _check_render_target_initialized()
    width, height = get_image_dimensions()
    if (settings.width, settings.height) != (width, height):
        raise ValueError(
            f"Settings size {settings.width}x{settings.height} does not match render "
            f"target {width}x{height}"
        )


# =============================================================================
# Path Tracing Core
# =============================================================================


@ti.func
def trace_path(
    origin: vec3,
    direction: vec3,
    bounces: ti.i32,
    seed: ti.i32,
    pixel: ti.i32,
    sample: ti.i32,
):
    """Trace one light path (one trial) through the scene.

    Args:
        origin: Starting point of the path.
        direction: Starting direction (unit length).
        bounces: Maximum number of segments.
        seed: Render seed.
        pixel: Linear pixel index, selects the random stream.
        sample: Trial index, selects the random stream.

    Returns:
        A tuple (value, segments): the trial's brightness and how many
        segments were traced before it ended.
    """
    ray_origin = origin
    ray_direction = direction
    value = 0.0
    segments = 0

    # Active flag for path continuation
    active = 1

    for bounce in range(bounces):
        if active == 1:
            segments += 1
            hit_record = intersect_scene(ray_origin, ray_direction)

            if hit_record.hit == 0:
                # Miss
                active = 0
            elif hit_record.is_light == 1:
                value = hit_record.brightness
                active = 0
            else:
                reflected = reflect(ray_direction, hit_record.normal)
                perturbation = sample_perturbation(
                    seed, pixel, sample, bounce, hit_record.reflectance
                )
                scattered = normalize(reflected + perturbation)
                if near_zero(scattered):
                    # Perturbation cancelled the reflection
                    active = 0
                ray_origin = hit_record.point
                ray_direction = scattered

    return value, segments


@ti.func
def render_pixel_impl(
    x: ti.i32,
    y: ti.i32,
    width: ti.i32,
    height: ti.i32,
    samples: ti.i32,
    bounces: ti.i32,
    seed: ti.i32,
):
    """Estimate the brightness of one pixel.

    Returns:
        A tuple (value, taken): the averaged brightness and the number of
        trials actually taken.
    """
    ray = get_primary_ray(x, y, width, height)
    pixel = y * width + x

    total = 0.0
    taken = 0
    sampling = 1

    for sample in range(samples):
        if sampling == 1:
            value, segments = trace_path(ray.origin, ray.direction, bounces, seed, pixel, sample)
            total += value
            taken += 1
            if segments == 1:
                # Early exit: resolved on the first segment
                sampling = 0

    return total / ti.cast(taken, ti.f32), taken


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_frame(
    width: ti.i32,
    height: ti.i32,
    samples: ti.i32,
    bounces: ti.i32,
    seed: ti.i32,
):
    """Render every pixel of the frame, overwriting the buffer."""
    for x, y in ti.ndrange(width, height):
        value, taken = render_pixel_impl(x, y, width, height, samples, bounces, seed)

        # Keep NaN/Inf out of the frame buffer
        if tm.isnan(value) or tm.isinf(value):
            value = 0.0

        _frame[x, y] = value
        _samples_taken[x, y] = taken


@ti.kernel
def _render_single_pixel(
    x: ti.i32,
    y: ti.i32,
    width: ti.i32,
    height: ti.i32,
    samples: ti.i32,
    bounces: ti.i32,
    seed: ti.i32,
) -> tm.vec2:
    value, taken = render_pixel_impl(x, y, width, height, samples, bounces, seed)
    return tm.vec2(value, ti.cast(taken, ti.f32))


@ti.kernel
def _trace_single_sample(
    x: ti.i32,
    y: ti.i32,
    width: ti.i32,
    height: ti.i32,
    sample: ti.i32,
    bounces: ti.i32,
    seed: ti.i32,
) -> tm.vec2:
    ray = get_primary_ray(x, y, width, height)
    value, segments = trace_path(
        ray.origin, ray.direction, bounces, seed, y * width + x, sample
    )
    return tm.vec2(value, ti.cast(segments, ti.f32))


# =============================================================================
# Public Rendering API
# =============================================================================


def render_frame(settings: RenderSettings) -> None:
    """Render a full frame into the frame buffer.

    Every pixel is recomputed; nothing from the previous frame survives.

    Args:
        settings: Render settings; width and height must match the render
            target.

    Raises:
        RuntimeError: If render target has not been set up.
        ValueError: If the settings size differs from the render target.
    """
    _check_settings_match(settings)
    _render_frame(
        settings.width,
        settings.height,
        settings.samples,
        settings.bounces,
        settings.seed,
    )


def render_pixel(x: int, y: int, settings: RenderSettings) -> tuple[float, int]:
    """Render a single pixel and return (value, trials_taken).

    This is a Python-callable function for testing. It computes exactly
    what render_frame() stores for the same pixel.
    """
    _check_settings_match(settings)
    result = _render_single_pixel(
        x,
        y,
        settings.width,
        settings.height,
        settings.samples,
        settings.bounces,
        settings.seed,
    )
    return float(result[0]), int(round(float(result[1])))


def trace_sample(x: int, y: int, sample: int, settings: RenderSettings) -> tuple[float, int]:
    """Trace one trial of a pixel and return (value, segments).

    Uses the same random stream as trial `sample` inside render_pixel().
    """
    _check_settings_match(settings)
    result = _trace_single_sample(
        x,
        y,
        settings.width,
        settings.height,
        sample,
        settings.bounces,
        settings.seed,
    )
    return float(result[0]), int(round(float(result[1])))


def get_frame_numpy() -> npt.NDArray[np.float32]:
    """Get the frame buffer as a NumPy array.

    Values are raw brightness (not clamped). Row 0 is the first row printed.

    Returns:
        NumPy array of shape (height, width) with dtype float32.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()
    width, height = get_image_dimensions()
    frame = _frame.to_numpy()[:width, :height]
    return np.ascontiguousarray(frame.T, dtype=np.float32)


def get_samples_taken_numpy() -> npt.NDArray[np.int32]:
    """Get the number of trials taken per pixel in the last frame.

    Returns:
        NumPy array of shape (height, width) with dtype int32.
    """
    _check_render_target_initialized()
    width, height = get_image_dimensions()
    taken = _samples_taken.to_numpy()[:width, :height]
    return np.ascontiguousarray(taken.T, dtype=np.int32)
