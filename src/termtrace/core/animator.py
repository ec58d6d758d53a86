"""Animation driver: render a scene over simulated time.

The Animator owns the time loop. Before each frame it hands the scene and
the current simulated time to an update function (which moves lights), then
renders the frame and returns a copy of the frame buffer. The renderer
itself knows nothing about time.

Supports:
- Rendering a single frame at a given time
- Generator-based iteration over all frames
- Callback-driven runs with frame pacing

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from termtrace.core.animator import Animator
    >>> from termtrace.core.settings import AnimationSettings, RenderSettings
    >>> from termtrace.preview.terminal import draw_frame
    >>> from termtrace.scene.light_show import create_light_show_scene, update_light_show
    >>>
    >>> scene, camera = create_light_show_scene()
    >>> animator = Animator(scene, camera, RenderSettings(), update=update_light_show)
    >>> animator.run(AnimationSettings(), callback=lambda t, frame: draw_frame(frame))
"""

import logging
import time
from collections.abc import Callable, Generator

import numpy as np
import numpy.typing as npt

from termtrace.camera.angular import AngularCamera, setup_camera
from termtrace.core.integrator import get_frame_numpy, render_frame, setup_render_target
from termtrace.core.settings import AnimationSettings, RenderSettings
from termtrace.scene.manager import SceneManager

logger = logging.getLogger(__name__)

# Update function: receives (scene, simulated_time) and mutates the scene
SceneUpdate = Callable[[SceneManager, float], None]

# Frame callback: receives (simulated_time, frame)
FrameCallback = Callable[[float, npt.NDArray[np.float32]], None]


class Animator:
    """Renders successive frames of an animated scene.

    Attributes:
        scene: The scene being animated.
        camera: The camera the frames are rendered from.
        settings: Render settings used for every frame.
    """

    def __init__(
        self,
        scene: SceneManager,
        camera: AngularCamera,
        settings: RenderSettings,
        update: SceneUpdate | None = None,
    ) -> None:
        """Set up the camera and frame buffer.

        Args:
            scene: The scene to render. Mutated by `update` between frames.
            camera: Camera configuration.
            settings: Render settings (frame size, samples, bounces, seed).
            update: Optional function moving scene objects for a given time.
                If None, the scene stays static.
        """
        self.scene = scene
        self.camera = camera
        self.settings = settings
        self._update = update
        self._frame_count = 0

        setup_camera(camera)
        setup_render_target(settings.width, settings.height)

    @property
    def frame_count(self) -> int:
        """Number of frames rendered so far."""
        return self._frame_count

    def render_frame(self, sim_time: float) -> npt.NDArray[np.float32]:
        """Update the scene for `sim_time` and render one frame.

        Returns:
            Frame brightness of shape (height, width), a copy that later
            frames will not overwrite.
        """
        if self._update is not None:
            self._update(self.scene, sim_time)

        start = time.perf_counter()
        render_frame(self.settings)
        frame = get_frame_numpy()
        self._frame_count += 1

        logger.debug(
            "Frame %d at t=%.3f rendered in %.3fs",
            self._frame_count,
            sim_time,
            time.perf_counter() - start,
        )
        return frame

    def frames(
        self,
        animation: AnimationSettings,
    ) -> Generator[tuple[float, npt.NDArray[np.float32]], None, None]:
        """Render every frame of an animation, yielding as they complete.

        Sleeps `animation.frame_delay` seconds after each yielded frame.

        Yields:
            Tuple of (simulated_time, frame).
        """
        times = animation.times()
        logger.info(
            "Animating %d frames (%dx%d, %d samples, %d bounces)",
            len(times),
            self.settings.width,
            self.settings.height,
            self.settings.samples,
            self.settings.bounces,
        )
        for sim_time in times:
            yield sim_time, self.render_frame(sim_time)
            if animation.frame_delay > 0.0:
                time.sleep(animation.frame_delay)

    def run(
        self,
        animation: AnimationSettings,
        callback: FrameCallback | None = None,
    ) -> int:
        """Render a whole animation, passing each frame to a callback.

        Args:
            animation: Time range and pacing.
            callback: Called with (simulated_time, frame) after each frame.

        Returns:
            The number of frames rendered.
        """
        rendered = 0
        for sim_time, frame in self.frames(animation):
            if callback is not None:
                callback(sim_time, frame)
            rendered += 1
        return rendered

    def __repr__(self) -> str:
        return (
            f"Animator(width={self.settings.width}, height={self.settings.height}, "
            f"frames={self.frame_count})"
        )
