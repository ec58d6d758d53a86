"""Render and animation settings.

Both dataclasses validate themselves on construction so that a bad value
fails before any kernel is launched.
"""

from dataclasses import dataclass

# Maximum supported frame dimensions (frame buffer is preallocated)
MAX_IMAGE_WIDTH = 1024
MAX_IMAGE_HEIGHT = 1024

MAX_SEED = 2**31 - 1


@dataclass(frozen=True)
class RenderSettings:
    """Parameters for rendering one frame.

    Defaults match a full-width terminal: 158 columns by 42 rows.

    Attributes:
        width: Frame width in pixels (terminal columns).
        height: Frame height in pixels (terminal rows).
        samples: Maximum trials per pixel.
        bounces: Maximum path segments per trial.
        seed: Seed of the random streams, in [0, 2**31 - 1].
    """

    width: int = 158
    height: int = 42
    samples: int = 500
    bounces: int = 5
    seed: int = 0

    def __post_init__(self) -> None:
        for name in ("width", "height", "samples", "bounces"):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")
        if self.width > MAX_IMAGE_WIDTH or self.height > MAX_IMAGE_HEIGHT:
            raise ValueError(
                f"Image dimensions ({self.width}x{self.height}) exceed maximum supported "
                f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
            )
        if not 0 <= self.seed <= MAX_SEED:
            raise ValueError(f"seed must be in [0, {MAX_SEED}], got {self.seed}")


@dataclass(frozen=True)
class AnimationSettings:
    """Simulated time range and pacing of an animation.

    Frames are rendered at start_time + i * time_step for every i where that
    time is below end_time.

    Attributes:
        start_time: Simulated time of the first frame.
        end_time: Exclusive upper bound of simulated time.
        time_step: Simulated time between frames (positive).
        frame_delay: Wall-clock seconds to pause after each frame.
    """

    start_time: float = 0.0
    end_time: float = 20.0
    time_step: float = 0.1
    frame_delay: float = 0.001

    def __post_init__(self) -> None:
        if self.time_step <= 0.0:
            raise ValueError(f"time_step must be positive, got {self.time_step}")
        if self.frame_delay < 0.0:
            raise ValueError(f"frame_delay must be non-negative, got {self.frame_delay}")

    def times(self) -> list[float]:
        """Simulated times of every frame, in order."""
        result = []
        i = 0
        while True:
            t = self.start_time + i * self.time_step
            if t >= self.end_time:
                break
            result.append(t)
            i += 1
        return result
