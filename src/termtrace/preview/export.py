"""Image export utilities for rendered frames.

Frames are written as 8-bit grayscale PNGs via Pillow, one pixel per
terminal cell.

Example:
    >>> from termtrace.preview.export import save_png
    >>> save_png(frame, "frame.png")
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from termtrace.preview.display import NOMINAL_MAX_BRIGHTNESS, normalize_frame


def frame_to_uint8(
    frame: npt.NDArray[np.floating],
    *,
    max_brightness: float = NOMINAL_MAX_BRIGHTNESS,
    gamma: float = 1.0,
) -> npt.NDArray[np.uint8]:
    """Convert a brightness frame to an 8-bit grayscale array.

    Returns:
        Array of shape (height, width) with dtype uint8.
    """
    image = normalize_frame(frame, max_brightness=max_brightness, gamma=gamma)
    return np.round(image * 255.0).astype(np.uint8)


def save_png(
    frame: npt.NDArray[np.floating],
    filepath: str | Path,
    *,
    max_brightness: float = NOMINAL_MAX_BRIGHTNESS,
    gamma: float = 1.0,
    scale: int = 1,
) -> None:
    """Save a frame as a grayscale PNG file.

    Args:
        frame: Frame brightness of shape (height, width).
        filepath: Output file path (should end in .png).
        max_brightness: Brightness mapped to white.
        gamma: Gamma correction value.
        scale: Integer upscaling factor (nearest neighbour).

    Raises:
        ValueError: If the frame is not 2D or scale is not positive.
    """
    frame = np.asarray(frame)
    if frame.ndim != 2:
        raise ValueError(f"Frame must be 2D (height, width), got shape {frame.shape}")
    if scale < 1:
        raise ValueError(f"scale must be at least 1, got {scale}")

    image_uint8 = frame_to_uint8(frame, max_brightness=max_brightness, gamma=gamma)
    if scale > 1:
        image_uint8 = np.kron(image_uint8, np.ones((scale, scale), dtype=np.uint8))

    pil_image = PILImage.fromarray(image_uint8)
    pil_image.save(str(filepath))
